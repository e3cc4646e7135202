"""Relevance scoring for court results."""

import re

from .models import Source

# Queries citing a repetitive-appeal topic ("Tema 1.123", "tema 45") get a flat bonus
THEME_PATTERN = re.compile(r"tema\s*\d+", re.IGNORECASE)
THEME_BONUS = 0.2


def theme_bonus(query: str) -> float:
    return THEME_BONUS if THEME_PATTERN.search(query) else 0.0


def score(source: Source, source_rank: int, query: str) -> float:
    """Score a result from its rank within the court, the court category and the query.

    Args:
        source: Court that returned the result
        source_rank: 1-based position of the result in the court's own list
        query: Search text

    Returns:
        ``(1 / source_rank) * boost + theme bonus``
    """
    if source_rank < 1:
        raise ValueError(f"source_rank must be >= 1, got {source_rank}")
    return (1 / source_rank) * source.category.boost + theme_bonus(query)

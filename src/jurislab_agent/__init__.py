"""Jurisprudence search across Brazilian courts with bounded fan-out."""

from .aggregator import AggregateOptions, aggregate
from .config import settings
from .exceptions import CatalogError, ConfigurationError, InvalidQueryError, JurisLabError, NoSourcesSelectedError, SourceSearchError
from .models import AggregatedResult, Category, ResultItem, Source, SourceOutcome
from .prioritizer import prioritize
from .scoring import score
from .service import SearchRequest, SearchResponse, search_jurisprudence

__all__ = [
    "AggregateOptions",
    "AggregatedResult",
    "CatalogError",
    "Category",
    "ConfigurationError",
    "InvalidQueryError",
    "JurisLabError",
    "NoSourcesSelectedError",
    "ResultItem",
    "SearchRequest",
    "SearchResponse",
    "Source",
    "SourceOutcome",
    "SourceSearchError",
    "aggregate",
    "prioritize",
    "score",
    "search_jurisprudence",
    "settings",
]

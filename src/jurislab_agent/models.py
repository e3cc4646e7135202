"""Data models for courts, search outcomes and aggregated results.

Courts are grouped into a closed set of categories. Each category carries a
priority rank (lower is searched first) and a boost multiplier used when
scoring results, since decisions from higher courts are treated as more
authoritative.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class Category(str, Enum):
    """Court category."""

    SUPERIOR = "superior"
    FEDERAL = "federal"
    TRABALHO = "trabalho"
    ESTADUAL = "estadual"

    @property
    def priority(self) -> int:
        return CATEGORY_PROFILES[self].priority

    @property
    def boost(self) -> float:
        return CATEGORY_PROFILES[self].boost

    @property
    def label(self) -> str:
        return CATEGORY_PROFILES[self].label

    @classmethod
    def parse(cls, value: Any) -> "Category | None":
        """Return the category named by ``value`` or None when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class CategoryProfile:
    """Ranking attributes of a category."""

    priority: int
    boost: float
    label: str


CATEGORY_PROFILES: dict[Category, CategoryProfile] = {
    Category.SUPERIOR: CategoryProfile(priority=1, boost=1.4, label="Cortes Superiores"),
    Category.FEDERAL: CategoryProfile(priority=2, boost=1.2, label="Tribunais Regionais Federais"),
    Category.TRABALHO: CategoryProfile(priority=3, boost=1.1, label="Tribunais Regionais do Trabalho"),
    Category.ESTADUAL: CategoryProfile(priority=4, boost=1.0, label="Tribunais de Justiça"),
}

# Searched when the request names no category
DEFAULT_CATEGORIES: tuple[Category, ...] = (Category.SUPERIOR, Category.FEDERAL)


@dataclass(frozen=True)
class Source:
    """A court that can be searched."""

    id: str
    name: str
    category: Category
    search_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "search_url": self.search_url,
        }


@dataclass
class ResultItem:
    """A single decision returned by a court, ranked within that court's list."""

    url: str
    title: str
    snippet: str
    rank: int  # 1-based position in the court's own result list
    published_at: str | None = None

    def __post_init__(self) -> None:
        if self.rank < 1:
            raise ValueError(f"rank must be >= 1, got {self.rank}")


@dataclass
class SourceOutcome:
    """What one court returned: items, or an error explaining why not."""

    items: list[ResultItem] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AggregatedResult:
    """A result item tagged with its court and relevance score."""

    court_id: str
    court_name: str
    url: str
    title: str
    snippet: str
    relevance_score: float
    published_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RunDiagnostics:
    """Timing and coverage of one search run."""

    elapsed_ms: int
    courts_consulted: list[str]
    query: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class AggregationReport:
    """Merged output of a fan-out run."""

    results: list[AggregatedResult]
    warnings: list[str]
    consulted: list[str]
    elapsed_ms: int

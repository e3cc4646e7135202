"""Contract between the aggregator and court search adapters."""

from typing import Protocol

from ..models import Source, SourceOutcome


class SourceSearcher(Protocol):
    """Searches a single court.

    Implementations either return a ``SourceOutcome`` (items, or an error
    message when the court answered but could not be used) or raise. The
    aggregator turns both failure shapes into a warning for that court.
    """

    async def __call__(self, source: Source, query: str, *, max_results: int) -> SourceOutcome: ...

"""Bounded fan-out over court searchers.

A fixed pool of workers pulls courts from a queue that is already in priority
order. Each worker searches one court at a time, so at most
``concurrency_limit`` searches are in flight and the next court is admitted as
soon as any search settles. Every court gets its own outcome slot; slots are
merged only after all workers have finished.
"""

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from .config import AggregatorSettings
from .exceptions import SourceSearchError
from .models import AggregatedResult, AggregationReport, Source, SourceOutcome
from .observability import get_run_logger
from .scoring import score
from .searchers.base import SourceSearcher

UNEXPECTED_FAILURE = "falha inesperada."
TIMEOUT_FAILURE = "tempo limite excedido."


@dataclass(frozen=True)
class AggregateOptions:
    """Limits for one fan-out run."""

    concurrency_limit: int = 6
    per_source_limit: int = 4
    total_limit: int = 60
    source_timeout: float | None = None

    def __post_init__(self) -> None:
        for name in ("concurrency_limit", "per_source_limit", "total_limit"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")
        if self.source_timeout is not None and self.source_timeout <= 0:
            raise ValueError("source_timeout must be positive")

    @classmethod
    def from_settings(cls, settings: AggregatorSettings) -> "AggregateOptions":
        return cls(
            concurrency_limit=settings.concurrency_limit,
            per_source_limit=settings.per_source_limit,
            total_limit=settings.total_limit,
            source_timeout=settings.source_timeout,
        )


@dataclass
class _Slot:
    """Settled outcome of one court, written only by the worker that admitted it."""

    results: list[AggregatedResult] = field(default_factory=list)
    warning: str | None = None


def _to_slot(source: Source, query: str, outcome: SourceOutcome, options: AggregateOptions, log: structlog.stdlib.BoundLogger) -> _Slot:
    if outcome.error:
        log.info("court_returned_error", error=outcome.error)
        return _Slot(warning=f"{source.name}: {outcome.error}")

    results = [
        AggregatedResult(
            court_id=source.id,
            court_name=source.name,
            url=item.url,
            title=item.title,
            snippet=item.snippet,
            published_at=item.published_at,
            relevance_score=score(source, item.rank, query),
        )
        for item in outcome.items[: options.per_source_limit]
    ]
    log.debug("court_search_completed", results=len(results))
    return _Slot(results=results)


async def _search_one(source: Source, query: str, searcher: SourceSearcher, options: AggregateOptions) -> _Slot:
    """Search a single court and convert every failure into a warning.

    Everything from the call to the scored results runs inside the same
    boundary, so a malformed outcome is reported like any other failure.
    """
    log = get_run_logger(__name__).bind(court_id=source.id, court=source.name)
    try:
        call = searcher(source, query, max_results=options.per_source_limit)
        if options.source_timeout is not None:
            outcome = await asyncio.wait_for(call, timeout=options.source_timeout)
        else:
            outcome = await call
        return _to_slot(source, query, outcome, options, log)
    except TimeoutError:
        log.warning("court_search_timed_out", timeout=options.source_timeout)
        return _Slot(warning=f"{source.name}: {TIMEOUT_FAILURE}")
    except SourceSearchError as e:
        log.warning("court_search_rejected", reason=str(e))
        return _Slot(warning=f"{source.name}: {e}")
    except Exception:
        log.exception("court_search_failed")
        return _Slot(warning=f"{source.name}: {UNEXPECTED_FAILURE}")


async def aggregate(
    sources: Sequence[Source],
    query: str,
    searcher: SourceSearcher,
    options: AggregateOptions | None = None,
) -> AggregationReport:
    """Search every source with bounded concurrency and merge the results.

    Args:
        sources: Courts in the order they should be admitted
        query: Validated, non-empty search text
        searcher: Adapter that searches one court
        options: Concurrency and result limits

    Returns:
        Results sorted by descending score and truncated to ``total_limit``,
        one warning per failed court, court names in admission order and the
        elapsed wall-clock time.
    """
    options = options or AggregateOptions()
    started_at = time.perf_counter()

    queue: asyncio.Queue[tuple[int, Source]] = asyncio.Queue()
    for entry in enumerate(sources):
        queue.put_nowait(entry)

    slots: list[_Slot] = [_Slot() for _ in sources]
    consulted: list[str] = []

    async def worker() -> None:
        while True:
            try:
                index, source = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            consulted.append(source.name)
            slots[index] = await _search_one(source, query, searcher, options)

    pool_size = min(options.concurrency_limit, len(sources))
    await asyncio.gather(*(worker() for _ in range(pool_size)))

    # Slots are in admission order, so equal scores keep that order after the stable sort
    merged = [result for slot in slots for result in slot.results]
    warnings = [slot.warning for slot in slots if slot.warning]
    merged.sort(key=lambda r: r.relevance_score, reverse=True)

    elapsed_ms = round((time.perf_counter() - started_at) * 1000)
    return AggregationReport(
        results=merged[: options.total_limit],
        warnings=warnings,
        consulted=consulted,
        elapsed_ms=elapsed_ms,
    )

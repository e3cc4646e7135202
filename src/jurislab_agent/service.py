"""Jurisprudence search entry point: validation, court selection and aggregation."""

import uuid
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .aggregator import AggregateOptions, aggregate
from .exceptions import InvalidQueryError, NoSourcesSelectedError
from .models import AggregatedResult, Category, RunDiagnostics, Source
from .observability import bind_run_context, clear_run_context, get_run_logger
from .prioritizer import effective_categories, prioritize, select_candidates
from .searchers.base import SourceSearcher

EMPTY_QUERY_MESSAGE = "Informe um termo ou tema de pesquisa."
NO_SOURCES_MESSAGE = "Nenhum tribunal selecionado para pesquisa."


class SearchRequest(BaseModel):
    """A search as submitted by a user.

    Unknown categories and non-string court ids are dropped rather than
    rejected; an empty query is reported by ``search_jurisprudence``.
    """

    query: str = ""
    categories: list[Category] = Field(default_factory=list)
    courts: list[str] = Field(default_factory=list, description="Court ids to search first")

    @field_validator("query", mode="before")
    @classmethod
    def _strip_query(cls, value: Any) -> str:
        if not isinstance(value, str):
            return ""
        return value.strip()

    @field_validator("categories", mode="before")
    @classmethod
    def _known_categories(cls, value: Any) -> list[Category]:
        if not isinstance(value, (list, tuple, set)):
            return []
        parsed = (Category.parse(item) for item in value)
        return [c for c in parsed if c is not None]

    @field_validator("courts", mode="before")
    @classmethod
    def _court_ids(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple, set)):
            return []
        return [item for item in value if isinstance(item, str)]


class SearchResponse(BaseModel):
    """Ranked results with run diagnostics. ``warnings`` is None when every court answered."""

    results: list[AggregatedResult]
    diagnostics: RunDiagnostics
    warnings: list[str] | None = None

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, exclude_none=True)


def resolve_sources(request: SearchRequest, catalog: Sequence[Source]) -> list[Source]:
    """Return the courts to search for ``request``, in admission order.

    Raises:
        NoSourcesSelectedError: If no catalog court belongs to the effective categories
    """
    candidates = select_candidates(catalog, effective_categories(request.categories))
    if not candidates:
        raise NoSourcesSelectedError(NO_SOURCES_MESSAGE)
    return prioritize(candidates, request.courts)


async def search_jurisprudence(
    request: SearchRequest,
    catalog: Sequence[Source],
    searcher: SourceSearcher,
    options: AggregateOptions | None = None,
) -> SearchResponse:
    """Search the selected courts and return merged, ranked results.

    Raises:
        InvalidQueryError: If the query is empty after trimming
        NoSourcesSelectedError: If no court is left to search
    """
    if not request.query:
        raise InvalidQueryError(EMPTY_QUERY_MESSAGE)

    sources = resolve_sources(request, catalog)

    bind_run_context(uuid.uuid4().hex, request.query)
    run_logger = get_run_logger(__name__)
    try:
        run_logger.info("search_started", courts=[s.id for s in sources])
        report = await aggregate(sources, request.query, searcher, options)
        run_logger.info(
            "search_completed",
            elapsed_ms=report.elapsed_ms,
            results=len(report.results),
            warnings=len(report.warnings),
        )
    finally:
        clear_run_context()

    return SearchResponse(
        results=report.results,
        diagnostics=RunDiagnostics(
            elapsed_ms=report.elapsed_ms,
            courts_consulted=report.consulted,
            query=request.query,
        ),
        warnings=report.warnings or None,
    )

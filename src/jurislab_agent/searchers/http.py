"""Court searcher for endpoints that answer search queries with JSON."""

import logging
from typing import Any

import httpx

from ..exceptions import SourceSearchError
from ..models import ResultItem, Source, SourceOutcome

logger = logging.getLogger(__name__)

NO_ENDPOINT = "endpoint de pesquisa não configurado."
CONNECTION_FAILURE = "falha de conexão."
INVALID_RESPONSE = "resposta inválida."

# Courts disagree on field names; first non-empty key wins
SNIPPET_KEYS = ("snippet", "content", "ementa")
PUBLISHED_KEYS = ("published_at", "publishedAt", "date")


def _first(row: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = row.get(key)
        if value:
            return str(value)
    return None


def parse_results(payload: Any, max_results: int) -> list[ResultItem]:
    """Turn a JSON search response into ranked items.

    The payload is either a list of rows or an object holding the rows under
    ``results`` or ``items``. Rows without a url are skipped; ranks follow the
    order of the rows that are kept.
    """
    if isinstance(payload, dict):
        rows = payload.get("results") or payload.get("items") or []
    else:
        rows = payload
    if not isinstance(rows, list):
        raise SourceSearchError(INVALID_RESPONSE)

    items: list[ResultItem] = []
    for row in rows:
        if len(items) >= max_results:
            break
        if not isinstance(row, dict) or not row.get("url"):
            continue
        items.append(
            ResultItem(
                url=str(row["url"]),
                title=str(row.get("title") or "Sem título"),
                snippet=_first(row, SNIPPET_KEYS) or "",
                published_at=_first(row, PUBLISHED_KEYS),
                rank=len(items) + 1,
            )
        )
    return items


class HttpSourceSearcher:
    """Searches courts by GET ``search_url?q=<query>&limit=<max_results>``.

    One ``httpx.AsyncClient`` is shared by every search; close it with
    ``aclose()`` or use the searcher as an async context manager.
    """

    def __init__(self, timeout: float = 15.0, user_agent: str | None = None, client: httpx.AsyncClient | None = None):
        headers = {"Accept": "application/json"}
        if user_agent:
            headers["User-Agent"] = user_agent
        self._client = client or httpx.AsyncClient(timeout=timeout, headers=headers, follow_redirects=True)

    async def __call__(self, source: Source, query: str, *, max_results: int) -> SourceOutcome:
        if not source.search_url:
            return SourceOutcome(error=NO_ENDPOINT)

        try:
            response = await self._client.get(source.search_url, params={"q": query, "limit": max_results})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.info(f"{source.id} answered HTTP {e.response.status_code}")
            return SourceOutcome(error=f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            raise SourceSearchError(CONNECTION_FAILURE) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SourceSearchError(INVALID_RESPONSE) from e

        return SourceOutcome(items=parse_results(payload, max_results))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpSourceSearcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

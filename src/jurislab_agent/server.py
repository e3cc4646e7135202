"""MCP server exposing jurisprudence search as tools."""

import contextlib
import json
import logging
import sys
import time

from .observability import build_json_formatter, setup_structured_logging


def _configure_stdio_logging() -> None:
    """Configure logging for stdio MCP mode - all logs MUST go to stderr.

    In stdio mode, stdout is reserved exclusively for JSON-RPC messages.
    Any logging or print() to stdout corrupts the protocol stream.
    """
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(build_json_formatter())

    root = logging.getLogger()
    root.handlers = [stderr_handler]
    root.setLevel(logging.WARNING)

    # Suppress verbose loggers from dependencies
    for logger_name in ["httpx", "httpcore", "asyncio"]:
        dep_logger = logging.getLogger(logger_name)
        dep_logger.setLevel(logging.WARNING)
        dep_logger.handlers = [stderr_handler]
        dep_logger.propagate = False


# Configure logging BEFORE importing fastmcp and other noisy dependencies
_configure_stdio_logging()

# ruff: noqa: E402 - Intentional late imports after logging configuration
from fastmcp import FastMCP

from .aggregator import AggregateOptions
from .catalog import load_catalog
from .config import settings
from .exceptions import CatalogError, JurisLabError
from .models import Category
from .searchers import HttpSourceSearcher, SourceSearcher
from .service import SearchRequest
from .service import search_jurisprudence as run_search

logger = logging.getLogger("jurislab_agent")
logger.setLevel(getattr(logging, settings.server.logging_level.upper()))


def serve(searcher: SourceSearcher | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        searcher: Court searcher to use for every search. When None, each
            search opens its own ``HttpSourceSearcher``.
    """
    setup_structured_logging(settings.server.logging_level)

    server = FastMCP("jurislab_agent")

    def _open_searcher() -> contextlib.AbstractAsyncContextManager:
        if searcher is not None:
            return contextlib.nullcontext(searcher)
        return HttpSourceSearcher(timeout=settings.http.timeout, user_agent=settings.http.user_agent)

    @server.tool()
    async def search_jurisprudence(
        query: str,
        categories: list[str] | None = None,
        courts: list[str] | None = None,
    ) -> str:
        """
        Search jurisprudence across Brazilian courts and return ranked results.

        Args:
            query: Topic or keywords, e.g. "vínculo empregatício intermitente" or "Tema 1.123"
            categories: Court categories to search: superior, federal, trabalho, estadual
                (default: superior and federal)
            courts: Court ids to search first

        Returns:
            JSON object with results, diagnostics and warnings, or an error
        """
        request = SearchRequest(query=query, categories=categories or [], courts=courts or [])
        try:
            catalog = load_catalog(settings.catalog.resolve_path())
            async with _open_searcher() as active_searcher:
                response = await run_search(
                    request,
                    catalog,
                    active_searcher,
                    AggregateOptions.from_settings(settings.aggregator),
                )
        except JurisLabError as e:
            logger.warning(f"Search rejected: {e}")
            return json.dumps({"error": str(e)}, ensure_ascii=False)

        return response.to_json()

    @server.tool()
    async def list_courts(category: str | None = None) -> str:
        """
        List the courts available for search.

        Args:
            category: Only list courts of this category (superior, federal, trabalho, estadual)

        Returns:
            JSON list of courts with id, name and category
        """
        try:
            catalog = load_catalog(settings.catalog.resolve_path())
        except CatalogError as e:
            return json.dumps({"error": str(e)}, ensure_ascii=False)

        if category is not None:
            wanted = Category.parse(category)
            if wanted is None:
                return json.dumps({"error": f"Unknown category '{category}'"}, ensure_ascii=False)
            catalog = [s for s in catalog if s.category == wanted]

        return json.dumps(
            {"courts": [{"id": s.id, "name": s.name, "category": s.category.value} for s in catalog]},
            indent=2,
            ensure_ascii=False,
        )

    @server.tool()
    async def health_check() -> str:
        """
        Health check with catalog status and the limits applied to searches.

        Returns:
            JSON object with server status, catalog size and aggregator limits
        """
        catalog_path = settings.catalog.resolve_path()
        try:
            catalog_size: int | None = len(load_catalog(catalog_path))
            catalog_error = None
        except CatalogError as e:
            catalog_size = None
            catalog_error = str(e)

        return json.dumps(
            {
                "status": "healthy" if catalog_error is None else "degraded",
                "uptime_seconds": round(time.time() - _server_start_time, 1),
                "catalog": {"path": str(catalog_path), "courts": catalog_size, "error": catalog_error},
                "limits": settings.aggregator.model_dump(),
            },
            indent=2,
            ensure_ascii=False,
        )

    return server


# Track server start time for uptime calculation
_server_start_time = time.time()


server_instance = serve()


def main() -> None:
    """Entry point for MCP server."""
    transport = settings.server.transport

    if transport == "stdio":
        server_instance.run()
    elif transport in ("streamable-http", "sse"):
        logger.info(f"Starting JurisLab MCP server (transport: {transport})")
        logger.info(f"HTTP server at http://{settings.server.host}:{settings.server.port}/mcp")
        server_instance.run(transport=transport, host=settings.server.host, port=settings.server.port)
    else:
        raise ValueError(f"Unknown transport: {transport}")


if __name__ == "__main__":
    main()

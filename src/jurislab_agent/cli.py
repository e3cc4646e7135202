"""CLI interface for the JurisLab search agent."""

import asyncio
from typing import Optional

import typer

from .aggregator import AggregateOptions
from .catalog import load_catalog
from .config import settings
from .exceptions import JurisLabError
from .models import Category, Source
from .observability import setup_structured_logging
from .searchers import HttpSourceSearcher
from .service import SearchRequest, SearchResponse, search_jurisprudence

app = typer.Typer(help="Jurisprudence search across Brazilian courts")


def _load_sources(catalog: Optional[str]) -> list[Source]:
    return load_catalog(catalog or settings.catalog.resolve_path())


def format_response(response: SearchResponse) -> str:
    """Render a search response as plain text."""
    lines: list[str] = []
    for position, result in enumerate(response.results, start=1):
        lines.append(f"{position}. [{result.court_name}] {result.title} (score {result.relevance_score:.2f})")
        lines.append(f"   {result.url}")
        if result.published_at:
            lines.append(f"   Published: {result.published_at}")
        if result.snippet:
            lines.append(f"   {result.snippet}")
    if not response.results:
        lines.append("No results found.")

    diagnostics = response.diagnostics
    lines.append("")
    lines.append(f"Courts consulted ({diagnostics.elapsed_ms} ms): {', '.join(diagnostics.courts_consulted)}")
    if response.warnings:
        lines.append("Warnings:")
        lines.extend(f"  - {warning}" for warning in response.warnings)
    return "\n".join(lines)


@app.command()
def search(
    query: str = typer.Argument(..., help="Topic or keywords to search"),
    category: list[str] = typer.Option(None, "--category", "-c", help="Court category (superior, federal, trabalho, estadual)"),
    court: list[str] = typer.Option(None, "--court", "-p", help="Court id to search first"),
    catalog: str = typer.Option(None, "--catalog", help="Court catalog YAML file"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON response"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log search progress to stderr"),
) -> None:
    """Search jurisprudence across the selected courts."""
    setup_structured_logging("INFO" if verbose else "WARNING")
    request = SearchRequest(query=query, categories=category or [], courts=court or [])

    async def _search() -> SearchResponse:
        sources = _load_sources(catalog)
        async with HttpSourceSearcher(timeout=settings.http.timeout, user_agent=settings.http.user_agent) as searcher:
            return await search_jurisprudence(request, sources, searcher, AggregateOptions.from_settings(settings.aggregator))

    try:
        response = asyncio.run(_search())
    except JurisLabError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1) from e

    print(response.to_json() if as_json else format_response(response))


@app.command()
def courts(
    catalog: str = typer.Option(None, "--catalog", help="Court catalog YAML file"),
) -> None:
    """List the courts in the catalog, grouped by category."""
    try:
        sources = _load_sources(catalog)
    except JurisLabError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1) from e

    for cat in sorted(Category, key=lambda c: c.priority):
        members = [s for s in sources if s.category == cat]
        if not members:
            continue
        print(f"{cat.label} ({cat.value})")
        for source in members:
            print(f"  {source.id:<12} {source.name}")


@app.command()
def config() -> None:
    """Show current configuration."""
    print(f"Catalog: {settings.catalog.resolve_path()}")
    print(f"Concurrency Limit: {settings.aggregator.concurrency_limit}")
    print(f"Results Per Court: {settings.aggregator.per_source_limit}")
    print(f"Total Results: {settings.aggregator.total_limit}")
    print(f"Court Timeout: {settings.aggregator.source_timeout or '(none)'}")
    print(f"HTTP Timeout: {settings.http.timeout}")


@app.command()
def server() -> None:
    """Start the MCP server."""
    from .server import main

    main()


if __name__ == "__main__":
    app()

"""Pytest configuration and fixtures for jurislab-agent tests."""

import asyncio
import logging
from pathlib import Path

import pytest
import structlog
import yaml

from jurislab_agent.models import Category, ResultItem, Source, SourceOutcome


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: Tests that take longer to run")


@pytest.fixture
def anyio_backend():
    return "asyncio"


def make_items(prefix: str, count: int) -> list[ResultItem]:
    return [
        ResultItem(
            url=f"https://example.org/{prefix}/{rank}",
            title=f"{prefix} decision {rank}",
            snippet=f"Ementa {rank}",
            rank=rank,
        )
        for rank in range(1, count + 1)
    ]


class FakeSearcher:
    """Scripted court searcher that records calls and tracks concurrency.

    ``outcomes`` maps a court id to an exception to raise or an object to
    return as is; courts not listed return ``default_items`` items.
    """

    def __init__(
        self,
        outcomes: dict[str, object] | None = None,
        delays: dict[str, float] | None = None,
        default_delay: float = 0.0,
        default_items: int = 2,
    ):
        self.outcomes = outcomes or {}
        self.delays = delays or {}
        self.default_delay = default_delay
        self.default_items = default_items
        self.calls: list[tuple[str, str, int]] = []
        self.completed: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, source: Source, query: str, *, max_results: int) -> SourceOutcome:
        self.calls.append((source.id, query, max_results))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(source.id, self.default_delay))
            outcome = self.outcomes.get(source.id)
            if isinstance(outcome, BaseException):
                raise outcome
            if outcome is None:
                return SourceOutcome(items=make_items(source.id, self.default_items))
            return outcome
        finally:
            self.in_flight -= 1
            self.completed.append(source.id)

    async def __aenter__(self) -> "FakeSearcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None


@pytest.fixture
def catalog() -> list[Source]:
    """A small catalog covering every category, deliberately not in priority order."""
    return [
        Source(id="trf4", name="TRF4", category=Category.FEDERAL),
        Source(id="stf", name="STF", category=Category.SUPERIOR),
        Source(id="tjsp", name="TJSP", category=Category.ESTADUAL),
        Source(id="stj", name="STJ", category=Category.SUPERIOR),
        Source(id="trt2", name="TRT2", category=Category.TRABALHO),
        Source(id="trf1", name="TRF1", category=Category.FEDERAL),
    ]


@pytest.fixture
def catalog_file(tmp_path: Path, catalog: list[Source]) -> Path:
    """Write the catalog fixture to a YAML file."""
    path = tmp_path / "courts.yaml"
    data = {"courts": [{"id": s.id, "name": s.name, "category": s.category.value} for s in catalog]}
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


@pytest.fixture
def captured_logs():
    """Capture structlog events with the bound run context merged in."""
    capture = structlog.testing.LogCapture()
    previous = structlog.get_config()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        cache_logger_on_first_use=False,
    )
    yield capture.entries
    structlog.configure(**previous)

"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from jurislab_agent.config import AggregatorSettings, CatalogSettings, HttpSettings, get_default_catalog_path


class TestAggregatorSettings:
    """Fan-out limits."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for var in ("CONCURRENCY_LIMIT", "PER_SOURCE_LIMIT", "TOTAL_LIMIT", "SOURCE_TIMEOUT"):
            monkeypatch.delenv(f"JURISLAB_AGGREGATOR_{var}", raising=False)

    def test_defaults(self):
        """Test AggregatorSettings default values."""
        settings = AggregatorSettings()
        assert settings.concurrency_limit == 6
        assert settings.per_source_limit == 4
        assert settings.total_limit == 60
        assert settings.source_timeout is None

    def test_env_override(self, monkeypatch):
        """Environment variables override defaults."""
        monkeypatch.setenv("JURISLAB_AGGREGATOR_CONCURRENCY_LIMIT", "2")
        monkeypatch.setenv("JURISLAB_AGGREGATOR_SOURCE_TIMEOUT", "7.5")

        settings = AggregatorSettings()
        assert settings.concurrency_limit == 2
        assert settings.source_timeout == 7.5

    def test_rejects_zero_limit(self, monkeypatch):
        """Limits below one are rejected."""
        monkeypatch.setenv("JURISLAB_AGGREGATOR_TOTAL_LIMIT", "0")
        with pytest.raises(ValueError):
            AggregatorSettings()


class TestCatalogSettings:
    """Catalog path resolution."""

    def test_default_path(self, monkeypatch):
        """The catalog path has a default."""
        monkeypatch.delenv("JURISLAB_CATALOG_PATH", raising=False)
        assert CatalogSettings().resolve_path() == get_default_catalog_path()

    def test_env_path(self, monkeypatch, tmp_path):
        """The catalog path can come from the environment."""
        monkeypatch.setenv("JURISLAB_CATALOG_PATH", str(tmp_path / "courts.yaml"))
        assert CatalogSettings().resolve_path() == tmp_path / "courts.yaml"

    def test_user_expanded(self):
        """A leading ~ in the catalog path is expanded."""
        assert CatalogSettings(path="~/courts.yaml").resolve_path() == Path.home() / "courts.yaml"


def test_http_defaults(monkeypatch):
    """Test HttpSettings default values."""
    monkeypatch.delenv("JURISLAB_HTTP_TIMEOUT", raising=False)
    assert HttpSettings().timeout == 15.0


def test_file_values_fill_gaps_and_env_wins(monkeypatch, tmp_path):
    """Config file values apply unless the environment sets them."""
    import jurislab_agent.config as config_mod

    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"aggregator": {"concurrency_limit": 3, "total_limit": 20}}), encoding="utf-8")
    monkeypatch.setattr(config_mod, "CONFIG_FILE", config_file)
    monkeypatch.setenv("JURISLAB_AGGREGATOR_TOTAL_LIMIT", "30")

    loaded = config_mod._load_settings()

    assert loaded.aggregator.concurrency_limit == 3
    assert loaded.aggregator.total_limit == 30
    assert loaded.aggregator.per_source_limit == 4


def test_save_round_trips(monkeypatch, tmp_path):
    """Saved settings load back unchanged."""
    import jurislab_agent.config as config_mod

    config_file = tmp_path / "nested" / "config.json"
    monkeypatch.setattr(config_mod, "CONFIG_FILE", config_file)

    settings = config_mod.AppSettings(aggregator=AggregatorSettings(concurrency_limit=9))
    settings.save()

    assert json.loads(config_file.read_text(encoding="utf-8"))["aggregator"]["concurrency_limit"] == 9

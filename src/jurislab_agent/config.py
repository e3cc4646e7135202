"""Configuration management using Pydantic settings with optional file persistence."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Paths ---

APP_NAME = "jurislab-agent"


def get_config_dir() -> Path:
    """Get the configuration directory (e.g. ~/.config/jurislab-agent)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / ".config")).expanduser()
    else:
        base = Path("~/.config").expanduser()

    return base / APP_NAME


def get_default_catalog_path() -> Path:
    """Get the default location of the court catalog file."""
    return get_config_dir() / "courts.yaml"


CONFIG_FILE = get_config_dir() / "config.json"


def load_config_file() -> dict[str, Any]:
    """Load settings from the JSON config file if it exists."""
    if not CONFIG_FILE.exists():
        return {}

    try:
        text = CONFIG_FILE.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        return json.loads(text)
    except (OSError, json.JSONDecodeError):
        return {}


def save_config_file(config_data: dict[str, Any]) -> None:
    """Save settings to the JSON config file."""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(config_data, indent=2), encoding="utf-8")


class AggregatorSettings(BaseSettings):
    """Fan-out limits applied to every search run."""

    model_config = SettingsConfigDict(env_prefix="JURISLAB_AGGREGATOR_")

    concurrency_limit: int = Field(default=6, ge=1, description="Maximum courts searched at the same time")
    per_source_limit: int = Field(default=4, ge=1, description="Maximum results kept from each court")
    total_limit: int = Field(default=60, ge=1, description="Maximum results returned by a search")
    source_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds before a single court search is abandoned (disabled when unset)",
    )


class CatalogSettings(BaseSettings):
    """Court catalog location."""

    model_config = SettingsConfigDict(env_prefix="JURISLAB_CATALOG_")

    path: Optional[str] = Field(default=None, description="YAML file listing the courts (default: ~/.config/jurislab-agent/courts.yaml)")

    def resolve_path(self) -> Path:
        if self.path:
            return Path(self.path).expanduser()
        return get_default_catalog_path()


class HttpSettings(BaseSettings):
    """Outbound HTTP client configuration for court endpoints."""

    model_config = SettingsConfigDict(env_prefix="JURISLAB_HTTP_")

    timeout: float = Field(default=15.0, gt=0, description="Per-request timeout in seconds")
    user_agent: str = Field(default=f"{APP_NAME}/0.1")


TransportType = Literal["stdio", "streamable-http", "sse"]


class ServerSettings(BaseSettings):
    """Server configuration."""

    model_config = SettingsConfigDict(env_prefix="JURISLAB_SERVER_")

    logging_level: str = Field(default="INFO")
    transport: TransportType = Field(default="stdio", description="MCP transport: stdio, streamable-http, or sse")
    host: str = Field(default="127.0.0.1", description="Host for HTTP transports")
    port: int = Field(default=8484, description="Port for HTTP transports")


class AppSettings(BaseSettings):
    """Root application settings.

    Priority: Environment Variables > Config File > Defaults
    """

    model_config = SettingsConfigDict(env_prefix="JURISLAB_", extra="ignore")

    aggregator: AggregatorSettings = Field(default_factory=AggregatorSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    def save(self) -> Path:
        """Save current configuration to file."""
        save_config_file(self.model_dump(mode="json", exclude_none=True))
        return CONFIG_FILE


def _load_settings() -> AppSettings:
    """Load settings with file config as base, env vars overlay."""
    file_data = load_config_file()
    # Nested settings read their own env vars; file values only fill the gaps
    sections = {
        "aggregator": AggregatorSettings,
        "catalog": CatalogSettings,
        "http": HttpSettings,
        "server": ServerSettings,
    }
    data: dict[str, Any] = {}
    for name, model in sections.items():
        section = file_data.get(name) or {}
        env_values = model().model_dump(exclude_unset=True)
        data[name] = model(**{**section, **env_values})
    return AppSettings(**data)


settings = _load_settings()

"""Court catalog loading from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import CatalogError
from .models import Category, Source

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "category")


def parse_catalog(data: Any, origin: str = "<catalog>") -> list[Source]:
    """Build sources from parsed catalog data.

    Expected shape::

        courts:
          - id: stf
            name: Supremo Tribunal Federal
            category: superior
            search_url: https://example.org/stf/search

    Args:
        data: Parsed YAML document
        origin: Name used in error messages

    Returns:
        Sources in file order

    Raises:
        CatalogError: If the document is malformed, an entry is incomplete,
            a category is unknown or an id is repeated
    """
    if not isinstance(data, dict) or not isinstance(data.get("courts"), list):
        raise CatalogError(f"{origin}: expected a top-level 'courts' list")

    sources: list[Source] = []
    seen: set[str] = set()
    for position, entry in enumerate(data["courts"], start=1):
        if not isinstance(entry, dict):
            raise CatalogError(f"{origin}: court #{position} is not a mapping")

        missing = [key for key in REQUIRED_FIELDS if not entry.get(key)]
        if missing:
            raise CatalogError(f"{origin}: court #{position} is missing {', '.join(missing)}")

        court_id = str(entry["id"])
        category = Category.parse(entry["category"])
        if category is None:
            raise CatalogError(f"{origin}: court '{court_id}' has unknown category '{entry['category']}'")
        if court_id in seen:
            raise CatalogError(f"{origin}: duplicate court id '{court_id}'")
        seen.add(court_id)

        search_url = entry.get("search_url")
        sources.append(
            Source(
                id=court_id,
                name=str(entry["name"]),
                category=category,
                search_url=str(search_url) if search_url else None,
            )
        )

    return sources


def load_catalog(path: str | Path) -> list[Source]:
    """Load the court catalog from a YAML file.

    Raises:
        CatalogError: If the file is missing, unreadable or malformed
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise CatalogError(f"Court catalog not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in court catalog {path}: {e}") from e
    except OSError as e:
        raise CatalogError(f"Cannot read court catalog {path}: {e}") from e

    sources = parse_catalog(data, origin=str(path))
    logger.debug(f"Loaded {len(sources)} courts from {path}")
    return sources

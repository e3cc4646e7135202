"""Court search adapters."""

from .base import SourceSearcher
from .http import HttpSourceSearcher

__all__ = [
    "HttpSourceSearcher",
    "SourceSearcher",
]

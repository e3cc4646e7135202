"""Observability module for structured, per-run logging."""

from .logging import (
    bind_run_context,
    build_json_formatter,
    clear_run_context,
    get_current_run_id,
    get_run_logger,
    setup_structured_logging,
)

__all__ = [
    "bind_run_context",
    "build_json_formatter",
    "clear_run_context",
    "get_current_run_id",
    "get_run_logger",
    "setup_structured_logging",
]

"""Structured logging with per-run context using structlog and contextvars.

structlog events and plain ``logging`` records share one JSON formatter, so a
record emitted anywhere during a search run carries that run's ``run_id``.
"""

import logging
from contextvars import ContextVar

import structlog

# Context variables for the current search run
current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)

_configured = False

# Applied to structlog events and, at format time, to stdlib records
SHARED_PROCESSORS: list[structlog.typing.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def build_json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Build a logging formatter rendering every record as one JSON line with run context."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
    )


def setup_structured_logging(level: str = "INFO") -> None:
    """Configure structlog to hand events to stdlib logging for JSON rendering.

    A stderr handler with the JSON formatter is installed on the root logger
    only when no handler is configured yet.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    global _configured
    if _configured:
        return

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(build_json_formatter())
        root.addHandler(handler)
        root.setLevel(getattr(logging, level.upper()))

    _configured = True


def bind_run_context(run_id: str, query: str, **extra: object) -> None:
    """Bind run context for all subsequent logs in this async context.

    Args:
        run_id: Unique identifier of the search run
        query: Search text being aggregated
        **extra: Additional keys to attach to every log line of the run
    """
    current_run_id.set(run_id)
    structlog.contextvars.bind_contextvars(run_id=run_id, query=query, **extra)


def clear_run_context() -> None:
    """Clear run context after the search completes."""
    current_run_id.set(None)
    structlog.contextvars.clear_contextvars()


def get_run_logger(name: str = "jurislab_agent") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger carrying the bound run context."""
    return structlog.get_logger(name)


def get_current_run_id() -> str | None:
    """Get the current run ID from context."""
    return current_run_id.get()

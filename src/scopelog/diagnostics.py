"""
Diagnostics - the library's own logging.

Scoped loggers write user-facing lines to their sinks. Events about the
logging machinery itself (a scope got registered, a sink refused a write,
settings named an unknown scope) go through structlog instead, so they can
be routed and filtered like any other application log and never end up
interleaved in a scope's sink.

Examples:
    Quiet by default; turn it up while debugging configuration:

    >>> from scopelog.diagnostics import configure_diagnostics
    >>> configure_diagnostics(level="DEBUG", json_format=False)

    Production (JSON for log aggregation):

    >>> configure_diagnostics(level="WARNING", json_format=True)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_LIBRARY = "scopelog"


def _add_library(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every diagnostic event with the library name."""
    event_dict.setdefault("library", _LIBRARY)
    return event_dict


def configure_diagnostics(
    level: str = "WARNING",
    json_format: bool | None = None,
    stream: Any = None,
) -> None:
    """Configure structlog for scopelog's internal events.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        stream: Output stream, defaults to stderr
    """
    stream = stream or sys.stderr
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    if json_format is None:
        json_format = not (hasattr(stream, "isatty") and stream.isatty())

    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        _add_library,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def get_diagnostics_logger(name: str | None = None) -> Any:
    """Get the structlog logger used for internal events."""
    return structlog.get_logger(name or _LIBRARY)


__all__ = ["configure_diagnostics", "get_diagnostics_logger"]

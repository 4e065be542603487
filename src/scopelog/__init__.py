"""scopelog - named, independently leveled loggers.

Components register a logger scope by name and get the same instance back
on every later call. Each scope has its own level and writes either
structured ``key=value`` lines or printf-style lines with bracketed
metadata. Scopes can carry bound key-values, a request context and a
metric that counts info and error calls.

Usage:
    from scopelog import Level, register, key_values_to_context, BACKGROUND

    log = register("http", "HTTP server")
    log.info("listening", "port", 8080)

    log.set_level(Level.DEBUG)
    ctx = key_values_to_context(BACKGROUND, "request_id", "abc-123")
    log.with_context(ctx).bind("route", "/health").debug("handled")
"""

from scopelog.context import (
    BACKGROUND,
    LogContext,
    bind_context,
    context_scope,
    current_context,
    key_values_from_context,
    key_values_to_context,
    reset_context,
)
from scopelog.discard import DISCARD, Discard, new_discard
from scopelog.errors import ConfigError, InvalidLevelError, ScopeLogError
from scopelog.formatting import Formatter, Record, StructuredFormatter, UnstructuredFormatter
from scopelog.level import Level, as_level, parse_level
from scopelog.logger import Logger
from scopelog.metric import Metric
from scopelog.registry import (
    Registry,
    configure,
    default_registry,
    get_logger,
    get_logger_or_discard,
    loggers,
    register,
    register_unstructured,
)
from scopelog.settings import Settings

__version__ = "0.1.0"

__all__ = [
    # Levels
    "Level",
    "as_level",
    "parse_level",
    # Registry
    "Registry",
    "configure",
    "default_registry",
    "get_logger",
    "get_logger_or_discard",
    "loggers",
    "register",
    "register_unstructured",
    # Loggers
    "Logger",
    "Discard",
    "DISCARD",
    "new_discard",
    # Formatting
    "Formatter",
    "Record",
    "StructuredFormatter",
    "UnstructuredFormatter",
    # Context
    "BACKGROUND",
    "LogContext",
    "bind_context",
    "context_scope",
    "current_context",
    "key_values_from_context",
    "key_values_to_context",
    "reset_context",
    # Metrics
    "Metric",
    # Config & errors
    "Settings",
    "ScopeLogError",
    "InvalidLevelError",
    "ConfigError",
]

"""Process-wide registry of scoped loggers.

Each name maps to exactly one ``Logger`` for the life of the process.
``register`` is idempotent: asking again for a registered name returns the
same instance, whatever description or formatter the second call asked for.

Registration follows check, create, check: the lookup and the insert each
hold the lock, the logger is built between them, and the insert keeps
whichever logger got there first. A thread that loses the race gets the
winner back and its own instance is dropped before anyone else sees it.

Looked-up loggers are used without holding the registry lock.

Example:
    >>> from scopelog import register, get_logger, DISCARD
    >>> log = register("payments", "payment processing")
    >>> get_logger("payments") is log
    True
    >>> get_logger("payment") is None
    True
    >>> (get_logger("payment") or DISCARD).info("dropped")
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError

from scopelog.diagnostics import configure_diagnostics, get_diagnostics_logger
from scopelog.discard import DISCARD, Discard
from scopelog.formatting import Formatter, StructuredFormatter, UnstructuredFormatter
from scopelog.logger import Logger
from scopelog.settings import Settings

_diag = get_diagnostics_logger(__name__)


class Registry:
    """Lock-protected mapping of logger name to logger."""

    def __init__(self, settings: Settings | None = None, *, now: Callable[[], datetime] = datetime.now):
        self._settings = settings if settings is not None else Settings()
        self._now = now
        self._lock = threading.Lock()
        self._loggers: dict[str, Logger] = {}

    @property
    def settings(self) -> Settings:
        return self._settings

    def register(self, name: str, description: str = "") -> Logger:
        """Get or create the structured logger called ``name``."""
        return self._register(name, description, StructuredFormatter)

    def register_unstructured(self, name: str, description: str = "") -> Logger:
        """Get or create the unstructured logger called ``name``."""
        return self._register(name, description, UnstructuredFormatter)

    def _register(self, name: str, description: str, formatter: Callable[[], Formatter]) -> Logger:
        existing = self.get_logger(name)
        if existing is not None:
            return existing

        settings = self._settings
        logger = Logger(
            name,
            description,
            formatter=formatter(),
            sink=settings.stream(),
            level=settings.level_for(name),
            now=self._now,
        )

        with self._lock:
            winner = self._loggers.setdefault(name, logger)

        if winner is logger:
            _diag.debug("scope_registered", scope=name, scope_level=str(logger.level), formatter=repr(logger.formatter))
        return winner

    def get_logger(self, name: str) -> Logger | None:
        """Return the logger registered as ``name``, or None."""
        with self._lock:
            return self._loggers.get(name)

    def get_logger_or_discard(self, name: str) -> Logger | Discard:
        """Return the logger registered as ``name``, or ``DISCARD``."""
        logger = self.get_logger(name)
        return logger if logger is not None else DISCARD

    def loggers(self) -> list[Logger]:
        """Snapshot of all registered loggers, in no particular order."""
        with self._lock:
            return list(self._loggers.values())

    def apply_settings(self, settings: Settings) -> None:
        """Use ``settings`` for new loggers and apply its per-scope levels.

        Loggers registered before the call keep their level unless
        ``settings.levels`` names them.
        """
        self._settings = settings
        for name, level in settings.levels.items():
            logger = self.get_logger(name)
            if logger is None:
                _diag.debug("scope_level_deferred", scope=name, scope_level=str(level))
                continue
            logger.set_level(level)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._loggers

    def __len__(self) -> int:
        with self._lock:
            return len(self._loggers)

    def __repr__(self) -> str:
        return f"Registry(loggers={len(self)})"


_default: Registry | None = None
_default_lock = threading.Lock()


def _settings_from_env() -> Settings:
    """Environment settings, or the built-in defaults when the environment is invalid."""
    try:
        return Settings()
    except ValidationError as e:
        _diag.warning("settings_invalid", error=str(e), fallback="defaults")
        return Settings.model_construct()


def default_registry() -> Registry:
    """The process-wide registry, created on first use.

    Invalid ``SCOPELOG_*`` variables do not stop registration: the registry
    falls back to default settings and reports ``settings_invalid``.
    """
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Registry(_settings_from_env())
    return _default


def register(name: str, description: str = "") -> Logger:
    """Register a structured logger, or return the one already registered."""
    return default_registry().register(name, description)


def register_unstructured(name: str, description: str = "") -> Logger:
    """Register an unstructured logger, or return the one already registered."""
    return default_registry().register_unstructured(name, description)


def get_logger(name: str) -> Logger | None:
    """Get a registered logger by name."""
    return default_registry().get_logger(name)


def get_logger_or_discard(name: str) -> Logger | Discard:
    """Get a registered logger by name, or ``DISCARD`` if there is none."""
    return default_registry().get_logger_or_discard(name)


def loggers() -> list[Logger]:
    """List all registered loggers."""
    return default_registry().loggers()


def configure(settings: Settings | None = None) -> Settings:
    """Apply settings (read from the environment by default) to the process.

    Sets up the diagnostics logger and applies per-scope levels to the
    process-wide registry.
    """
    settings = settings if settings is not None else Settings()
    configure_diagnostics(level=settings.diagnostics_level, json_format=settings.diagnostics_json)
    default_registry().apply_settings(settings)
    return settings


__all__ = [
    "Registry",
    "configure",
    "default_registry",
    "get_logger",
    "get_logger_or_discard",
    "loggers",
    "register",
    "register_unstructured",
]

"""Logging levels for scoped loggers.

Levels are ordered by verbosity. A message at level ``L`` is emitted when
``L <= configured``; ``Level.NONE`` silences the logger entirely.

Examples:
    >>> from scopelog.level import Level, as_level
    >>> str(Level.DEBUG)
    'debug'
    >>> as_level("error")
    (<Level.ERROR: 1>, True)
    >>> as_level("verbose")
    (<Level.NONE: 0>, False)
"""

from __future__ import annotations

from enum import IntEnum

from scopelog.errors import InvalidLevelError


class Level(IntEnum):
    """Verbosity of a scoped logger."""

    NONE = 0  # silences the logger
    ERROR = 1
    INFO = 2
    DEBUG = 3

    def __str__(self) -> str:
        return _LEVEL_TO_STRING[self]

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_LEVEL_TO_STRING: dict[Level, str] = {
    Level.NONE: "none",
    Level.ERROR: "error",
    Level.INFO: "info",
    Level.DEBUG: "debug",
}

_STRING_TO_LEVEL: dict[str, Level] = {v: k for k, v in _LEVEL_TO_STRING.items()}


def as_level(token: str) -> tuple[Level, bool]:
    """Return the level for ``token`` and whether it was recognised.

    Unknown tokens yield ``(Level.NONE, False)``; this never raises.
    """
    level = _STRING_TO_LEVEL.get(token) if isinstance(token, str) else None
    if level is None:
        return Level.NONE, False
    return level, True


def parse_level(value: str | int | Level) -> Level:
    """Strict conversion used by configuration.

    Accepts a ``Level``, its integer value, or a token in any case.

    Raises:
        InvalidLevelError: If the value does not name a level.
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Level(value)
        except ValueError:
            raise InvalidLevelError(value) from None
    if isinstance(value, str):
        level, ok = as_level(value.strip().lower())
        if ok:
            return level
    raise InvalidLevelError(value)


__all__ = ["Level", "as_level", "parse_level"]

"""
Error types for scopelog.

Logging calls never raise: lookups report a miss with ``None``, malformed
key-values are repaired in place and sink failures are swallowed. The types
below cover the parts that do fail loudly, which are strict level parsing
and configuration.

Hierarchy:
    ::

        ScopeLogError
        ├── InvalidLevelError   (also a ValueError)
        └── ConfigError

Usage:
    from scopelog.errors import InvalidLevelError

    try:
        level = parse_level(os.environ["LOG_LEVEL"])
    except InvalidLevelError as e:
        print(e.to_dict())
"""

from __future__ import annotations

from typing import Any


class ScopeLogError(Exception):
    """Base exception for all scopelog errors."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidLevelError(ScopeLogError, ValueError):
    """A value does not name a logging level."""

    def __init__(self, value: Any):
        super().__init__(f"invalid logging level: {value!r}")
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["value"] = repr(self.value)
        return result


class ConfigError(ScopeLogError):
    """Invalid logging configuration."""

    def __init__(self, key: str, value: Any, message: str | None = None, *, cause: Exception | None = None):
        super().__init__(message or f"invalid value for {key}: {value!r}", cause=cause)
        self.key = key
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["key"] = self.key
        return result


__all__ = ["ScopeLogError", "InvalidLevelError", "ConfigError"]

"""Key-value carrier propagated alongside log calls.

A ``LogContext`` holds request-scoped metadata (request ids, tenants, ...)
that loggers render in front of their own key-values. Carriers are
immutable; adding values always returns a new carrier.

Loggers receive a carrier explicitly through ``Logger.with_context``. For
code that does not want to thread the carrier through every call, the
current carrier can also be kept in a ``ContextVar`` so it follows threads
and asyncio tasks:

    >>> with context_scope("request_id", "abc-123"):
    ...     log = logger.with_context(current_context())
    ...     log.info("processing")  # includes request_id="abc-123"
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Any

MISSING = "(MISSING)"


@dataclass(frozen=True)
class LogContext:
    """Immutable, ordered sequence of key/value items."""

    items: tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.items) // 2

    def __bool__(self) -> bool:
        return bool(self.items)


BACKGROUND = LogContext()


def key_values_to_context(ctx: LogContext | None, *key_values: Any) -> LogContext:
    """Return a new carrier with ``key_values`` appended to those of ``ctx``.

    An odd number of values is padded with ``"(MISSING)"``.
    """
    base = ctx.items if ctx is not None else ()
    if not key_values:
        return ctx if ctx is not None else BACKGROUND
    if len(key_values) % 2 != 0:
        key_values = (*key_values, MISSING)
    return LogContext(base + tuple(key_values))


def key_values_from_context(ctx: LogContext | None) -> list[Any]:
    """Return the flat key/value list held by ``ctx``."""
    if ctx is None:
        return []
    return list(ctx.items)


_current: ContextVar[LogContext] = ContextVar("scopelog_context")  # noqa: B039


def current_context() -> LogContext:
    """Get the carrier bound to the running thread or task."""
    return _current.get(BACKGROUND)


def bind_context(*key_values: Any) -> Token[LogContext]:
    """Append values to the current carrier.

    Returns:
        A token to hand to ``reset_context`` to restore the previous carrier.
    """
    return _current.set(key_values_to_context(current_context(), *key_values))


def reset_context(token: Token[LogContext]) -> None:
    """Restore the carrier that was current before ``bind_context``."""
    _current.reset(token)


@contextmanager
def context_scope(*key_values: Any) -> Iterator[LogContext]:
    """Bind values for the duration of a ``with`` block."""
    token = bind_context(*key_values)
    try:
        yield current_context()
    finally:
        reset_context(token)


__all__ = [
    "BACKGROUND",
    "LogContext",
    "MISSING",
    "bind_context",
    "context_scope",
    "current_context",
    "key_values_from_context",
    "key_values_to_context",
    "reset_context",
]

"""Scoped loggers.

A ``Logger`` is a named logging channel with its own verbosity. Loggers are
normally obtained from the registry (``scopelog.register``) so that every
component asking for the same name shares one instance and one level.

Derivation is copy-on-write: ``bind``, ``with_context`` and ``with_metric``
never modify the logger they are called on. They return a new value that
shares the name, sink, formatter and *level* with its parent, and owns its
own copy of the bound key-values. Changing the level on any member of the
family is visible to all of them:

    >>> log = register("db", "database access")
    >>> tx = log.bind("tx", 42)
    >>> log.set_level(Level.DEBUG)
    >>> tx.level
    <Level.DEBUG: 3>

Emission:
    - ``debug`` writes only when the level is DEBUG.
    - ``info`` and ``error`` record the attached metric on every call, even
      when the line itself is suppressed, then apply the level gate.
    - Nothing raises to the caller. Sink write failures are reported through
      the diagnostics logger and otherwise ignored.
"""

from __future__ import annotations

import io
import sys
import threading
from collections.abc import Callable
from datetime import datetime
from typing import IO, Any

from scopelog.context import BACKGROUND, MISSING, LogContext, key_values_from_context, key_values_to_context
from scopelog.diagnostics import get_diagnostics_logger
from scopelog.formatting import Formatter, Record, StructuredFormatter
from scopelog.level import Level
from scopelog.metric import Metric

_diag = get_diagnostics_logger(__name__)


class _LevelCell:
    """Level shared by every logger derived from the same registration."""

    __slots__ = ("_level", "_lock")

    def __init__(self, level: Level):
        self._level = Level(level)
        self._lock = threading.Lock()

    def get(self) -> Level:
        with self._lock:
            return self._level

    def set(self, level: Level) -> None:
        with self._lock:
            self._level = Level(level)


def _pairs(key_values: tuple[Any, ...]) -> tuple[Any, ...]:
    """Validate ``bind`` input: pad an odd tail, drop pairs with non-string keys."""
    if len(key_values) % 2 != 0:
        key_values = (*key_values, MISSING)
    kept: list[Any] = []
    for i in range(0, len(key_values), 2):
        if isinstance(key_values[i], str):
            kept.append(key_values[i])
            kept.append(key_values[i + 1])
    return tuple(kept)


class Logger:
    """A named logger that can be configured independently of others."""

    __slots__ = ("_name", "_description", "_level", "_args", "_ctx", "_metric", "_sink", "_formatter", "_now")

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        formatter: Formatter | None = None,
        sink: IO[Any] | None = None,
        level: Level = Level.INFO,
        now: Callable[[], datetime] = datetime.now,
    ):
        self._name = name
        self._description = description
        self._level = _LevelCell(level)
        self._args: tuple[Any, ...] = ()
        self._ctx: LogContext = BACKGROUND
        self._metric: Metric | None = None
        self._sink = sink if sink is not None else sys.stdout
        self._formatter: Formatter = formatter if formatter is not None else StructuredFormatter()
        self._now = now

    def _derive(self, **changes: Any) -> Logger:
        """Shallow copy sharing the level cell, with ``changes`` applied."""
        child = object.__new__(type(self))
        for attr in Logger.__slots__:
            object.__setattr__(child, attr, getattr(self, attr))
        if hasattr(self, "__dict__"):
            child.__dict__.update(self.__dict__)
        for attr, value in changes.items():
            object.__setattr__(child, attr, value)
        return child

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def level(self) -> Level:
        """Level configured for this logger and all loggers derived from it."""
        return self._level.get()

    def set_level(self, level: Level) -> None:
        """Configure the level of the whole derivation family."""
        self._level.set(level)

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    @property
    def sink(self) -> IO[Any]:
        return self._sink

    def enabled(self, level: Level) -> bool:
        """Whether a message at ``level`` would be written."""
        return level != Level.NONE and level <= self.level

    # -- derivation -----------------------------------------------------------

    def bind(self, *key_values: Any) -> Logger:
        """Return a logger that adds ``key_values`` to every line.

        Values alternate key, value. An odd count gets ``"(MISSING)"`` as the
        last value; pairs whose key is not a string are dropped. With no
        arguments the logger itself is returned.
        """
        if not key_values:
            return self
        return self._derive(_args=self._args + _pairs(key_values))

    def with_context(self, ctx: LogContext | None) -> Logger:
        """Return a logger that renders the key-values carried by ``ctx``.

        The context is also what the attached metric is recorded against.
        """
        return self._derive(_ctx=ctx if ctx is not None else BACKGROUND)

    def with_metric(self, metric: Metric | None) -> Logger:
        """Return a logger that records ``metric`` on every info and error call."""
        return self._derive(_metric=metric)

    def key_values_to_context(self, ctx: LogContext | None, *key_values: Any) -> LogContext:
        """Shorthand for ``scopelog.context.key_values_to_context``."""
        return key_values_to_context(ctx, *key_values)

    # -- emission -------------------------------------------------------------

    def debug(self, msg: str, *key_values: Any) -> None:
        """Log at debug level. Debug lines are never counted by the metric."""
        if not self.enabled(Level.DEBUG):
            return
        self._emit(Level.DEBUG, msg, None, key_values)

    def info(self, msg: str, *key_values: Any) -> None:
        """Log at info level."""
        self._record_metric()
        if not self.enabled(Level.INFO):
            return
        self._emit(Level.INFO, msg, None, key_values)

    def error(self, msg: str, err: BaseException | None = None, *key_values: Any) -> None:
        """Log at error level.

        Structured loggers render ``err`` as a trailing ``error="..."`` pair;
        unstructured loggers pass it as the last printf argument.
        """
        self._record_metric()
        if not self.enabled(Level.ERROR):
            return
        self._emit(Level.ERROR, msg, err, key_values)

    def _record_metric(self) -> None:
        # recorded even when the level gate drops the line
        if self._metric is not None:
            self._metric.record_context(self._ctx, 1)

    def _emit(self, level: Level, msg: str, err: BaseException | None, key_values: tuple[Any, ...]) -> None:
        record = Record(
            time=self._now(),
            level=level,
            scope=self._name,
            message=msg,
            error=err,
            context_values=tuple(key_values_from_context(self._ctx)),
            scope_values=self._args,
            call_values=key_values,
        )
        self._write(self._formatter.format(record))

    def _write(self, line: str) -> None:
        try:
            if isinstance(self._sink, (io.RawIOBase, io.BufferedIOBase)):
                self._sink.write(line.encode())
            else:
                self._sink.write(line)
        except Exception as e:  # sink failures never reach the caller
            _diag.warning("sink_write_failed", scope=self._name, error=str(e))

    def __repr__(self) -> str:
        return f"Logger(name={self._name!r}, level={self.level})"


__all__ = ["Logger"]

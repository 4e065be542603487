"""No-op logger.

``DISCARD`` answers to the same calls as ``Logger`` but never writes
anything. It still records attached metrics on ``info`` and ``error``, so
call volume stays visible when output is turned off. It is the usual fallback
for a failed lookup::

    log = get_logger("payments") or DISCARD
"""

from __future__ import annotations

from typing import Any

from scopelog.context import BACKGROUND, LogContext, key_values_to_context
from scopelog.level import Level
from scopelog.metric import Metric

DISCARD_NAME = "/dev/null"


class Discard:
    """Logger that drops every line."""

    __slots__ = ("_ctx", "_metric")

    def __init__(self, ctx: LogContext | None = None, metric: Metric | None = None):
        self._ctx = ctx if ctx is not None else BACKGROUND
        self._metric = metric

    @property
    def name(self) -> str:
        return DISCARD_NAME

    @property
    def description(self) -> str:
        return "discards all log lines"

    @property
    def level(self) -> Level:
        return Level.NONE

    def set_level(self, level: Level) -> None:
        pass

    def enabled(self, level: Level) -> bool:
        return False

    def bind(self, *key_values: Any) -> Discard:
        return self

    def with_context(self, ctx: LogContext | None) -> Discard:
        return Discard(ctx, self._metric)

    def with_metric(self, metric: Metric | None) -> Discard:
        return Discard(self._ctx, metric)

    def key_values_to_context(self, ctx: LogContext | None, *key_values: Any) -> LogContext:
        return key_values_to_context(ctx, *key_values)

    def debug(self, msg: str, *key_values: Any) -> None:
        pass

    def info(self, msg: str, *key_values: Any) -> None:
        self._record_metric()

    def error(self, msg: str, err: BaseException | None = None, *key_values: Any) -> None:
        self._record_metric()

    def _record_metric(self) -> None:
        if self._metric is not None:
            self._metric.record_context(self._ctx, 1)

    def __repr__(self) -> str:
        return "Discard()"


DISCARD = Discard()


def new_discard() -> Discard:
    """Return a fresh discarding logger."""
    return Discard()


__all__ = ["DISCARD", "DISCARD_NAME", "Discard", "new_discard"]

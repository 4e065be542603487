"""Metric capability consumed by loggers.

Loggers do not store or aggregate anything: ``Logger.info`` and
``Logger.error`` call ``record_context(ctx, 1)`` on the attached metric and
move on. Any object with that method can be attached, for example an adapter
over a Prometheus counter that turns context values into labels.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from scopelog.context import LogContext


@runtime_checkable
class Metric(Protocol):
    """Something that can record a value for a context."""

    def record_context(self, ctx: LogContext, value: float) -> None:
        """Record ``value``. Must not raise."""
        ...


__all__ = ["Metric"]

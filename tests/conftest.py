"""
Shared pytest fixtures for scopelog tests.

This module provides:
- A pinned clock so log lines have a known timestamp
- In-memory sinks
- A counting metric
- Fresh registries for test isolation

Usage:
    def test_something(registry, sink, fixed_now):
        log = registry.register("x")
        ...
"""

from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Any, Generator

import pytest
import structlog

from scopelog import Level, Registry, Settings
from scopelog.context import LogContext
from scopelog.diagnostics import configure_diagnostics


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "concurrency"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Diagnostics
# =============================================================================


@pytest.fixture(autouse=True)
def quiet_diagnostics() -> Generator[StringIO, None, None]:
    """
    Route scopelog's own structlog events to memory.

    Keeps diagnostics out of captured stdout/stderr so tests can compare
    sink output exactly.
    """
    stream = StringIO()
    configure_diagnostics(level="WARNING", json_format=True, stream=stream)
    yield stream
    structlog.reset_defaults()


# =============================================================================
# Deterministic Time
# =============================================================================

FIXED_TIME = datetime(2021, 12, 9, 17, 37, 46)
FIXED_STAMP = "2021/12/09 17:37:46"


@pytest.fixture
def fixed_now():
    """Clock that always returns 2021/12/09 17:37:46."""
    return lambda: FIXED_TIME


# =============================================================================
# Sinks, Metrics, Registries
# =============================================================================


@pytest.fixture
def sink() -> StringIO:
    return StringIO()


class CountingMetric:
    """Metric double that sums recorded values and remembers contexts."""

    def __init__(self) -> None:
        self.count = 0.0
        self.contexts: list[LogContext] = []

    def record_context(self, ctx: LogContext, value: float) -> None:
        self.count += value
        self.contexts.append(ctx)


@pytest.fixture
def metric() -> CountingMetric:
    return CountingMetric()


@pytest.fixture
def registry() -> Registry:
    """Isolated registry that does not read the environment."""
    return Registry(Settings(default_level=Level.INFO, levels={}, output="stdout"))


@pytest.fixture
def scope_name(request: pytest.FixtureRequest) -> str:
    """Unique logger name for tests that use the process-wide registry."""
    return f"test-{Path(request.node.path).stem}-{request.node.name}"


class BrokenSink:
    """Sink whose writes always fail."""

    def __init__(self, exc: Exception):
        self.exc = exc
        self.attempts = 0

    def write(self, data: Any) -> int:
        self.attempts += 1
        raise self.exc


@pytest.fixture
def broken_sink():
    """Factory for sinks that raise ``exc`` on every write."""
    return BrokenSink

"""Line formatters for scoped loggers.

A logger builds a ``Record`` snapshot for every emitted message and hands it
to the formatter it was created with. Formatters are pure: same record in,
same line out.

Structured (key=value, machine parseable)::

    time="2021/12/09 17:37:46" level=info scope="api" msg="started" port=8080 env="prod"
    time="2021/12/09 17:37:46" level=error scope="api" msg="bind failed" port=8080 error="address in use"

Unstructured (printf message, metadata in brackets)::

    2021/12/09 17:37:46  info   listening on port 8080 [request_id="abc" env="prod"]
    2021/12/09 17:37:46  error  bind failed: address in use

Key/value ordering in both cases: values from the bound context first, then
values accumulated with ``bind``, then (structured only) values passed at
the call site. Duplicate keys are all written.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from scopelog.context import MISSING
from scopelog.level import Level
from scopelog.printf import quote, render_value, sprintf

TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


@dataclass(frozen=True)
class Record:
    """Everything a formatter needs to render one line."""

    time: datetime
    level: Level
    scope: str
    message: str
    error: BaseException | None = None
    context_values: tuple[Any, ...] = ()
    scope_values: tuple[Any, ...] = ()
    call_values: tuple[Any, ...] = ()


class Formatter(Protocol):
    """Rendering strategy used by a logger."""

    def format(self, record: Record) -> str:
        """Render ``record`` as a single newline-terminated line."""
        ...


def format_time(t: datetime) -> str:
    return t.strftime(TIME_FORMAT)


def format_key_values(key_values: tuple[Any, ...] | list[Any]) -> list[str]:
    """Render a flat key/value sequence as ``key=value`` fragments.

    Pairs whose key is not a string are skipped. A trailing key without a
    value renders as ``key="(MISSING)"``. String values are quoted.
    """
    fragments = []
    for i in range(0, len(key_values), 2):
        key = key_values[i]
        if not isinstance(key, str):
            continue
        value = key_values[i + 1] if i + 1 < len(key_values) else MISSING
        if isinstance(value, str):
            fragments.append(f"{key}={quote(value)}")
        else:
            fragments.append(f"{key}={render_value(value)}")
    return fragments


def error_text(err: BaseException) -> str:
    return render_value(err)


class StructuredFormatter:
    """Renders ``time="..." level=... scope="..." msg="..." k="v" ...`` lines."""

    def format(self, record: Record) -> str:
        parts = [
            f"time={quote(format_time(record.time))}",
            f"level={record.level}",
            f"scope={quote(record.scope)}",
            f"msg={quote(record.message)}",
        ]
        parts.extend(format_key_values(record.context_values))
        parts.extend(format_key_values(record.scope_values))
        parts.extend(format_key_values(record.call_values))
        if record.error is not None:
            parts.append(f"error={quote(error_text(record.error))}")
        return " ".join(parts) + "\n"

    def __repr__(self) -> str:
        return "StructuredFormatter()"


class UnstructuredFormatter:
    """Renders ``<time>  <level>  <message> [k=v ...]`` lines.

    Call-site values are the printf arguments of the message; the error,
    when given, is appended as the last argument.
    """

    def format(self, record: Record) -> str:
        args = list(record.call_values)
        if record.error is not None:
            args.append(record.error)

        line = f"{format_time(record.time)}  {record.level:<5}  {sprintf(record.message, *args)}"

        metadata = format_key_values(record.context_values)
        metadata.extend(format_key_values(record.scope_values))
        if metadata:
            line += " [" + " ".join(metadata) + "]"

        return line + "\n"

    def __repr__(self) -> str:
        return "UnstructuredFormatter()"


__all__ = [
    "Formatter",
    "Record",
    "StructuredFormatter",
    "TIME_FORMAT",
    "UnstructuredFormatter",
    "format_key_values",
    "format_time",
]

"""Environment-driven settings for the logger registry.

New scopes take their initial level and output stream from ``Settings``;
``levels`` lets operators raise or lower individual scopes without touching
code. Values come from ``SCOPELOG_*`` environment variables:

    SCOPELOG_DEFAULT_LEVEL=info
    SCOPELOG_LEVELS="db:debug,http:error"
    SCOPELOG_OUTPUT=stderr
    SCOPELOG_DIAGNOSTICS_LEVEL=WARNING

Examples:
    >>> from scopelog.settings import Settings
    >>> s = Settings(levels="db:debug,http:error")
    >>> s.levels
    {'db': <Level.DEBUG: 3>, 'http': <Level.ERROR: 1>}
"""

from __future__ import annotations

import sys
from typing import Annotated, Any, Literal, TextIO

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from scopelog.errors import ConfigError, InvalidLevelError
from scopelog.level import Level, parse_level


def parse_scope_levels(value: str) -> dict[str, Level]:
    """Parse ``"scope:level,scope:level"`` into a mapping.

    Raises:
        ConfigError: If an entry is not ``scope:level`` or names an unknown level.
    """
    result: dict[str, Level] = {}
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        scope, sep, token = entry.rpartition(":")
        if not sep or not scope.strip():
            raise ConfigError("levels", entry, f"expected scope:level, got {entry!r}")
        try:
            result[scope.strip()] = parse_level(token)
        except InvalidLevelError as e:
            raise ConfigError("levels", entry, cause=e) from e
    return result


class Settings(BaseSettings):
    """Registry-wide logging settings.

    Fields
    ──────
    default_level      : Level for newly registered scopes
    levels             : Per-scope level overrides
    output             : Stream new scopes write to
    diagnostics_level  : stdlib level for scopelog's own events
    diagnostics_json   : Render diagnostics as JSON (None = auto)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCOPELOG_",
        extra="ignore",
    )

    default_level: Level = Level.INFO
    levels: Annotated[dict[str, Level], NoDecode] = Field(default_factory=dict)
    output: Literal["stdout", "stderr"] = "stdout"
    diagnostics_level: str = "WARNING"
    diagnostics_json: bool | None = None

    @field_validator("default_level", mode="before")
    @classmethod
    def parse_default_level(cls, value: Any) -> Level:
        try:
            return parse_level(value)
        except InvalidLevelError as e:
            raise ValueError(str(e)) from e

    @field_validator("levels", mode="before")
    @classmethod
    def parse_levels(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return parse_scope_levels(value)
            except ConfigError as e:
                raise ValueError(e.message) from e
        if isinstance(value, dict):
            try:
                return {str(k): parse_level(v) for k, v in value.items()}
            except InvalidLevelError as e:
                raise ValueError(str(e)) from e
        return value

    @field_validator("diagnostics_level")
    @classmethod
    def check_diagnostics_level(cls, value: str) -> str:
        upper = value.strip().upper()
        if upper not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"invalid diagnostics level: {value!r}")
        return upper

    def level_for(self, name: str) -> Level:
        """Initial level for the scope called ``name``."""
        return self.levels.get(name, self.default_level)

    def stream(self) -> TextIO:
        return sys.stderr if self.output == "stderr" else sys.stdout


__all__ = ["Settings", "parse_scope_levels"]

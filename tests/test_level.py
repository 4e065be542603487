"""Tests for logging levels."""

import pytest

from scopelog import InvalidLevelError, Level, as_level, parse_level


class TestLevel:
    """Tests for the Level enum."""

    def test_ordering(self):
        """Levels are ordered by verbosity."""
        assert Level.NONE < Level.ERROR < Level.INFO < Level.DEBUG
        assert int(Level.NONE) == 0
        assert int(Level.DEBUG) == 3

    @pytest.mark.parametrize(
        "level,token",
        [
            (Level.NONE, "none"),
            (Level.ERROR, "error"),
            (Level.INFO, "info"),
            (Level.DEBUG, "debug"),
        ],
    )
    def test_string_round_trip(self, level, token):
        """str() and as_level() are inverses."""
        assert str(level) == token
        assert as_level(token) == (level, True)

    def test_format_padding(self):
        """Levels pad like their token."""
        assert f"{Level.INFO:<5}|" == "info |"
        assert f"{Level.ERROR:<5}|" == "error|"


class TestAsLevel:
    """Tests for the non-raising conversion."""

    @pytest.mark.parametrize("token", ["", "INFO", "warn", " info", "verbose"])
    def test_unknown_tokens_report_failure(self, token):
        """Unknown or differently cased tokens are not recognised."""
        _, ok = as_level(token)
        assert ok is False

    def test_non_string_input(self):
        """Non-string input is a miss, not a crash."""
        assert as_level(None) == (Level.NONE, False)  # type: ignore[arg-type]


class TestParseLevel:
    """Tests for the strict conversion used by configuration."""

    def test_accepts_any_case_and_whitespace(self):
        assert parse_level(" DEBUG ") is Level.DEBUG

    def test_accepts_level_and_int(self):
        assert parse_level(Level.ERROR) is Level.ERROR
        assert parse_level(2) is Level.INFO

    @pytest.mark.parametrize("value", ["loud", 7, -1, True, None])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidLevelError) as exc_info:
            parse_level(value)
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.to_dict()["error_type"] == "InvalidLevelError"

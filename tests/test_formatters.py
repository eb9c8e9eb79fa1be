"""Tests for text escaping and timestamp formatting."""

from datetime import datetime, timedelta, timezone

import pytest

from calfeed.output.formatters import escape_text, format_timestamp, unescape_text


def test_escape_special_characters():
    """Backslash, semicolon, comma and newline are escaped."""
    assert escape_text("a\\b") == "a\\\\b"
    assert escape_text("a;b") == "a\\;b"
    assert escape_text("a,b") == "a\\,b"
    assert escape_text("line1\nline2") == "line1\\nline2"


def test_escape_drops_carriage_returns():
    """CR characters are removed, CRLF becomes a single escaped newline."""
    assert escape_text("a\rb") == "ab"
    assert escape_text("line1\r\nline2") == "line1\\nline2"


def test_escape_does_not_double_escape():
    """Escapes added for one character are not escaped again."""
    assert escape_text("\\;") == "\\\\\\;"
    assert escape_text("Lunch, then; review\\notes") == "Lunch\\, then\\; review\\\\notes"


@pytest.mark.parametrize("value", [None, ""])
def test_escape_empty_input(value):
    """Missing text yields an empty string."""
    assert escape_text(value) == ""


def test_escape_plain_text_unchanged():
    assert escape_text("Team Sync") == "Team Sync"


@pytest.mark.parametrize(
    "text",
    [
        "Standup, daily; 15 min",
        "C:\\path\\to\\file",
        "multi\nline\ndescription",
        "\\n is not a newline",
        "trailing backslash \\",
    ],
)
def test_unescape_recovers_original(text):
    """Escaping then unescaping returns the input for \\ , ; and newlines."""
    assert unescape_text(escape_text(text)) == text


def test_format_timestamp_aware_utc():
    dt = datetime(2024, 6, 1, 9, 0, 0, tzinfo=timezone.utc)
    assert format_timestamp(dt) == "20240601T090000Z"


def test_format_timestamp_converts_offsets_to_utc():
    dt = datetime(2024, 6, 1, 11, 30, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(dt) == "20240601T093000Z"


def test_format_timestamp_naive_treated_as_utc():
    assert format_timestamp(datetime(2024, 12, 31, 23, 59, 59)) == "20241231T235959Z"


def test_format_timestamp_drops_fractional_seconds():
    dt = datetime(2024, 6, 1, 9, 0, 5, 987654, tzinfo=timezone.utc)
    assert format_timestamp(dt) == "20240601T090005Z"

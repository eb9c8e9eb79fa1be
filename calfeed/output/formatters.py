"""Text escaping and timestamp formatting for iCalendar content lines."""

from datetime import datetime, timezone

from icalendar import vDatetime, vText


def clean_text(text: str | None) -> str:
    """Drop carriage returns; missing input becomes ""."""
    if not text:
        return ""
    return text.replace("\r", "")


def escape_text(text: str | None) -> str:
    """Escape a free-text value (RFC 5545 TEXT).

    Carriage returns are dropped. Missing or empty input yields "".
    """
    return vText(clean_text(text)).to_ical().decode("utf-8")


def unescape_text(text: str | None) -> str:
    """Reverse escape_text.

    Escapes are resolved left to right, so an escaped backslash followed
    by "n" stays a backslash and a letter.
    """
    if not text:
        return ""
    out = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        if nxt in ("n", "N"):
            out.append("\n")
        else:
            out.append(nxt)
    return "".join(out)


def as_utc_datetime(dt: datetime) -> datetime:
    """Aware UTC datetime without fractional seconds.

    Naive datetimes are taken to already be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).replace(microsecond=0)


def format_timestamp(dt: datetime) -> str:
    """Render an instant as YYYYMMDDTHHMMSSZ in UTC."""
    return vDatetime(as_utc_datetime(dt)).to_ical().decode("utf-8")

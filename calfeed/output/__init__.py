"""Output layer for calendar feeds."""

from calfeed.output.base import FeedWriter
from calfeed.output.formatters import escape_text, format_timestamp, unescape_text
from calfeed.output.ics_writer import ICSWriter, render_feed

__all__ = [
    "FeedWriter",
    "ICSWriter",
    "escape_text",
    "format_timestamp",
    "render_feed",
    "unescape_text",
]

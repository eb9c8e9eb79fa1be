"""Display module for rendering CLI output.

- console: Shared Rich console instance
- TableRenderer: Calendar and event tables
- Formatting helpers for relative times and time ranges
"""

from cli.display.console import console
from cli.display.formatters import format_relative_time, format_time_range
from cli.display.table_renderer import CalendarInfo, TableRenderer

__all__ = [
    "console",
    "TableRenderer",
    "CalendarInfo",
    "format_relative_time",
    "format_time_range",
]

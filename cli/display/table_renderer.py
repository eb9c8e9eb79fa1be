"""Table renderer for calendar and event lists."""

from dataclasses import dataclass
from datetime import datetime

from rich.table import Table

from calfeed.models.calendar import CalendarSnapshot
from cli.display.console import console
from cli.display.formatters import format_relative_time, format_time_range


@dataclass
class CalendarInfo:
    """Information about a calendar for display."""

    id: str
    name: str
    owner: str
    event_count: int
    created_at: datetime


class TableRenderer:
    """Render tables for calendar and event lists.

    Uses Rich's Table class for consistent, well-formatted output.
    """

    def render_empty(self, message: str) -> None:
        console.print(message)

    def render_calendar_list(self, calendars: list[CalendarInfo]) -> None:
        """Render a list of calendars as a table."""
        if not calendars:
            console.print("No calendars found")
            return

        console.print(f"Listing {len(calendars)} calendars:")
        console.print()

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("ID", style="dim")
        table.add_column("NAME", style="cyan")
        table.add_column("OWNER")
        table.add_column("EVENTS", justify="right")
        table.add_column("CREATED", style="dim")

        for cal in calendars:
            table.add_row(
                cal.id,
                cal.name,
                cal.owner,
                str(cal.event_count),
                format_relative_time(cal.created_at),
            )

        console.print(table)

    def render_event_list(self, snapshot: CalendarSnapshot) -> None:
        """Render the events of a calendar in feed order."""
        console.print(f"[bold]{snapshot.name}[/bold] ({snapshot.id})")
        if snapshot.description:
            console.print(f"[dim]{snapshot.description}[/dim]")
        console.print()

        if not snapshot.events:
            console.print("No events")
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("DATE")
        table.add_column("TIME (UTC)")
        table.add_column("TITLE", style="cyan")
        table.add_column("LOCATION", style="dim")

        for event in snapshot.events:
            table.add_row(
                event.date.isoformat(),
                format_time_range(event.starts_at, event.ends_at),
                event.title,
                event.location or "-",
            )

        console.print(table)

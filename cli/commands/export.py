"""Export a calendar feed to an ICS file."""

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from calfeed.exceptions import CalendarNotFoundError
from cli.context import get_context

logger = logging.getLogger(__name__)


def export(
    calendar_id: Annotated[
        str,
        typer.Argument(help="Calendar ID to export"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path (default: <calendar id>.ics)"),
    ] = None,
) -> None:
    """Write the calendar's feed document to a file."""
    ctx = get_context()
    writer = ctx.writer

    try:
        snapshot = ctx.calendars.get_snapshot(calendar_id)
    except CalendarNotFoundError:
        logger.error(f"Calendar '{calendar_id}' not found")
        raise typer.Exit(1)

    path = output or Path(f"{calendar_id}.{writer.get_extension()}")
    try:
        writer.write(snapshot, path)
    except OSError as e:
        logger.error(f"Export failed: {e}")
        raise typer.Exit(1)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Exported ICS")
    print(f"  {path.resolve()}")
    print(f"  Events: {len(snapshot.events)}")

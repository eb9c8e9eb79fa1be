"""Delete a calendar."""

import logging

import typer
from typing_extensions import Annotated

from calfeed.exceptions import CalfeedError, CalendarNotFoundError
from cli.context import get_context

logger = logging.getLogger(__name__)


def delete(
    calendar_id: Annotated[
        str,
        typer.Argument(help="Calendar ID to delete"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """Delete a calendar and all of its events."""
    ctx = get_context()
    repository = ctx.calendars

    try:
        calendar = repository.get_calendar(calendar_id)
    except CalendarNotFoundError:
        logger.error(f"Calendar '{calendar_id}' not found")
        raise typer.Exit(1)

    if not force:
        event_count = len(repository.list_events(calendar_id))
        print(f"\nDelete calendar '{calendar.name}' ({calendar_id})")
        print(f"  Owner: {calendar.owner_email}")
        print(f"  Events: {event_count}")
        print("\n  The feed URL will stop working.")
        print()
        if not typer.confirm("Continue?"):
            typer.echo("Delete cancelled.")
            return

    try:
        repository.delete_calendar(calendar_id)
    except CalfeedError as e:
        logger.error(f"Failed to delete calendar '{calendar_id}': {e}")
        raise typer.Exit(1)

    print(
        f"\n{typer.style('✓', fg=typer.colors.GREEN, bold=True)} "
        f"Calendar '{calendar.name}' deleted"
    )

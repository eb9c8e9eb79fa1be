"""Mirror events from an upstream ICS feed into a calendar."""

import logging

import typer
from typing_extensions import Annotated

from calfeed.exceptions import CalendarNotFoundError, RemoteFetchError, StorageError
from cli.context import get_context

logger = logging.getLogger(__name__)


def mirror(
    calendar_id: Annotated[
        str,
        typer.Argument(help="Calendar ID to import into"),
    ],
    source_url: Annotated[
        str | None,
        typer.Argument(help="ICS feed URL (defaults to the calendar's source)"),
    ] = None,
) -> None:
    """Import events from an upstream feed. Already mirrored events are skipped."""
    ctx = get_context()

    try:
        calendar = ctx.calendars.get_calendar(calendar_id)
    except CalendarNotFoundError:
        logger.error(f"Calendar '{calendar_id}' not found")
        raise typer.Exit(1)

    url = source_url or calendar.source_url
    if not url:
        logger.error(f"Calendar '{calendar_id}' has no source URL; pass one explicitly")
        raise typer.Exit(1)

    try:
        added = ctx.mirror.mirror(calendar_id, url)
    except (RemoteFetchError, StorageError) as e:
        logger.error(f"Mirroring failed: {e}")
        raise typer.Exit(1)

    print(
        f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} "
        f"Mirrored {added} new events into '{calendar.name}'"
    )

"""Display a calendar's events or its rendered feed."""

import logging

import typer
from typing_extensions import Annotated

from calfeed.exceptions import CalendarNotFoundError
from cli.context import get_context
from cli.display import TableRenderer

logger = logging.getLogger(__name__)


def show(
    calendar_id: Annotated[
        str,
        typer.Argument(help="Calendar ID"),
    ],
    raw: Annotated[
        bool,
        typer.Option("--raw", "-r", help="Print the ICS feed instead of a table"),
    ] = False,
) -> None:
    """Show the events of a calendar."""
    ctx = get_context()

    try:
        snapshot = ctx.calendars.get_snapshot(calendar_id)
    except CalendarNotFoundError:
        logger.error(f"Calendar '{calendar_id}' not found")
        raise typer.Exit(1)

    if raw:
        typer.echo(ctx.writer.render(snapshot), nl=False)
        return

    TableRenderer().render_event_list(snapshot)

"""List calendars."""

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.display.table_renderer import CalendarInfo, TableRenderer


def ls(
    owner: Annotated[
        str | None,
        typer.Option("--owner", "-o", help="Only calendars owned by this email"),
    ] = None,
) -> None:
    """List all calendars with their event counts."""
    ctx = get_context()
    repository = ctx.calendars
    renderer = TableRenderer()

    calendars = repository.list_calendars(owner_email=owner.lower() if owner else None)
    if not calendars:
        renderer.render_empty("No calendars found")
        return

    calendar_info = [
        CalendarInfo(
            id=cal.id,
            name=cal.name,
            owner=cal.owner_email,
            event_count=len(repository.list_events(cal.id)),
            created_at=cal.created_at,
        )
        for cal in calendars
    ]
    renderer.render_calendar_list(calendar_info)

"""Create a new calendar."""

import logging

import typer
from typing_extensions import Annotated

from calfeed.exceptions import CalfeedError
from calfeed.models.auth import normalize_email
from calfeed.subscription_urls import SubscriptionUrlGenerator
from cli.context import get_context
from cli.display import console

logger = logging.getLogger(__name__)


def new(
    owner: Annotated[
        str,
        typer.Argument(help="Owner email"),
    ],
    name: Annotated[
        str,
        typer.Argument(help="Display name"),
    ],
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="Human-readable description"),
    ] = None,
    source_url: Annotated[
        str | None,
        typer.Option("--source", "-s", help="Upstream ICS feed to mirror"),
    ] = None,
) -> None:
    """Create a new calendar for OWNER.

    Example:
        calfeed new a@b.com "Team Sync" --description "Weekly syncs"
    """
    ctx = get_context()
    owner_email = normalize_email(owner)
    if "@" not in owner_email:
        logger.error(f"Invalid owner email: {owner}")
        raise typer.Exit(1)

    try:
        ctx.database.create_all()
        calendar = ctx.calendars.create_calendar(
            owner_email=owner_email,
            name=name,
            description=description,
            source_url=source_url,
        )
    except CalfeedError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    urls = SubscriptionUrlGenerator(ctx.config.backend_base_url)
    console.print(f"\n[bold green]✓[/bold green] Calendar '{calendar.name}' created")
    console.print(f"  ID: {calendar.id}")
    console.print(f"  Owner: {calendar.owner_email}")
    if description:
        console.print(f"  Description: {description}")
    console.print(f"  Feed: {urls.feed_url(calendar.id)}")
    console.print(f"  Subscribe: {urls.webcal_url(calendar.id)}")

    if source_url:
        added = ctx.mirror.mirror_best_effort(calendar.id, source_url)
        if added is None:
            console.print("  [yellow]Mirroring failed, see log for details[/yellow]")
        else:
            console.print(f"  Mirrored: {added} events")

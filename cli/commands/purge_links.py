"""Garbage-collect expired magic links."""

import logging
from datetime import datetime, timedelta, timezone

import typer
from typing_extensions import Annotated

from calfeed.exceptions import StorageError
from cli.context import get_context

logger = logging.getLogger(__name__)


def purge_links(
    older_than_days: Annotated[
        int,
        typer.Option(
            "--older-than", help="Only purge links that expired at least N days ago"
        ),
    ] = 0,
) -> None:
    """Delete expired magic links from the database."""
    ctx = get_context()
    cutoff = datetime.now(timezone.utc) - timedelta(days=older_than_days)
    try:
        count = ctx.auth_repository.purge_expired_magic_links(cutoff)
    except StorageError as e:
        logger.error(f"Purge failed: {e}")
        raise typer.Exit(1)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Purged {count} links")

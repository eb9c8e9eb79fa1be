"""Create database tables."""

import logging

import typer

from calfeed.exceptions import StorageError
from cli.context import get_context

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create any missing tables in the configured database."""
    ctx = get_context()
    try:
        ctx.database.create_all()
    except StorageError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    print(
        f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} "
        f"Database ready ({ctx.database.dialect})"
    )

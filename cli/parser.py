"""CLI application and command routing."""

import logging

import typer
from typing_extensions import Annotated

from cli import setup_logging
from cli.commands import (
    delete,
    export,
    init_db,
    ls,
    mirror,
    new,
    purge_links,
    serve,
    show,
)
from cli.context import CLIContext, set_context

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="calfeed",
    help="Calendar subscription feed service.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show info messages")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
) -> None:
    """Set up logging and the shared context before any command runs."""
    ctx = CLIContext(verbose=verbose, quiet=quiet)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)
    set_context(ctx)


app.command("serve")(serve)
app.command("init-db")(init_db)
app.command("ls")(ls)
app.command("show")(show)
app.command("export")(export)
app.command("new")(new)
app.command("delete")(delete)
app.command("mirror")(mirror)
app.command("purge-links")(purge_links)

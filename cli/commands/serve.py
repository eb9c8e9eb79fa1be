"""Run the HTTP server."""

import logging

import typer
from typing_extensions import Annotated

from calfeed import create_app
from cli.context import get_context

logger = logging.getLogger(__name__)


def serve(
    host: Annotated[
        str,
        typer.Option("--host", help="Interface to bind"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", "-p", envvar="PORT", help="Port to listen on"),
    ] = 3000,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable the Flask debugger and reloader"),
    ] = False,
) -> None:
    """Serve the API and the public feeds (development server)."""
    ctx = get_context()
    app = create_app(ctx)
    logger.info(f"Server running on http://{host}:{port}")
    logger.info(
        f"Subscription feeds: {ctx.config.backend_base_url}"
        "/api/subscriptions/{calendarId}/feed.ics"
    )
    app.run(host=host, port=port, debug=debug)

"""Shared CLI context with lazy-initialized dependencies."""

from calfeed.config import FeedConfig
from calfeed.context import ServiceContext


class CLIContext(ServiceContext):
    """Service context plus the CLI's output flags.

    Usage:
        ctx = CLIContext()
        calendars = ctx.calendars.list_calendars()
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        config: FeedConfig | None = None,
    ):
        """Initialize CLI context.

        Args:
            verbose: If True, enable info logging on the console
            quiet: If True, suppress non-error output
            config: Optional configuration (loaded from env when omitted)
        """
        super().__init__(config=config)
        self.verbose = verbose
        self.quiet = quiet


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context."""
    global _ctx
    _ctx = ctx

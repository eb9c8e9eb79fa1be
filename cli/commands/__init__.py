"""CLI commands package."""

from cli.commands.delete import delete
from cli.commands.export import export
from cli.commands.init_db import init_db
from cli.commands.ls import ls
from cli.commands.mirror import mirror
from cli.commands.new import new
from cli.commands.purge_links import purge_links
from cli.commands.serve import serve
from cli.commands.show import show

__all__ = [
    "delete",
    "export",
    "init_db",
    "ls",
    "mirror",
    "new",
    "purge_links",
    "serve",
    "show",
]

"""Base classes for feed writers."""

from pathlib import Path
from typing import Protocol

from calfeed.models.calendar import CalendarSnapshot


class FeedWriter(Protocol):
    """Protocol for feed writers."""

    def render(self, snapshot: CalendarSnapshot) -> str:
        """Render snapshot to document text."""
        ...

    def write(self, snapshot: CalendarSnapshot, path: Path) -> None:
        """Write snapshot to file path."""
        ...

    def get_extension(self) -> str:
        """Returns file extension (e.g., 'ics')."""
        ...

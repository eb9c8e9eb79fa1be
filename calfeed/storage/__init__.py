"""Storage layer for calendars, events and login state."""

from calfeed.storage.auth_repository import AuthRepository
from calfeed.storage.calendar_repository import CalendarRepository
from calfeed.storage.database import Database

__all__ = [
    "AuthRepository",
    "CalendarRepository",
    "Database",
]

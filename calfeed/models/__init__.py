"""Pydantic models for the calendar feed service."""

from calfeed.models.auth import MagicLink, SessionClaims, User, normalize_email
from calfeed.models.calendar import Calendar, CalendarSnapshot
from calfeed.models.event import Event

__all__ = [
    "Calendar",
    "CalendarSnapshot",
    "Event",
    "MagicLink",
    "SessionClaims",
    "User",
    "normalize_email",
]

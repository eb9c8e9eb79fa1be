"""Calendar models with Pydantic v2 validation."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from calfeed.models.event import Event


class Calendar(BaseModel):
    """A named calendar owned by a single user."""

    id: str
    name: str
    description: str | None = None
    owner_email: str
    created_at: datetime
    source_url: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must not be empty")
        return v

    def to_api_dict(self) -> dict:
        """Serialize for HTTP responses."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "ownerEmail": self.owner_email,
            "createdAt": self.created_at.isoformat(),
            "sourceUrl": self.source_url,
        }


class CalendarSnapshot(BaseModel):
    """Everything the feed renderer needs, read from the store in one go.

    Events keep the order the store returned them in (by date).
    """

    id: str
    name: str
    description: str | None = None
    events: list[Event] = []

    @classmethod
    def from_calendar(cls, calendar: Calendar, events: list[Event]) -> "CalendarSnapshot":
        return cls(
            id=calendar.id,
            name=calendar.name,
            description=calendar.description,
            events=events,
        )

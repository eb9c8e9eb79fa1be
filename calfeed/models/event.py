"""Event model with Pydantic v2 validation."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_START = time(12, 0)
DEFAULT_DURATION = timedelta(hours=1)


def parse_time_of_day(v) -> Optional[time]:
    """Convert HH:MM, HH:MM:SS or HHMM strings to a time object."""
    if v is None or v == "":
        return None
    if isinstance(v, time):
        return v
    if isinstance(v, str):
        v = v.strip()
        # Handle HHMM format (e.g., "1230" -> 12:30)
        if len(v) == 4 and v.isdigit():
            hour = int(v[:2])
            minute = int(v[2:])
            if 0 <= hour <= 23 and 0 <= minute <= 59:
                return time(hour, minute)
        else:
            try:
                return time.fromisoformat(v)
            except ValueError:
                pass
    raise ValueError(f"Invalid time format: {v}")


class Event(BaseModel):
    """Calendar event.

    Times of day are wall-clock UTC. A missing start means noon and a
    missing end means one hour after the start.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    date: date
    start: Optional[time] = Field(default=None, alias="time")
    end: Optional[time] = Field(default=None, alias="endTime")
    description: Optional[str] = None
    location: Optional[str] = None
    external_uid: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def convert_time_string(cls, v):
        return parse_time_of_day(v)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title must not be empty")
        return v

    @model_validator(mode="after")
    def validate_times(self):
        """An explicit end must not come before the effective start."""
        if self.end is not None and self.end < (self.start or DEFAULT_START):
            raise ValueError("end time must be >= start time")
        return self

    @property
    def starts_at(self) -> datetime:
        """Effective start as an aware UTC datetime."""
        return datetime.combine(
            self.date, self.start or DEFAULT_START, tzinfo=timezone.utc
        )

    @property
    def ends_at(self) -> datetime:
        """Effective end as an aware UTC datetime."""
        if self.end is not None:
            return datetime.combine(self.date, self.end, tzinfo=timezone.utc)
        return self.starts_at + DEFAULT_DURATION

    def to_api_dict(self) -> dict:
        """Serialize using the field names the HTTP API accepts."""
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "time": self.start.strftime("%H:%M") if self.start else None,
            "endTime": self.end.strftime("%H:%M") if self.end else None,
            "description": self.description,
            "location": self.location,
        }

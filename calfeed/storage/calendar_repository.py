"""Calendar repository for calendars and their events."""

import logging
import uuid
from datetime import datetime
from typing import Callable

from sqlalchemy import Time, func, literal, select

from calfeed.exceptions import CalendarNotFoundError, EventNotFoundError
from calfeed.models.auth import as_utc, utcnow
from calfeed.models.calendar import Calendar, CalendarSnapshot
from calfeed.models.event import DEFAULT_START, Event
from calfeed.storage.database import Database
from calfeed.storage.schema import CalendarRecord, EventRecord

logger = logging.getLogger(__name__)


def new_public_id() -> str:
    """Opaque identifier used in public URLs."""
    return uuid.uuid4().hex


def _to_calendar(record: CalendarRecord) -> Calendar:
    return Calendar(
        id=record.public_id,
        name=record.name,
        description=record.description,
        owner_email=record.owner_email,
        created_at=as_utc(record.created_at),
        source_url=record.source_url,
    )


def _to_event(record: EventRecord) -> Event:
    return Event(
        id=record.public_id,
        title=record.title,
        description=record.description,
        location=record.location,
        date=record.event_date,
        start=record.start_time,
        end=record.end_time,
        external_uid=record.external_uid,
    )


class CalendarRepository:
    """Repository for calendars and events with dependency injection."""

    def __init__(self, database: Database, clock: Callable[[], datetime] = utcnow):
        """
        Initialize repository.

        Args:
            database: Database instance (dependency injection)
            clock: Source of creation timestamps
        """
        self.database = database
        self.clock = clock

    def _find(self, session, calendar_id: str, owner_email: str | None) -> CalendarRecord:
        stmt = select(CalendarRecord).where(CalendarRecord.public_id == calendar_id)
        if owner_email is not None:
            stmt = stmt.where(CalendarRecord.owner_email == owner_email)
        record = session.scalars(stmt).one_or_none()
        if record is None:
            raise CalendarNotFoundError(f"Calendar '{calendar_id}' not found")
        return record

    def create_calendar(
        self,
        owner_email: str,
        name: str,
        description: str | None = None,
        source_url: str | None = None,
    ) -> Calendar:
        """Create a calendar with a fresh public id."""
        record = CalendarRecord(
            public_id=new_public_id(),
            name=name,
            description=description or None,
            owner_email=owner_email,
            source_url=source_url or None,
            created_at=self.clock(),
        )
        with self.database.session() as session:
            session.add(record)
        logger.info(f"Created calendar {record.public_id} for {owner_email}")
        return _to_calendar(record)

    def get_calendar(self, calendar_id: str, owner_email: str | None = None) -> Calendar:
        """Find calendar by public id, optionally restricted to an owner."""
        with self.database.session() as session:
            return _to_calendar(self._find(session, calendar_id, owner_email))

    def list_calendars(self, owner_email: str | None = None) -> list[Calendar]:
        """List calendars, newest first."""
        stmt = select(CalendarRecord).order_by(CalendarRecord.created_at.desc())
        if owner_email is not None:
            stmt = stmt.where(CalendarRecord.owner_email == owner_email)
        with self.database.session() as session:
            return [_to_calendar(r) for r in session.scalars(stmt)]

    def count_calendars(self) -> int:
        with self.database.session() as session:
            return session.scalar(select(func.count()).select_from(CalendarRecord)) or 0

    def delete_calendar(self, calendar_id: str, owner_email: str | None = None) -> None:
        """Delete calendar and all of its events."""
        with self.database.session() as session:
            record = self._find(session, calendar_id, owner_email)
            session.delete(record)
        logger.info(f"Deleted calendar {calendar_id}")

    def _events(self, session, record: CalendarRecord) -> list[Event]:
        stmt = (
            select(EventRecord)
            .where(EventRecord.calendar_id == record.id)
            .order_by(
                EventRecord.event_date,
                # Untimed events sort at their effective noon start
                func.coalesce(EventRecord.start_time, literal(DEFAULT_START, Time)),
                EventRecord.id,
            )
        )
        return [_to_event(r) for r in session.scalars(stmt)]

    def list_events(self, calendar_id: str, owner_email: str | None = None) -> list[Event]:
        """Events of a calendar ordered by date, then start time."""
        with self.database.session() as session:
            return self._events(session, self._find(session, calendar_id, owner_email))

    def get_snapshot(self, calendar_id: str) -> CalendarSnapshot:
        """Read a calendar and its ordered events for feed rendering."""
        with self.database.session() as session:
            record = self._find(session, calendar_id, None)
            return CalendarSnapshot.from_calendar(
                _to_calendar(record), self._events(session, record)
            )

    def add_event(self, calendar_id: str, event: Event, owner_email: str | None = None) -> Event:
        """
        Store an event in a calendar.

        The event id supplied by the caller is replaced with a fresh one.

        Returns:
            The stored event
        """
        with self.database.session() as session:
            calendar = self._find(session, calendar_id, owner_email)
            record = EventRecord(
                public_id=new_public_id(),
                calendar_id=calendar.id,
                title=event.title,
                description=event.description,
                location=event.location,
                event_date=event.date,
                start_time=event.start,
                end_time=event.end,
                external_uid=event.external_uid,
            )
            session.add(record)
        logger.debug(f"Added event {record.public_id} to calendar {calendar_id}")
        return _to_event(record)

    def delete_event(
        self, calendar_id: str, event_id: str, owner_email: str | None = None
    ) -> None:
        """Delete a single event from a calendar."""
        with self.database.session() as session:
            calendar = self._find(session, calendar_id, owner_email)
            record = session.scalars(
                select(EventRecord).where(
                    EventRecord.calendar_id == calendar.id,
                    EventRecord.public_id == event_id,
                )
            ).one_or_none()
            if record is None:
                raise EventNotFoundError(
                    f"Event '{event_id}' not found in calendar '{calendar_id}'"
                )
            session.delete(record)
        logger.debug(f"Deleted event {event_id} from calendar {calendar_id}")

    def external_uids(self, calendar_id: str) -> set[str]:
        """UIDs of events already mirrored from the upstream source."""
        with self.database.session() as session:
            calendar = self._find(session, calendar_id, None)
            stmt = select(EventRecord.external_uid).where(
                EventRecord.calendar_id == calendar.id,
                EventRecord.external_uid.is_not(None),
            )
            return set(session.scalars(stmt))

"""ICS reader for upstream calendar feeds."""

import logging
from datetime import date, datetime, time, timezone
from typing import Protocol

import httpx
from icalendar import Calendar

from calfeed.exceptions import RemoteFetchError
from calfeed.models.event import Event

logger = logging.getLogger(__name__)


class RemoteEventSource(Protocol):
    """Capability interface for external calendar providers."""

    def fetch_remote_events(self, source_url: str) -> list[Event]:
        """Return the provider's events for the calendar at source_url."""
        ...


def _as_utc_datetime(value) -> datetime | None:
    """Normalize a DTSTART/DTEND value; None for all-day dates."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return None


def _vevent_to_event(vevent) -> Event | None:
    """Convert an ICS VEVENT component to an Event, or None to skip it."""
    title = str(vevent.get("summary", "")).strip()
    dtstart = vevent.get("dtstart")
    if not title or not dtstart:
        return None

    uid = str(vevent.get("uid")) if vevent.get("uid") else None
    description = str(vevent.get("description")) if vevent.get("description") else None
    location = str(vevent.get("location")) if vevent.get("location") else None

    start_dt = _as_utc_datetime(dtstart.dt)
    if start_dt is None:
        # All-day event: keep the date, default start and duration apply
        event_date: date = dtstart.dt
        start: time | None = None
        end: time | None = None
    else:
        event_date = start_dt.date()
        start = start_dt.time().replace(microsecond=0)
        end = None
        dtend = vevent.get("dtend")
        end_dt = _as_utc_datetime(dtend.dt) if dtend else None
        # Events ending on another day fall back to the default duration
        if end_dt is not None and end_dt.date() == event_date and end_dt.time() >= start:
            end = end_dt.time().replace(microsecond=0)

    return Event(
        id=uid or "",
        title=title,
        date=event_date,
        start=start,
        end=end,
        description=description,
        location=location,
        external_uid=uid,
    )


def parse_ics_events(content: bytes | str) -> list[Event]:
    """Parse VEVENTs from ICS content.

    Raises:
        RemoteFetchError: If the content is not a valid calendar
    """
    try:
        cal = Calendar.from_ical(content)
    except ValueError as e:
        raise RemoteFetchError(f"Failed to parse ICS content: {e}") from e

    events = []
    for component in cal.walk("VEVENT"):
        try:
            event = _vevent_to_event(component)
        except ValueError as e:
            logger.warning(f"Skipping unreadable event {component.get('uid')}: {e}")
            continue
        if event is not None:
            events.append(event)

    logger.info(f"Parsed {len(events)} events from ICS content")
    return events


class ICSFeedSource:
    """Fetches an upstream ICS feed over HTTP."""

    def __init__(self, timeout: float = 10.0, client: httpx.Client | None = None):
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch_remote_events(self, source_url: str) -> list[Event]:
        # webcal:// is plain https for fetching purposes
        if source_url.startswith("webcal://"):
            source_url = "https://" + source_url[len("webcal://"):]
        logger.info(f"Fetching remote calendar: {source_url}")
        try:
            response = self.client.get(source_url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteFetchError(
                f"Remote calendar returned {e.response.status_code}: {source_url}"
            ) from e
        except httpx.RequestError as e:
            raise RemoteFetchError(f"Remote calendar unreachable: {e}") from e
        return parse_ics_events(response.content)

"""ICS feed writer for published calendars."""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from icalendar import Calendar, Event, vDuration

from calfeed.models.calendar import CalendarSnapshot
from calfeed.output.formatters import as_utc_datetime, clean_text

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_ID = "-//Calendar App//Calfeed//EN"
DEFAULT_UID_DOMAIN = "calendar-app.com"
REFRESH_INTERVAL = timedelta(hours=1)


def build_calendar(
    snapshot: CalendarSnapshot,
    now: datetime | None = None,
    product_id: str = DEFAULT_PRODUCT_ID,
    uid_domain: str = DEFAULT_UID_DOMAIN,
) -> Calendar:
    """Build the icalendar component tree for a snapshot.

    Properties are added in feed order; serialize with ``sorted=False``
    to keep it.
    """
    stamp = as_utc_datetime(now or datetime.now(timezone.utc))

    cal = Calendar()
    cal.add("version", "2.0")
    cal.add("prodid", product_id)
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("X-WR-CALNAME", clean_text(snapshot.name))
    if snapshot.description:
        cal.add("X-WR-CALDESC", clean_text(snapshot.description))
    cal.add("X-WR-TIMEZONE", "UTC")
    cal.add(
        "REFRESH-INTERVAL",
        vDuration(REFRESH_INTERVAL),
        parameters={"VALUE": "DURATION"},
    )
    cal.add("X-PUBLISHED-TTL", vDuration(REFRESH_INTERVAL))

    for event_model in snapshot.events:
        event = Event()
        event.add("uid", f"{event_model.id}@{uid_domain}")
        event.add("dtstamp", stamp)
        event.add("dtstart", event_model.starts_at)
        event.add("dtend", event_model.ends_at)
        event.add("summary", clean_text(event_model.title))
        if event_model.description:
            event.add("description", clean_text(event_model.description))
        if event_model.location:
            event.add("location", clean_text(event_model.location))
        event.add("status", "CONFIRMED")
        event.add("sequence", 0)
        cal.add_component(event)

    return cal


def render_feed(
    snapshot: CalendarSnapshot,
    now: datetime | None = None,
    product_id: str = DEFAULT_PRODUCT_ID,
    uid_domain: str = DEFAULT_UID_DOMAIN,
) -> str:
    """
    Render a calendar snapshot as an iCalendar (VERSION 2.0) document.

    Property order is fixed. Events are emitted in the order given; the
    store is responsible for sorting them by date.

    Args:
        snapshot: Calendar name, description and events
        now: Generation time used for every DTSTAMP (defaults to utcnow)
        product_id: PRODID value
        uid_domain: Suffix appended to event ids to form UIDs

    Returns:
        The document as a string with CRLF line endings
    """
    cal = build_calendar(snapshot, now=now, product_id=product_id, uid_domain=uid_domain)
    return cal.to_ical(sorted=False).decode("utf-8")


class ICSWriter:
    """Writer for ICS calendar feeds."""

    def __init__(
        self,
        product_id: str = DEFAULT_PRODUCT_ID,
        uid_domain: str = DEFAULT_UID_DOMAIN,
    ):
        self.product_id = product_id
        self.uid_domain = uid_domain

    def render(self, snapshot: CalendarSnapshot, now: datetime | None = None) -> str:
        """Render snapshot to feed text."""
        return render_feed(
            snapshot, now=now, product_id=self.product_id, uid_domain=self.uid_domain
        )

    def write(self, snapshot: CalendarSnapshot, path: Path) -> None:
        """Write the rendered feed to a file path."""
        cal = build_calendar(
            snapshot, product_id=self.product_id, uid_domain=self.uid_domain
        )
        with open(path, "wb") as f:
            f.write(cal.to_ical(sorted=False))
        logger.info(f"Wrote {len(snapshot.events)} events to {path}")

    def get_extension(self) -> str:
        """Returns file extension."""
        return "ics"

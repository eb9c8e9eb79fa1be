"""Tests for upstream feed parsing and mirroring."""

from datetime import date, time

import httpx
import pytest

from calfeed.exceptions import CalendarNotFoundError, RemoteFetchError
from calfeed.ingestion.ics_reader import ICSFeedSource, parse_ics_events
from calfeed.ingestion.service import MirrorService
from calfeed.models.event import Event

REMOTE_ICS = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Remote//EN
BEGIN:VEVENT
UID:timed@remote
DTSTAMP:20240520T000000Z
DTSTART:20240601T090000Z
DTEND:20240601T091500Z
SUMMARY:Standup
LOCATION:Room 1
DESCRIPTION:Daily\\, short
END:VEVENT
BEGIN:VEVENT
UID:offset@remote
DTSTAMP:20240520T000000Z
DTSTART;TZID=Europe/Paris:20240602T100000
DTEND;TZID=Europe/Paris:20240602T110000
SUMMARY:Paris meeting
END:VEVENT
BEGIN:VEVENT
UID:allday@remote
DTSTAMP:20240520T000000Z
DTSTART;VALUE=DATE:20240603
DTEND;VALUE=DATE:20240604
SUMMARY:Offsite
END:VEVENT
BEGIN:VEVENT
UID:overnight@remote
DTSTAMP:20240520T000000Z
DTSTART:20240604T230000Z
DTEND:20240605T010000Z
SUMMARY:Deploy window
END:VEVENT
BEGIN:VEVENT
UID:untitled@remote
DTSTAMP:20240520T000000Z
DTSTART:20240605T090000Z
END:VEVENT
END:VCALENDAR
""".replace("\n", "\r\n")


class FakeSource:
    """Remote source returning a fixed list of events."""

    def __init__(self, events=None, error=None):
        self.events = events or []
        self.error = error
        self.calls = []

    def fetch_remote_events(self, source_url):
        self.calls.append(source_url)
        if self.error:
            raise self.error
        return list(self.events)


def _by_uid(events):
    return {e.external_uid: e for e in events}


def test_parse_timed_event():
    events = _by_uid(parse_ics_events(REMOTE_ICS))
    standup = events["timed@remote"]

    assert standup.title == "Standup"
    assert standup.date == date(2024, 6, 1)
    assert standup.start == time(9, 0)
    assert standup.end == time(9, 15)
    assert standup.location == "Room 1"
    assert standup.description == "Daily, short"


def test_parse_converts_timezones_to_utc():
    events = _by_uid(parse_ics_events(REMOTE_ICS))
    paris = events["offset@remote"]

    # CEST is UTC+2 in June
    assert paris.start == time(8, 0)
    assert paris.end == time(9, 0)


def test_parse_all_day_event():
    events = _by_uid(parse_ics_events(REMOTE_ICS))
    offsite = events["allday@remote"]

    assert offsite.date == date(2024, 6, 3)
    assert offsite.start is None
    assert offsite.end is None


def test_parse_cross_midnight_drops_end():
    """An end on a later day falls back to the default duration."""
    events = _by_uid(parse_ics_events(REMOTE_ICS))
    deploy = events["overnight@remote"]

    assert deploy.start == time(23, 0)
    assert deploy.end is None


def test_parse_skips_events_without_summary():
    events = parse_ics_events(REMOTE_ICS)

    assert "untitled@remote" not in _by_uid(events)
    assert len(events) == 4


def test_parse_invalid_content():
    with pytest.raises(RemoteFetchError):
        parse_ics_events("this is not a calendar")


def test_feed_source_fetches_and_parses():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, content=REMOTE_ICS.encode())

    source = ICSFeedSource(client=httpx.Client(transport=httpx.MockTransport(handler)))
    events = source.fetch_remote_events("webcal://remote.example.com/team.ics")

    assert str(requests[0].url) == "https://remote.example.com/team.ics"
    assert len(events) == 4


def test_feed_source_http_error():
    source = ICSFeedSource(
        client=httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    )

    with pytest.raises(RemoteFetchError, match="404"):
        source.fetch_remote_events("https://remote.example.com/missing.ics")


def test_feed_source_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    source = ICSFeedSource(client=httpx.Client(transport=httpx.MockTransport(handler)))

    with pytest.raises(RemoteFetchError, match="unreachable"):
        source.fetch_remote_events("https://remote.example.com/team.ics")


def _remote(uid, title, day):
    return Event(id=uid, title=title, date=date(2024, 6, day), external_uid=uid)


def test_mirror_adds_new_events(calendars):
    calendar = calendars.create_calendar("a@b.com", "Mirror")
    source = FakeSource([_remote("a@r", "A", 1), _remote("b@r", "B", 2)])

    added = MirrorService(calendars, source).mirror(calendar.id, "https://r/feed.ics")

    assert added == 2
    assert [e.title for e in calendars.list_events(calendar.id)] == ["A", "B"]
    assert source.calls == ["https://r/feed.ics"]


def test_mirror_skips_known_uids(calendars):
    calendar = calendars.create_calendar("a@b.com", "Mirror")
    service = MirrorService(calendars, FakeSource([_remote("a@r", "A", 1)]))
    service.mirror(calendar.id, "https://r/feed.ics")

    service.source = FakeSource([_remote("a@r", "A renamed", 1), _remote("b@r", "B", 2)])
    added = service.mirror(calendar.id, "https://r/feed.ics")

    assert added == 1
    assert [e.title for e in calendars.list_events(calendar.id)] == ["A", "B"]


def test_mirror_unknown_calendar(calendars):
    service = MirrorService(calendars, FakeSource([_remote("a@r", "A", 1)]))

    with pytest.raises(CalendarNotFoundError):
        service.mirror("missing", "https://r/feed.ics")


def test_mirror_best_effort_swallows_fetch_errors(calendars):
    calendar = calendars.create_calendar("a@b.com", "Mirror")
    service = MirrorService(calendars, FakeSource(error=RemoteFetchError("down")))

    assert service.mirror_best_effort(calendar.id, "https://r/feed.ics") is None
    assert calendars.list_events(calendar.id) == []


def test_mirror_best_effort_returns_count(calendars):
    calendar = calendars.create_calendar("a@b.com", "Mirror")
    service = MirrorService(calendars, FakeSource([_remote("a@r", "A", 1)]))

    assert service.mirror_best_effort(calendar.id, "https://r/feed.ics") == 1

"""Tests for ICS feed rendering."""

from datetime import date, datetime, time, timezone

from icalendar import Calendar as ICalendar

from calfeed.models.calendar import CalendarSnapshot
from calfeed.models.event import Event
from calfeed.output.ics_writer import ICSWriter, render_feed

NOW = datetime(2024, 5, 20, 10, 30, 0, tzinfo=timezone.utc)


def _snapshot(events=None, description=None):
    return CalendarSnapshot(
        id="cal1",
        name="Team Sync",
        description=description,
        events=events or [],
    )


def test_render_full_document():
    """Every line appears in the fixed order, separated by CRLF."""
    event = Event(
        id="evt1",
        title="Standup",
        date=date(2024, 6, 1),
        start=time(9, 0),
        end=time(9, 15),
        description="Daily, short",
        location="Room 1",
    )
    content = render_feed(_snapshot([event], description="Weekly team events"), now=NOW)

    expected = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Calendar App//Calfeed//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "X-WR-CALNAME:Team Sync",
        "X-WR-CALDESC:Weekly team events",
        "X-WR-TIMEZONE:UTC",
        "REFRESH-INTERVAL;VALUE=DURATION:PT1H",
        "X-PUBLISHED-TTL:PT1H",
        "BEGIN:VEVENT",
        "UID:evt1@calendar-app.com",
        "DTSTAMP:20240520T103000Z",
        "DTSTART:20240601T090000Z",
        "DTEND:20240601T091500Z",
        "SUMMARY:Standup",
        "DESCRIPTION:Daily\\, short",
        "LOCATION:Room 1",
        "STATUS:CONFIRMED",
        "SEQUENCE:0",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    assert content == "\r\n".join(expected) + "\r\n"


def test_render_empty_calendar():
    """A calendar without events is still a valid document."""
    content = render_feed(_snapshot(), now=NOW)

    assert content.count("BEGIN:VCALENDAR") == 1
    assert content.count("END:VCALENDAR") == 1
    assert "BEGIN:VEVENT" not in content
    assert "X-WR-CALDESC" not in content


def test_render_default_times():
    """Missing start means noon UTC and missing end means one hour later."""
    event = Event(id="e", title="Lunch", date=date(2024, 6, 1))
    content = render_feed(_snapshot([event]), now=NOW)

    assert "DTSTART:20240601T120000Z" in content
    assert "DTEND:20240601T130000Z" in content


def test_render_start_without_end():
    event = Event(id="e", title="Call", date=date(2024, 6, 1), start=time(23, 30))
    content = render_feed(_snapshot([event]), now=NOW)

    assert "DTSTART:20240601T233000Z" in content
    assert "DTEND:20240602T003000Z" in content


def test_render_omits_missing_optional_fields():
    event = Event(id="e", title="Plain", date=date(2024, 6, 1))
    content = render_feed(_snapshot([event]), now=NOW)

    assert "DESCRIPTION:" not in content
    assert "LOCATION:" not in content


def test_render_escapes_text_fields():
    event = Event(
        id="e",
        title="Review; Q2, Q3",
        date=date(2024, 6, 1),
        description="line1\r\nline2",
    )
    content = render_feed(
        CalendarSnapshot(id="c", name="Ops, Infra", events=[event]), now=NOW
    )

    assert "X-WR-CALNAME:Ops\\, Infra\r\n" in content
    assert "SUMMARY:Review\\; Q2\\, Q3\r\n" in content
    assert "DESCRIPTION:line1\\nline2\r\n" in content


def test_render_uses_same_stamp_for_all_events():
    events = [
        Event(id="a", title="First", date=date(2024, 6, 1)),
        Event(id="b", title="Second", date=date(2024, 6, 2)),
    ]
    content = render_feed(_snapshot(events), now=NOW)

    assert content.count("DTSTAMP:20240520T103000Z") == 2
    assert content.index("UID:a@") < content.index("UID:b@")


def test_render_custom_product_and_domain():
    event = Event(id="evt1", title="Standup", date=date(2024, 6, 1))
    content = render_feed(
        _snapshot([event]), now=NOW, product_id="-//Acme//Feeds//EN", uid_domain="acme.test"
    )

    assert "PRODID:-//Acme//Feeds//EN\r\n" in content
    assert "UID:evt1@acme.test\r\n" in content


def test_rendered_feed_parses_with_icalendar():
    """Output is readable by a standard iCalendar parser."""
    event = Event(
        id="evt1",
        title="Standup, daily",
        date=date(2024, 6, 1),
        start=time(9, 0),
        end=time(9, 15),
        location="Room; 1",
    )
    content = render_feed(_snapshot([event]), now=NOW)

    cal = ICalendar.from_ical(content)
    vevents = list(cal.walk("VEVENT"))
    assert len(vevents) == 1
    assert str(vevents[0]["summary"]) == "Standup, daily"
    assert str(vevents[0]["location"]) == "Room; 1"
    assert vevents[0]["dtstart"].dt == datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


def test_render_folds_long_lines():
    description = "Agenda: " + ", ".join(f"item {n}" for n in range(40))
    event = Event(id="evt1", title="Planning", date=date(2024, 6, 1), description=description)

    content = render_feed(_snapshot([event]), now=NOW)

    lines = content.split("\r\n")
    assert all(len(line.encode("utf-8")) <= 75 for line in lines)
    assert any(line.startswith(" ") for line in lines)
    vevent = ICalendar.from_ical(content).walk("VEVENT")[0]
    assert str(vevent["description"]) == description


def test_writer_write_file(tmp_path):
    writer = ICSWriter()
    snapshot = _snapshot([Event(id="e", title="Standup", date=date(2024, 6, 1))])
    path = tmp_path / f"team.{writer.get_extension()}"

    writer.write(snapshot, path)

    content = path.read_bytes()
    assert content.startswith(b"BEGIN:VCALENDAR\r\n")
    assert content.endswith(b"END:VCALENDAR\r\n")
    assert b"SUMMARY:Standup\r\n" in content


def test_writer_extension():
    assert ICSWriter().get_extension() == "ics"

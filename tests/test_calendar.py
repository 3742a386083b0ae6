"""Tests for derived birthday events and month navigation helpers."""

from datetime import date

from kinship.application.calendar import (
    birthday_event_id,
    birthday_events,
    events_in_month,
    events_on,
    is_derived_event_id,
    merge_events,
    month_days,
    shift_month,
)
from kinship.domain import Contact, Event, EventKind


def test_birthday_events_use_next_occurrence_and_stable_ids():
    today = date(2024, 6, 10)
    amy = Contact(first_name="Amy", last_name="Lee", birthday=date(1990, 3, 1))
    bob = Contact(first_name="Bob", birthday=date(1985, 6, 10))
    nobody = Contact(first_name="Cal")

    events = birthday_events([amy, bob, nobody], today)
    assert len(events) == 2
    by_contact = {e.contact_id: e for e in events}

    amy_event = by_contact[amy.id]
    assert amy_event.id == f"birthday-{amy.id}"
    assert amy_event.date == date(2025, 3, 1)
    assert amy_event.kind is EventKind.BIRTHDAY
    assert amy_event.title == "Amy Lee's birthday"

    assert by_contact[bob.id].date == date(2024, 6, 10)

    again = birthday_events([amy, bob], today)
    assert [e.id for e in again] == [e.id for e in events]


def test_derived_event_ids():
    assert is_derived_event_id(birthday_event_id("abc"))
    assert not is_derived_event_id("abc")
    assert not is_derived_event_id("")


def test_merge_orders_by_date_stored_first_on_same_day():
    day = date(2024, 6, 10)
    stored = Event(title="Anniversary", date=day, kind=EventKind.ANNIVERSARY)
    earlier = Event(title="Dinner", date=date(2024, 6, 1))
    derived = Event(id="birthday-x", title="X's birthday", date=day, kind=EventKind.BIRTHDAY)

    merged = merge_events([stored, earlier], [derived])
    assert [e.title for e in merged] == ["Dinner", "Anniversary", "X's birthday"]
    assert [e.title for e in events_on(merged, day)] == ["Anniversary", "X's birthday"]


def test_events_in_month():
    events = [
        Event(title="May", date=date(2024, 5, 31)),
        Event(title="June", date=date(2024, 6, 1)),
        Event(title="Next June", date=date(2025, 6, 1)),
    ]
    assert [e.title for e in events_in_month(events, 2024, 6)] == ["June"]


def test_month_days():
    feb = month_days(2024, 2)
    assert len(feb) == 29
    assert feb[0] == date(2024, 2, 1)
    assert feb[-1] == date(2024, 2, 29)
    assert len(month_days(2023, 2)) == 28
    assert len(month_days(2024, 12)) == 31


def test_shift_month_wraps_years():
    assert shift_month(2024, 1, -1) == (2023, 12)
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2024, 6, 0) == (2024, 6)
    assert shift_month(2024, 3, -14) == (2023, 1)

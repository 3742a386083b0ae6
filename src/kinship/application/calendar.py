"""Calendar helpers: derived birthday events and month navigation."""

import calendar
from collections.abc import Iterable, Sequence
from datetime import date, datetime

from kinship.application.query import full_name
from kinship.domain import Contact, Event, EventKind
from kinship.domain.recurrence import next_occurrence

BIRTHDAY_EVENT_PREFIX = "birthday-"


def birthday_event_id(contact_id: str) -> str:
    return f"{BIRTHDAY_EVENT_PREFIX}{contact_id}"


def is_derived_event_id(event_id: str) -> bool:
    return (event_id or "").startswith(BIRTHDAY_EVENT_PREFIX)


def birthday_events(contacts: Iterable[Contact], today: date | datetime) -> list[Event]:
    """One event per contact with a birthday, dated at its next occurrence. Never stored."""
    events = []
    for contact in contacts:
        if contact.birthday is None:
            continue
        events.append(
            Event(
                id=birthday_event_id(contact.id),
                title=f"{full_name(contact)}'s birthday",
                date=next_occurrence(contact.birthday, today),
                kind=EventKind.BIRTHDAY,
                contact_id=contact.id,
            )
        )
    return events


def merge_events(stored: Sequence[Event], derived: Sequence[Event]) -> list[Event]:
    """Stored and derived events by date; on the same day stored ones come first."""
    return sorted([*stored, *derived], key=lambda e: e.date)


def events_on(events: Iterable[Event], day: date) -> list[Event]:
    return [e for e in events if e.date == day]


def events_in_month(events: Iterable[Event], year: int, month: int) -> list[Event]:
    return [e for e in events if e.date.year == year and e.date.month == month]


def month_days(year: int, month: int) -> list[date]:
    """Every day of the month, first to last."""
    _, last = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last + 1)]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months; negative goes back."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1

"""Contact list query engine: search, sort, highlight, upcoming birthdays, selection.

All functions are pure: the rendered list is recomputed from the contact
collection and the current ViewState on every change.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from kinship.domain import Contact, SortField, SortOrder, ViewState
from kinship.domain.recurrence import (
    UPCOMING_WINDOW_DAYS,
    days_until,
    is_within_window,
    next_occurrence,
)
from kinship.domain.view import select_all, toggle_selection

DASHBOARD_PREVIEW_SIZE = 3

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Segment:
    """A piece of highlighted text; matched segments equal the query case-insensitively."""

    text: str
    matched: bool = False


@dataclass(frozen=True)
class UpcomingBirthday:
    contact: Contact
    next_date: date
    days_until: int


def full_name(contact: Contact) -> str:
    """First, middle, and last name joined by single spaces, missing parts omitted."""
    parts = [contact.first_name, contact.middle_name or "", contact.last_name or ""]
    return _WHITESPACE.sub(" ", " ".join(parts)).strip()


def _searchable_texts(contact: Contact) -> list[str]:
    texts = [full_name(contact), contact.first_name]
    if contact.middle_name:
        texts.append(contact.middle_name)
    if contact.last_name:
        texts.append(contact.last_name)
    texts.extend(f"{key} {value}" for key, value in contact.favorites.items())
    return texts


def filter_contacts(contacts: Sequence[Contact], query: str | None) -> Sequence[Contact]:
    """Return contacts whose name parts or favorites contain query (case-insensitive).

    A blank query returns the input sequence itself.
    """
    if not query or not query.strip():
        return contacts
    needle = query.lower()
    return [
        c
        for c in contacts
        if any(needle in text.lower() for text in _searchable_texts(c))
    ]


def _timestamp_key(value: date | datetime | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.isoformat()


def sort_key(contact: Contact, field: SortField) -> str:
    field = SortField(field)
    if field is SortField.NAME:
        return full_name(contact).lower()
    if field is SortField.BIRTHDAY:
        return _timestamp_key(contact.birthday)
    return _timestamp_key(contact.created_at)


def sort_contacts(
    contacts: Sequence[Contact],
    field: SortField = SortField.NAME,
    order: SortOrder = SortOrder.ASC,
) -> list[Contact]:
    """Return a new list ordered lexicographically by the field's string key.

    Stable in both directions: contacts with equal keys keep their input order.
    Absent birthdays and timestamps use "" and so sort first ascending.
    """
    # reverse=True inverts the comparison and keeps ties stable.
    return sorted(
        contacts,
        key=lambda c: sort_key(c, field),
        reverse=SortOrder(order) is SortOrder.DESC,
    )


def apply_view(contacts: Sequence[Contact], view: ViewState) -> list[Contact]:
    """Filter by the view's query, then sort by its field and order."""
    return sort_contacts(
        filter_contacts(contacts, view.query), view.sort_field, view.sort_order
    )


def highlight(text: str, query: str | None) -> list[Segment]:
    """Split text into literal and matched segments on occurrences of query."""
    if not text:
        return []
    if not query:
        return [Segment(text)]
    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    segments = []
    # With one capture group, odd indexes are the matches.
    for i, piece in enumerate(pattern.split(text)):
        if piece:
            segments.append(Segment(piece, matched=i % 2 == 1))
    return segments


def upcoming_birthdays(
    contacts: Sequence[Contact],
    today: date | datetime,
    window_days: int = UPCOMING_WINDOW_DAYS,
) -> list[UpcomingBirthday]:
    """Contacts whose next birthday lies in [today, today + window_days], soonest first."""
    out = []
    for contact in contacts:
        if contact.birthday is None:
            continue
        if is_within_window(contact.birthday, today, window_days):
            out.append(
                UpcomingBirthday(
                    contact=contact,
                    next_date=next_occurrence(contact.birthday, today),
                    days_until=days_until(contact.birthday, today),
                )
            )
    out.sort(key=lambda u: u.next_date)
    return out


def upcoming_count(
    contacts: Sequence[Contact],
    today: date | datetime,
    window_days: int = UPCOMING_WINDOW_DAYS,
) -> int:
    return len(upcoming_birthdays(contacts, today, window_days))


def upcoming_preview(
    contacts: Sequence[Contact],
    today: date | datetime,
    window_days: int = UPCOMING_WINDOW_DAYS,
    limit: int = DASHBOARD_PREVIEW_SIZE,
) -> list[UpcomingBirthday]:
    return upcoming_birthdays(contacts, today, window_days)[:limit]


__all__ = [
    "DASHBOARD_PREVIEW_SIZE",
    "Segment",
    "UpcomingBirthday",
    "apply_view",
    "filter_contacts",
    "full_name",
    "highlight",
    "select_all",
    "sort_contacts",
    "sort_key",
    "toggle_selection",
    "upcoming_birthdays",
    "upcoming_count",
    "upcoming_preview",
]

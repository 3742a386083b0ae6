"""Domain layer: entities, value objects, and pure date/text helpers. No dependencies on outer layers."""

from kinship.domain.entities import AccountProfile, Contact, Event, EventKind, Note
from kinship.domain.favorites import format_favorites, parse_favorites
from kinship.domain.recurrence import days_until, is_within_window, next_occurrence
from kinship.domain.view import (
    DisplayMode,
    SortField,
    SortOrder,
    ViewState,
    select_all,
    toggle_selection,
)

__all__ = [
    "AccountProfile",
    "Contact",
    "DisplayMode",
    "Event",
    "EventKind",
    "Note",
    "SortField",
    "SortOrder",
    "ViewState",
    "days_until",
    "format_favorites",
    "is_within_window",
    "next_occurrence",
    "parse_favorites",
    "select_all",
    "toggle_selection",
]

"""Application layer: use cases, query engine, ports, and DTOs. Depends only on domain."""

from kinship.application.contact_service import ContactService
from kinship.application.dto import (
    ContactCreated,
    ContactForm,
    ContactUpdated,
    DashboardStats,
    EventCreated,
    EventForm,
    Invalid,
    NoteCreated,
    NotFound,
)
from kinship.application.ports import ContactRepository, EventRepository, NoteRepository
from kinship.application.query import (
    Segment,
    UpcomingBirthday,
    apply_view,
    filter_contacts,
    full_name,
    highlight,
    sort_contacts,
    upcoming_birthdays,
    upcoming_count,
    upcoming_preview,
)

__all__ = [
    "ContactCreated",
    "ContactForm",
    "ContactRepository",
    "ContactService",
    "ContactUpdated",
    "DashboardStats",
    "EventCreated",
    "EventForm",
    "EventRepository",
    "Invalid",
    "NoteCreated",
    "NoteRepository",
    "NotFound",
    "Segment",
    "UpcomingBirthday",
    "apply_view",
    "filter_contacts",
    "full_name",
    "highlight",
    "sort_contacts",
    "upcoming_birthdays",
    "upcoming_count",
    "upcoming_preview",
]

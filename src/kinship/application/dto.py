"""Input forms and result types for the use cases. Results are variants, not exceptions."""

from dataclasses import dataclass, field

from kinship.application.query import UpcomingBirthday
from kinship.domain import AccountProfile


@dataclass(frozen=True)
class ContactForm:
    """Raw values from the create/edit contact form."""

    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    birthday: str = ""
    favorites: str = ""


@dataclass(frozen=True)
class EventForm:
    title: str = ""
    date: str = ""
    kind: str = "custom"
    contact_id: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ContactCreated:
    contact_id: str
    name: str


@dataclass(frozen=True)
class ContactUpdated:
    contact_id: str
    name: str


@dataclass(frozen=True)
class NoteCreated:
    note_id: str
    contact_id: str


@dataclass(frozen=True)
class EventCreated:
    event_id: str
    title: str


@dataclass(frozen=True)
class Invalid:
    reason: str


@dataclass(frozen=True)
class NotFound:
    id: str


@dataclass(frozen=True)
class DashboardStats:
    total_contacts: int
    total_notes: int
    upcoming_count: int
    upcoming_preview: list[UpcomingBirthday] = field(default_factory=list)
    profile: AccountProfile | None = None

"""Contacts, notes, and calendar use cases. Every call is scoped by an explicit owner id."""

import logging
from collections.abc import Iterable
from datetime import date, datetime

from kinship.application.calendar import (
    birthday_events,
    events_in_month,
    is_derived_event_id,
    merge_events,
)
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
    DASHBOARD_PREVIEW_SIZE,
    apply_view,
    full_name,
    upcoming_birthdays,
)
from kinship.domain import (
    Contact,
    Event,
    EventKind,
    Note,
    ViewState,
    format_favorites,
    parse_favorites,
)
from kinship.domain.recurrence import UPCOMING_WINDOW_DAYS

logger = logging.getLogger(__name__)


def _parse_date(raw: str | date | None, label: str) -> date | None:
    """Parse an ISO YYYY-MM-DD value. Empty means None; bad input raises ValueError."""
    if raw is None or isinstance(raw, date):
        return raw
    raw = raw.strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise ValueError(f"{label} must be a date in YYYY-MM-DD format.") from e


class ContactService:
    """Create, edit, list, and delete contacts; manage notes and calendar events."""

    def __init__(
        self,
        contacts: ContactRepository,
        notes: NoteRepository,
        events: EventRepository,
        *,
        window_days: int = UPCOMING_WINDOW_DAYS,
    ) -> None:
        self._contacts = contacts
        self._notes = notes
        self._events = events
        self._window_days = window_days

    # --- contacts ---

    def _build_contact(self, form: ContactForm, **kept) -> Contact:
        return Contact(
            first_name=form.first_name,
            middle_name=form.middle_name,
            last_name=form.last_name,
            birthday=_parse_date(form.birthday, "Birthday"),
            favorites=parse_favorites(form.favorites),
            **kept,
        )

    def create_contact(
        self, owner_id: str, form: ContactForm
    ) -> ContactCreated | Invalid:
        """Validate the form and store a new contact for the owner."""
        if not (form.first_name or "").strip():
            return Invalid(reason="First name is required.")
        try:
            contact = self._build_contact(form)
        except ValueError as e:
            return Invalid(reason=str(e))
        self._contacts.add(owner_id, contact)
        return ContactCreated(contact_id=contact.id, name=full_name(contact))

    def update_contact(
        self, owner_id: str, contact_id: str, form: ContactForm
    ) -> ContactUpdated | Invalid | NotFound:
        """Replace every mutable field of the contact. id and created_at are kept."""
        existing = self._contacts.get_by_id(owner_id, contact_id)
        if existing is None:
            return NotFound(id=contact_id)
        if not (form.first_name or "").strip():
            return Invalid(reason="First name is required.")
        try:
            contact = self._build_contact(
                form, id=existing.id, created_at=existing.created_at
            )
        except ValueError as e:
            return Invalid(reason=str(e))
        if not self._contacts.update(owner_id, contact):
            return NotFound(id=contact_id)
        return ContactUpdated(contact_id=contact.id, name=full_name(contact))

    def get_contact(self, owner_id: str, contact_id: str) -> Contact | None:
        return self._contacts.get_by_id(owner_id, contact_id)

    def edit_form(self, owner_id: str, contact_id: str) -> ContactForm | None:
        """Return the contact as pre-filled form values, or None if not found."""
        contact = self._contacts.get_by_id(owner_id, contact_id)
        if contact is None:
            return None
        return ContactForm(
            first_name=contact.first_name,
            middle_name=contact.middle_name or "",
            last_name=contact.last_name or "",
            birthday=contact.birthday.isoformat() if contact.birthday else "",
            favorites=format_favorites(contact.favorites),
        )

    def list_contacts(
        self, owner_id: str, view: ViewState | None = None
    ) -> list[Contact]:
        """Return the owner's contacts filtered and sorted per the view (name ascending by default)."""
        return apply_view(self._contacts.list_all(owner_id), view or ViewState())

    def delete_contact(self, owner_id: str, contact_id: str) -> bool:
        deleted = self._contacts.delete(owner_id, contact_id)
        if deleted:
            logger.info("Deleted contact %s for owner %s", contact_id, owner_id)
        return deleted

    def delete_contacts(self, owner_id: str, contact_ids: Iterable[str]) -> int:
        """Bulk delete. Unknown ids are skipped; returns the number deleted."""
        ids = list(dict.fromkeys(contact_ids))
        if not ids:
            return 0
        deleted = self._contacts.delete_many(owner_id, ids)
        logger.info(
            "Bulk deleted %s of %s contacts for owner %s", deleted, len(ids), owner_id
        )
        return deleted

    # --- notes ---

    def add_note(
        self, owner_id: str, contact_id: str, title: str, content: str
    ) -> NoteCreated | Invalid | NotFound:
        if self._contacts.get_by_id(owner_id, contact_id) is None:
            return NotFound(id=contact_id)
        if not (title or "").strip() or not (content or "").strip():
            return Invalid(reason="Please fill in both title and content.")
        note = Note(contact_id=contact_id, title=title, content=content)
        self._notes.add(owner_id, note)
        return NoteCreated(note_id=note.id, contact_id=contact_id)

    def list_notes(self, owner_id: str, contact_id: str) -> list[Note]:
        """Return the contact's notes, newest first."""
        return self._notes.list_for_contact(owner_id, contact_id)

    def delete_note(self, owner_id: str, note_id: str) -> bool:
        return self._notes.delete(owner_id, note_id)

    # --- calendar ---

    def add_event(self, owner_id: str, form: EventForm) -> EventCreated | Invalid:
        try:
            day = _parse_date(form.date, "Event date")
            kind = EventKind((form.kind or "custom").strip().lower())
        except ValueError as e:
            return Invalid(reason=str(e))
        if day is None:
            return Invalid(reason="Event date is required.")
        contact_id = (form.contact_id or "").strip() or None
        if contact_id and self._contacts.get_by_id(owner_id, contact_id) is None:
            return Invalid(reason="Unknown contact for event.")
        try:
            event = Event(
                title=form.title,
                date=day,
                kind=kind,
                contact_id=contact_id,
                description=form.description,
            )
        except ValueError as e:
            return Invalid(reason=str(e))
        self._events.add(owner_id, event)
        return EventCreated(event_id=event.id, title=event.title)

    def delete_event(self, owner_id: str, event_id: str) -> bool:
        """Delete a stored event. Derived birthday events cannot be deleted."""
        if is_derived_event_id(event_id):
            return False
        return self._events.delete(owner_id, event_id)

    def calendar_events(self, owner_id: str, today: date | datetime) -> list[Event]:
        """Stored events plus a derived birthday event per contact, ordered by date."""
        derived = birthday_events(self._contacts.list_all(owner_id), today)
        return merge_events(self._events.list_all(owner_id), derived)

    def month_events(
        self, owner_id: str, year: int, month: int, today: date | datetime
    ) -> list[Event]:
        return events_in_month(self.calendar_events(owner_id, today), year, month)

    # --- dashboard ---

    def dashboard(self, owner_id: str, today: date | datetime) -> DashboardStats:
        contacts = self._contacts.list_all(owner_id)
        upcoming = upcoming_birthdays(contacts, today, self._window_days)
        return DashboardStats(
            total_contacts=len(contacts),
            total_notes=self._notes.count(owner_id),
            upcoming_count=len(upcoming),
            upcoming_preview=upcoming[:DASHBOARD_PREVIEW_SIZE],
        )

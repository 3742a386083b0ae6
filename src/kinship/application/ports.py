"""Application ports (interfaces). Implemented by infrastructure adapters.

Every method takes the owner id explicitly; adapters never look it up.
"""

from collections.abc import Iterable
from typing import Protocol

from kinship.domain import Contact, Event, Note


class ContactRepository(Protocol):
    """Persists and queries an owner's contacts."""

    def add(self, owner_id: str, contact: Contact) -> None:
        ...

    def get_by_id(self, owner_id: str, contact_id: str) -> Contact | None:
        """Return the owner's contact with the given id, or None."""
        ...

    def list_all(self, owner_id: str) -> list[Contact]:
        """Return all of the owner's contacts in creation order."""
        ...

    def update(self, owner_id: str, contact: Contact) -> bool:
        """Replace the stored contact with the same id. Returns False if not found."""
        ...

    def delete(self, owner_id: str, contact_id: str) -> bool:
        """Delete a contact and its notes. Returns False if not found."""
        ...

    def delete_many(self, owner_id: str, contact_ids: Iterable[str]) -> int:
        """Delete every listed contact the owner has. Returns how many were deleted."""
        ...


class NoteRepository(Protocol):
    """Persists notes attached to an owner's contacts."""

    def add(self, owner_id: str, note: Note) -> None:
        ...

    def list_for_contact(self, owner_id: str, contact_id: str) -> list[Note]:
        """Return the contact's notes, newest first."""
        ...

    def delete(self, owner_id: str, note_id: str) -> bool:
        ...

    def count(self, owner_id: str) -> int:
        ...


class EventRepository(Protocol):
    """Persists owner-authored calendar events (never derived birthdays)."""

    def add(self, owner_id: str, event: Event) -> None:
        ...

    def list_all(self, owner_id: str) -> list[Event]:
        """Return the owner's events ordered by date."""
        ...

    def delete(self, owner_id: str, event_id: str) -> bool:
        ...

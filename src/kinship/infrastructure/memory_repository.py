"""In-memory implementations of the repository ports (no DB)."""

from collections.abc import Iterable

from kinship.domain import Contact, Event, Note


class InMemoryContactRepository:
    """Stores contacts in memory per owner. Order preserved by insertion.
    Deleting a contact also drops its notes when a note repository is attached.
    """

    def __init__(self, notes: "InMemoryNoteRepository | None" = None) -> None:
        self._by_owner: dict[str, dict[str, Contact]] = {}
        self._notes = notes

    def _owned(self, owner_id: str) -> dict[str, Contact]:
        return self._by_owner.setdefault(owner_id, {})

    def add(self, owner_id: str, contact: Contact) -> None:
        owned = self._owned(owner_id)
        if contact.id in owned:
            return
        owned[contact.id] = contact

    def get_by_id(self, owner_id: str, contact_id: str) -> Contact | None:
        return self._by_owner.get(owner_id, {}).get(contact_id)

    def list_all(self, owner_id: str) -> list[Contact]:
        return list(self._by_owner.get(owner_id, {}).values())

    def update(self, owner_id: str, contact: Contact) -> bool:
        owned = self._by_owner.get(owner_id, {})
        if contact.id not in owned:
            return False
        owned[contact.id] = contact
        return True

    def delete(self, owner_id: str, contact_id: str) -> bool:
        owned = self._by_owner.get(owner_id, {})
        if owned.pop(contact_id, None) is None:
            return False
        if self._notes is not None:
            self._notes.delete_for_contact(owner_id, contact_id)
        return True

    def delete_many(self, owner_id: str, contact_ids: Iterable[str]) -> int:
        return sum(1 for cid in set(contact_ids) if self.delete(owner_id, cid))


class InMemoryNoteRepository:
    """Stores notes per owner, keyed by note id."""

    def __init__(self) -> None:
        self._by_owner: dict[str, dict[str, Note]] = {}

    def add(self, owner_id: str, note: Note) -> None:
        self._by_owner.setdefault(owner_id, {})[note.id] = note

    def list_for_contact(self, owner_id: str, contact_id: str) -> list[Note]:
        notes = [
            n for n in self._by_owner.get(owner_id, {}).values()
            if n.contact_id == contact_id
        ]
        return sorted(notes, key=lambda n: n.created_at, reverse=True)

    def delete(self, owner_id: str, note_id: str) -> bool:
        return self._by_owner.get(owner_id, {}).pop(note_id, None) is not None

    def delete_for_contact(self, owner_id: str, contact_id: str) -> None:
        owned = self._by_owner.get(owner_id, {})
        for note_id in [nid for nid, n in owned.items() if n.contact_id == contact_id]:
            del owned[note_id]

    def count(self, owner_id: str) -> int:
        return len(self._by_owner.get(owner_id, {}))


class InMemoryEventRepository:
    """Stores owner-authored events per owner."""

    def __init__(self) -> None:
        self._by_owner: dict[str, dict[str, Event]] = {}

    def add(self, owner_id: str, event: Event) -> None:
        self._by_owner.setdefault(owner_id, {})[event.id] = event

    def list_all(self, owner_id: str) -> list[Event]:
        return sorted(self._by_owner.get(owner_id, {}).values(), key=lambda e: e.date)

    def delete(self, owner_id: str, event_id: str) -> bool:
        return self._by_owner.get(owner_id, {}).pop(event_id, None) is not None

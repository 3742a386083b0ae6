"""Domain entities: Contact, Note, Event, and AccountProfile."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

# Max length for profile fields stored on the Owner node.
NAME_MAX_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class EventKind(str, Enum):
    BIRTHDAY = "birthday"
    ANNIVERSARY = "anniversary"
    CUSTOM = "custom"


@dataclass(frozen=True)
class AccountProfile:
    """
    Profile data for an owner account (display name, email).
    Stored on the Owner node in Neo4j; shown on the dashboard.
    """

    display_name: str | None = None
    email: str | None = None

    def __post_init__(self):
        if self.display_name is not None:
            name = self.display_name.strip()
            if len(name) > NAME_MAX_LENGTH:
                raise ValueError(
                    f"Display name must be at most {NAME_MAX_LENGTH} chars."
                )
            object.__setattr__(self, "display_name", name or None)
        object.__setattr__(self, "email", _clean_optional(self.email))


@dataclass(frozen=True)
class Contact:
    """
    Represents a person known by the owner.
    Name parts are stored trimmed; a Contact cannot exist without a first name.
    """

    id: str = field(default_factory=_new_id)
    first_name: str = field(default="")
    middle_name: str | None = None
    last_name: str | None = None
    birthday: date | None = None
    favorites: dict[str, str] = field(default_factory=dict, hash=False)
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        first = (self.first_name or "").strip()
        if not first:
            raise ValueError("Contact first name must be non-empty.")
        object.__setattr__(self, "first_name", first)
        object.__setattr__(self, "middle_name", _clean_optional(self.middle_name))
        object.__setattr__(self, "last_name", _clean_optional(self.last_name))
        if isinstance(self.birthday, datetime):
            object.__setattr__(self, "birthday", self.birthday.date())
        object.__setattr__(self, "favorites", dict(self.favorites or {}))


@dataclass(frozen=True)
class Note:
    """Free text attached to exactly one Contact."""

    contact_id: str
    title: str
    content: str
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    def __post_init__(self):
        title = (self.title or "").strip()
        content = (self.content or "").strip()
        if not title:
            raise ValueError("Note title must be non-empty.")
        if not content:
            raise ValueError("Note content must be non-empty.")
        object.__setattr__(self, "title", title)
        object.__setattr__(self, "content", content)
        if self.updated_at is None:
            object.__setattr__(self, "updated_at", self.created_at)


@dataclass(frozen=True)
class Event:
    """
    A calendar entry. Stored events are authored by the owner; birthday
    events are derived from contacts on every read and never stored.
    """

    title: str
    date: date
    kind: EventKind = EventKind.CUSTOM
    contact_id: str | None = None
    description: str | None = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        title = (self.title or "").strip()
        if not title:
            raise ValueError("Event title must be non-empty.")
        object.__setattr__(self, "title", title)
        object.__setattr__(self, "kind", EventKind(self.kind))
        object.__setattr__(self, "description", _clean_optional(self.description))
        object.__setattr__(self, "contact_id", _clean_optional(self.contact_id))


"""
Kinship core: clean-architecture layout.

- domain: entities (Contact, Note, Event), view state, recurrence and favorites helpers.
- application: query engine, calendar helpers, use cases (ContactService), ports, DTOs.
- infrastructure: adapters (in-memory and Neo4j repositories, identity).
"""

from kinship.application import (
    ContactCreated,
    ContactForm,
    ContactRepository,
    ContactService,
    ContactUpdated,
    DashboardStats,
    EventForm,
    EventRepository,
    Invalid,
    NoteRepository,
    NotFound,
)
from kinship.domain import Contact, Event, EventKind, Note, ViewState
from kinship.infrastructure import (
    InMemoryContactRepository,
    InMemoryEventRepository,
    InMemoryNoteRepository,
    Neo4jContactRepository,
    Neo4jEventRepository,
    Neo4jNoteRepository,
)

__all__ = [
    "Contact",
    "ContactCreated",
    "ContactForm",
    "ContactRepository",
    "ContactService",
    "ContactUpdated",
    "DashboardStats",
    "Event",
    "EventForm",
    "EventKind",
    "EventRepository",
    "InMemoryContactRepository",
    "InMemoryEventRepository",
    "InMemoryNoteRepository",
    "Invalid",
    "Neo4jContactRepository",
    "Neo4jEventRepository",
    "Neo4jNoteRepository",
    "Note",
    "NoteRepository",
    "NotFound",
    "ViewState",
]

"""Integration tests for the Neo4j repositories. Require Docker
(testcontainers)."""

from datetime import date, datetime, timedelta, timezone

import pytest

from kinship.application import ContactForm, ContactService, EventForm
from kinship.domain import Contact, Event, EventKind, Note, SortField, ViewState
from kinship.infrastructure import (
    Neo4jContactRepository,
    Neo4jEventRepository,
    Neo4jNoteRepository,
)

OWNER = "owner-1"


@pytest.fixture(scope="session")
def neo4j_driver():
    from testcontainers.neo4j import Neo4jContainer

    with Neo4jContainer() as neo4j:
        driver = neo4j.get_driver()
        try:
            yield driver
        finally:
            driver.close()


@pytest.fixture
def clean_neo4j(neo4j_driver):
    """Clear the graph before each test so tests are independent."""
    with neo4j_driver.session() as session:
        session.run("MATCH (n) DETACH DELETE n")
    yield neo4j_driver


def test_add_get_by_id_list_all(clean_neo4j):
    repo = Neo4jContactRepository(clean_neo4j)
    contact = Contact(
        first_name="Alice",
        last_name="Smith",
        birthday=date(1990, 5, 1),
        favorites={"food": "pizza", "color": "blue"},
    )
    repo.add(OWNER, contact)

    found = repo.get_by_id(OWNER, contact.id)
    assert found is not None
    assert found == contact
    assert list(found.favorites) == ["food", "color"]

    all_contacts = repo.list_all(OWNER)
    assert [c.id for c in all_contacts] == [contact.id]
    assert repo.get_by_id("someone-else", contact.id) is None
    assert repo.list_all("someone-else") == []


def test_list_all_ordering(clean_neo4j):
    repo = Neo4jContactRepository(clean_neo4j)
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    second = Contact(first_name="Second", created_at=base + timedelta(hours=1))
    first = Contact(first_name="First", created_at=base)
    repo.add(OWNER, second)
    repo.add(OWNER, first)

    assert [c.first_name for c in repo.list_all(OWNER)] == ["First", "Second"]


def test_update_replaces_fields(clean_neo4j):
    repo = Neo4jContactRepository(clean_neo4j)
    contact = Contact(first_name="Alice", last_name="Smith", favorites={"food": "pizza"})
    repo.add(OWNER, contact)

    edited = Contact(
        id=contact.id,
        first_name="Alicia",
        birthday=date(1991, 2, 3),
        created_at=contact.created_at,
    )
    assert repo.update(OWNER, edited) is True
    found = repo.get_by_id(OWNER, contact.id)
    assert found.first_name == "Alicia"
    assert found.last_name is None
    assert found.birthday == date(1991, 2, 3)
    assert found.favorites == {}
    assert found.created_at == contact.created_at

    assert repo.update("someone-else", edited) is False
    assert repo.update(OWNER, Contact(first_name="Ghost")) is False


def test_delete_removes_contact_and_notes(clean_neo4j):
    contacts = Neo4jContactRepository(clean_neo4j)
    notes = Neo4jNoteRepository(clean_neo4j)
    contact = Contact(first_name="Alice")
    contacts.add(OWNER, contact)
    notes.add(OWNER, Note(contact_id=contact.id, title="One", content="a"))
    notes.add(OWNER, Note(contact_id=contact.id, title="Two", content="b"))
    assert notes.count(OWNER) == 2

    assert contacts.delete("someone-else", contact.id) is False
    assert contacts.delete(OWNER, contact.id) is True
    assert contacts.get_by_id(OWNER, contact.id) is None
    assert notes.count(OWNER) == 0
    assert contacts.delete(OWNER, contact.id) is False

    with clean_neo4j.session() as session:
        remaining = session.run("MATCH (n:Note) RETURN count(n) AS c").single()["c"]
    assert remaining == 0


def test_delete_many(clean_neo4j):
    repo = Neo4jContactRepository(clean_neo4j)
    a, b, c = (Contact(first_name=n) for n in "ABC")
    for contact in (a, b, c):
        repo.add(OWNER, contact)
    foreign = Contact(first_name="Mallory")
    repo.add("someone-else", foreign)

    assert repo.delete_many(OWNER, [a.id, b.id, "missing", foreign.id]) == 2
    assert [x.id for x in repo.list_all(OWNER)] == [c.id]
    assert repo.get_by_id("someone-else", foreign.id) is not None
    assert repo.delete_many(OWNER, []) == 0


def test_notes_newest_first_and_delete(clean_neo4j):
    contacts = Neo4jContactRepository(clean_neo4j)
    notes = Neo4jNoteRepository(clean_neo4j)
    contact = Contact(first_name="Alice")
    contacts.add(OWNER, contact)
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    old = Note(contact_id=contact.id, title="Old", content="x", created_at=base)
    new = Note(
        contact_id=contact.id, title="New", content="y", created_at=base + timedelta(days=1)
    )
    notes.add(OWNER, old)
    notes.add(OWNER, new)

    listed = notes.list_for_contact(OWNER, contact.id)
    assert [n.title for n in listed] == ["New", "Old"]
    assert listed[1] == old
    assert notes.list_for_contact("someone-else", contact.id) == []

    assert notes.delete("someone-else", old.id) is False
    assert notes.delete(OWNER, old.id) is True
    assert notes.delete(OWNER, old.id) is False
    assert notes.count(OWNER) == 1


def test_events_round_trip(clean_neo4j):
    repo = Neo4jEventRepository(clean_neo4j)
    later = Event(title="Party", date=date(2024, 8, 1), description="Bring cake")
    sooner = Event(title="Anniversary", date=date(2024, 6, 1), kind=EventKind.ANNIVERSARY)
    repo.add(OWNER, later)
    repo.add(OWNER, sooner)

    assert repo.list_all(OWNER) == [sooner, later]
    assert repo.list_all("someone-else") == []
    assert repo.delete(OWNER, sooner.id) is True
    assert repo.delete(OWNER, sooner.id) is False
    assert repo.list_all(OWNER) == [later]


def test_service_over_neo4j(clean_neo4j):
    service = ContactService(
        Neo4jContactRepository(clean_neo4j),
        Neo4jNoteRepository(clean_neo4j),
        Neo4jEventRepository(clean_neo4j),
    )
    service.create_contact(OWNER, ContactForm(first_name="Bob", birthday="1990-05-01"))
    service.create_contact(OWNER, ContactForm(first_name="Amy"))
    service.add_event(OWNER, EventForm(title="Trip", date="2024-05-01"))

    by_birthday = service.list_contacts(OWNER, ViewState(sort_field=SortField.BIRTHDAY))
    assert [c.first_name for c in by_birthday] == ["Amy", "Bob"]

    events = service.calendar_events(OWNER, date(2024, 4, 1))
    assert [e.title for e in events] == ["Trip", "Bob's birthday"]

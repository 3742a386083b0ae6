"""Neo4j implementations of the repository ports.
Graph: one Owner node per account; everything hangs off it.
(owner:Owner {id})-[:KNOWS]->(c:Contact)-[:HAS_NOTE]->(n:Note)
(owner:Owner {id})-[:SCHEDULED]->(e:Event)
Dates and timestamps are stored as ISO strings; favorites as a JSON object string
(Neo4j properties cannot hold maps).
"""

import json
from collections.abc import Iterable
from datetime import date, datetime

from kinship.domain import Contact, Event, Note


def _datetime_to_iso(dt: datetime) -> str:
    return dt.isoformat()


def _iso_to_datetime(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _date_to_iso(d: date | None) -> str | None:
    return d.isoformat() if d else None


def _iso_to_date(s: str | None) -> date | None:
    return date.fromisoformat(s) if s else None


class Neo4jContactRepository:
    """Stores contacts in Neo4j, scoped by the owner id passed to each call."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def add(self, owner_id: str, contact: Contact) -> None:
        with self._driver.session() as session:
            session.run(
                """
                MERGE (owner:Owner {id: $owner_id})
                CREATE (owner)-[:KNOWS]->(c:Contact {
                    id: $id,
                    first_name: $first_name,
                    middle_name: $middle_name,
                    last_name: $last_name,
                    birthday: $birthday,
                    favorites: $favorites,
                    created_at: $created_at
                })
                """,
                owner_id=owner_id,
                created_at=_datetime_to_iso(contact.created_at),
                **_contact_params(contact),
            )

    def get_by_id(self, owner_id: str, contact_id: str) -> Contact | None:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:KNOWS]->(c:Contact {id: $id})
                RETURN c
                """,
                owner_id=owner_id,
                id=contact_id,
            )
            record = result.single()
        if not record:
            return None
        return _record_to_contact(record)

    def list_all(self, owner_id: str) -> list[Contact]:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:KNOWS]->(c:Contact)
                RETURN c
                ORDER BY c.created_at
                """,
                owner_id=owner_id,
            )
            return [_record_to_contact(rec) for rec in result]

    def update(self, owner_id: str, contact: Contact) -> bool:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:KNOWS]->(c:Contact {id: $id})
                SET c.first_name = $first_name,
                    c.middle_name = $middle_name,
                    c.last_name = $last_name,
                    c.birthday = $birthday,
                    c.favorites = $favorites
                RETURN 1 AS ok
                """,
                owner_id=owner_id,
                **_contact_params(contact),
            )
            return result.single() is not None

    def delete(self, owner_id: str, contact_id: str) -> bool:
        return self.delete_many(owner_id, [contact_id]) == 1

    def delete_many(self, owner_id: str, contact_ids: Iterable[str]) -> int:
        ids = list(dict.fromkeys(contact_ids))
        if not ids:
            return 0
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:KNOWS]->(c:Contact)
                WHERE c.id IN $ids
                OPTIONAL MATCH (c)-[:HAS_NOTE]->(n:Note)
                WITH c, collect(n) AS notes
                FOREACH (note IN notes | DETACH DELETE note)
                DETACH DELETE c
                RETURN count(*) AS deleted
                """,
                owner_id=owner_id,
                ids=ids,
            )
            record = result.single()
        return record["deleted"] if record else 0


class Neo4jNoteRepository:
    """Stores notes as Note nodes under the owner's Contact nodes."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def add(self, owner_id: str, note: Note) -> None:
        with self._driver.session() as session:
            session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:KNOWS]->(c:Contact {id: $contact_id})
                CREATE (c)-[:HAS_NOTE]->(:Note {
                    id: $id,
                    contact_id: $contact_id,
                    title: $title,
                    content: $content,
                    created_at: $created_at,
                    updated_at: $updated_at
                })
                """,
                owner_id=owner_id,
                contact_id=note.contact_id,
                id=note.id,
                title=note.title,
                content=note.content,
                created_at=_datetime_to_iso(note.created_at),
                updated_at=_datetime_to_iso(note.updated_at),
            )

    def list_for_contact(self, owner_id: str, contact_id: str) -> list[Note]:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:KNOWS]->(:Contact {id: $contact_id})-[:HAS_NOTE]->(n:Note)
                RETURN n
                ORDER BY n.created_at DESC
                """,
                owner_id=owner_id,
                contact_id=contact_id,
            )
            return [_record_to_note(rec) for rec in result]

    def delete(self, owner_id: str, note_id: str) -> bool:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:KNOWS]->(:Contact)-[:HAS_NOTE]->(n:Note {id: $id})
                DETACH DELETE n
                RETURN count(n) AS deleted
                """,
                owner_id=owner_id,
                id=note_id,
            )
            record = result.single()
        return bool(record and record["deleted"])

    def count(self, owner_id: str) -> int:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:KNOWS]->(:Contact)-[:HAS_NOTE]->(n:Note)
                RETURN count(n) AS total
                """,
                owner_id=owner_id,
            )
            record = result.single()
        return record["total"] if record else 0


class Neo4jEventRepository:
    """Stores owner-authored events. Derived birthday events are never written."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def add(self, owner_id: str, event: Event) -> None:
        with self._driver.session() as session:
            session.run(
                """
                MERGE (owner:Owner {id: $owner_id})
                CREATE (owner)-[:SCHEDULED]->(:Event {
                    id: $id,
                    title: $title,
                    date: $date,
                    kind: $kind,
                    contact_id: $contact_id,
                    description: $description
                })
                """,
                owner_id=owner_id,
                id=event.id,
                title=event.title,
                date=_date_to_iso(event.date),
                kind=event.kind.value,
                contact_id=event.contact_id,
                description=event.description,
            )

    def list_all(self, owner_id: str) -> list[Event]:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:SCHEDULED]->(e:Event)
                RETURN e
                ORDER BY e.date
                """,
                owner_id=owner_id,
            )
            return [_record_to_event(rec) for rec in result]

    def delete(self, owner_id: str, event_id: str) -> bool:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (:Owner {id: $owner_id})-[:SCHEDULED]->(e:Event {id: $id})
                DETACH DELETE e
                RETURN count(e) AS deleted
                """,
                owner_id=owner_id,
                id=event_id,
            )
            record = result.single()
        return bool(record and record["deleted"])


def _contact_params(contact: Contact) -> dict:
    return {
        "id": contact.id,
        "first_name": contact.first_name,
        "middle_name": contact.middle_name,
        "last_name": contact.last_name,
        "birthday": _date_to_iso(contact.birthday),
        "favorites": json.dumps(contact.favorites),
    }


def _record_to_contact(record) -> Contact:
    c = record["c"]
    favorites = json.loads(c.get("favorites") or "{}")
    return Contact(
        id=c["id"],
        first_name=c["first_name"],
        middle_name=c.get("middle_name"),
        last_name=c.get("last_name"),
        birthday=_iso_to_date(c.get("birthday")),
        favorites=favorites,
        created_at=_iso_to_datetime(c["created_at"]),
    )


def _record_to_note(record) -> Note:
    n = record["n"]
    return Note(
        id=n["id"],
        contact_id=n["contact_id"],
        title=n["title"],
        content=n["content"],
        created_at=_iso_to_datetime(n["created_at"]),
        updated_at=_iso_to_datetime(n["updated_at"]),
    )


def _record_to_event(record) -> Event:
    e = record["e"]
    return Event(
        id=e["id"],
        title=e["title"],
        date=_iso_to_date(e["date"]),
        kind=e["kind"],
        contact_id=e.get("contact_id"),
        description=e.get("description"),
    )

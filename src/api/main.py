"""
FastAPI backend: REST API for contacts, notes, calendar, and dashboard.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import date

from fastapi import FastAPI, Header, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase
from pydantic import BaseModel

from kinship.application import (
    ContactCreated,
    ContactForm,
    ContactService,
    ContactUpdated,
    EventForm,
    Invalid,
    NoteCreated,
    NotFound,
    full_name,
    highlight,
)
from kinship.application.calendar import (
    events_on,
    is_derived_event_id,
    month_days,
    shift_month,
)
from kinship.domain import (
    Contact,
    Event,
    Note,
    SortField,
    SortOrder,
    ViewState,
    format_favorites,
    next_occurrence,
)
from kinship.domain.recurrence import UPCOMING_WINDOW_DAYS
from kinship.infrastructure import (
    PROVIDER_EMAIL,
    Neo4jContactRepository,
    Neo4jEventRepository,
    Neo4jNoteRepository,
    ensure_identity_constraint,
    get_account_profile,
    get_or_create_owner_id,
    update_account_profile,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

# Owner identity is resolved upstream; REST callers pass it in this header.
USER_ID_HEADER = "X-User-Id"
DEFAULT_USER_ID = "default"


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


def _window_days() -> int:
    raw = os.environ.get("UPCOMING_WINDOW_DAYS", "").strip()
    if not raw:
        return UPCOMING_WINDOW_DAYS
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid UPCOMING_WINDOW_DAYS=%r", raw)
        return UPCOMING_WINDOW_DAYS


def _today() -> date:
    return date.today()


def _owner_id(x_user_id: str | None) -> str:
    return (x_user_id or "").strip() or DEFAULT_USER_ID


def _get_cached_driver(app: FastAPI):
    if getattr(app.state, "driver", None) is None:
        app.state.driver = _get_driver()
    return app.state.driver


def get_service(app: FastAPI) -> ContactService:
    if getattr(app.state, "service", None) is None:
        driver = _get_cached_driver(app)
        app.state.service = ContactService(
            Neo4jContactRepository(driver),
            Neo4jNoteRepository(driver),
            Neo4jEventRepository(driver),
            window_days=_window_days(),
        )
    return app.state.service


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    try:
        app.state.driver = _get_driver()
        ensure_identity_constraint(app.state.driver)
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="Kinship API", lifespan=lifespan)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: accounts ---


class AccountBody(BaseModel):
    external_id: str
    provider: str = PROVIDER_EMAIL
    display_name: str | None = None
    email: str | None = None


@app.post("/accounts")
def create_account(body: AccountBody, request: Request):
    driver = _get_cached_driver(request.app)
    try:
        owner_id, is_new = get_or_create_owner_id(
            driver,
            body.provider,
            body.external_id,
            display_name=body.display_name,
            email=body.email,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if is_new:
        logger.info("New account %s via %s", owner_id, body.provider)
    return JSONResponse(
        content={"user_id": owner_id, "is_new": is_new},
        status_code=201 if is_new else 200,
    )


class ProfileBody(BaseModel):
    display_name: str | None = None


@app.patch("/accounts/me")
def update_profile(
    body: ProfileBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    driver = _get_cached_driver(request.app)
    owner_id = _owner_id(x_user_id)
    try:
        update_account_profile(driver, owner_id, display_name=body.display_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    profile = get_account_profile(driver, owner_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Account not found.")
    return {"display_name": profile.display_name, "email": profile.email}


# --- REST: contacts ---


class ContactBody(BaseModel):
    first_name: str
    middle_name: str | None = None
    last_name: str | None = None
    birthday: str | None = None
    # Form text ("category: value" per line) or an already-split mapping.
    favorites: str | dict[str, str] = ""

    def to_form(self) -> ContactForm:
        favorites = self.favorites
        if isinstance(favorites, dict):
            favorites = format_favorites(favorites)
        return ContactForm(
            first_name=self.first_name,
            middle_name=self.middle_name or "",
            last_name=self.last_name or "",
            birthday=self.birthday or "",
            favorites=favorites,
        )


class SegmentItem(BaseModel):
    text: str
    matched: bool


class ContactItem(BaseModel):
    id: str
    first_name: str
    middle_name: str | None = None
    last_name: str | None = None
    full_name: str
    birthday: str | None = None
    next_birthday: str | None = None
    favorites: dict[str, str] = {}
    created_at: str
    highlight: list[SegmentItem] = []


class ContactFormItem(BaseModel):
    first_name: str
    middle_name: str
    last_name: str
    birthday: str
    favorites: str


class BulkDeleteBody(BaseModel):
    ids: list[str]


def _contact_item(contact: Contact, today: date, query: str | None = None) -> ContactItem:
    name = full_name(contact)
    return ContactItem(
        id=contact.id,
        first_name=contact.first_name,
        middle_name=contact.middle_name,
        last_name=contact.last_name,
        full_name=name,
        birthday=contact.birthday.isoformat() if contact.birthday else None,
        next_birthday=(
            next_occurrence(contact.birthday, today).isoformat()
            if contact.birthday
            else None
        ),
        favorites=contact.favorites,
        created_at=contact.created_at.isoformat(),
        highlight=[
            SegmentItem(text=s.text, matched=s.matched)
            for s in highlight(name, query)
        ]
        if query and query.strip()
        else [],
    )


@app.post("/contacts")
def create_contact(
    body: ContactBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    result = service.create_contact(_owner_id(x_user_id), body.to_form())
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    if not isinstance(result, ContactCreated):
        raise HTTPException(status_code=400, detail="Failed to create contact")
    return JSONResponse(
        content={"id": result.contact_id, "name": result.name},
        status_code=201,
    )


@app.get("/contacts")
def list_contacts(
    request: Request,
    q: str = "",
    sort: SortField = Query(SortField.NAME),
    order: SortOrder = Query(SortOrder.ASC),
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    view = ViewState(query=q, sort_field=sort, sort_order=order)
    today = _today()
    return [
        _contact_item(c, today, q)
        for c in service.list_contacts(_owner_id(x_user_id), view)
    ]


@app.post("/contacts/bulk-delete")
def bulk_delete_contacts(
    body: BulkDeleteBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    deleted = service.delete_contacts(_owner_id(x_user_id), body.ids)
    return {"deleted": deleted}


@app.get("/contacts/{contact_id}")
def get_contact(
    contact_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    contact = service.get_contact(_owner_id(x_user_id), contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found.")
    return _contact_item(contact, _today())


@app.get("/contacts/{contact_id}/form")
def get_contact_form(
    contact_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    form = service.edit_form(_owner_id(x_user_id), contact_id)
    if form is None:
        raise HTTPException(status_code=404, detail="Contact not found.")
    return ContactFormItem(
        first_name=form.first_name,
        middle_name=form.middle_name,
        last_name=form.last_name,
        birthday=form.birthday,
        favorites=form.favorites,
    )


@app.put("/contacts/{contact_id}")
def update_contact(
    contact_id: str,
    body: ContactBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    result = service.update_contact(_owner_id(x_user_id), contact_id, body.to_form())
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail="Contact not found.")
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    if not isinstance(result, ContactUpdated):
        raise HTTPException(status_code=400, detail="Failed to update contact.")
    return {"id": result.contact_id, "name": result.name}


@app.delete("/contacts/{contact_id}", status_code=204)
def delete_contact(
    contact_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    if not service.delete_contact(_owner_id(x_user_id), contact_id):
        raise HTTPException(status_code=404, detail="Contact not found.")
    return Response(status_code=204)


# --- REST: notes ---


class NoteBody(BaseModel):
    title: str
    content: str


class NoteItem(BaseModel):
    id: str
    contact_id: str
    title: str
    content: str
    created_at: str
    updated_at: str


def _note_item(note: Note) -> NoteItem:
    return NoteItem(
        id=note.id,
        contact_id=note.contact_id,
        title=note.title,
        content=note.content,
        created_at=note.created_at.isoformat(),
        updated_at=note.updated_at.isoformat(),
    )


@app.get("/contacts/{contact_id}/notes")
def list_notes(
    contact_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    owner_id = _owner_id(x_user_id)
    if service.get_contact(owner_id, contact_id) is None:
        raise HTTPException(status_code=404, detail="Contact not found.")
    return [_note_item(n) for n in service.list_notes(owner_id, contact_id)]


@app.post("/contacts/{contact_id}/notes")
def create_note(
    contact_id: str,
    body: NoteBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    result = service.add_note(_owner_id(x_user_id), contact_id, body.title, body.content)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail="Contact not found.")
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    if not isinstance(result, NoteCreated):
        raise HTTPException(status_code=400, detail="Failed to create note.")
    return JSONResponse(
        content={"id": result.note_id, "contact_id": result.contact_id},
        status_code=201,
    )


@app.delete("/notes/{note_id}", status_code=204)
def delete_note(
    note_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    if not service.delete_note(_owner_id(x_user_id), note_id):
        raise HTTPException(status_code=404, detail="Note not found.")
    return Response(status_code=204)


# --- REST: calendar ---


class EventBody(BaseModel):
    title: str
    date: str
    kind: str = "custom"
    contact_id: str | None = None
    description: str | None = None


class EventItem(BaseModel):
    id: str
    title: str
    date: str
    kind: str
    contact_id: str | None = None
    description: str | None = None
    derived: bool = False


def _event_item(event: Event) -> EventItem:
    return EventItem(
        id=event.id,
        title=event.title,
        date=event.date.isoformat(),
        kind=event.kind.value,
        contact_id=event.contact_id,
        description=event.description,
        derived=is_derived_event_id(event.id),
    )


@app.get("/events")
def month_calendar(
    request: Request,
    year: int | None = Query(None, ge=1, le=9998),
    month: int | None = Query(None, ge=1, le=12),
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    """Month view: every day of the month with its stored and birthday events."""
    service = get_service(request.app)
    today = _today()
    year = year or today.year
    month = month or today.month
    events = service.month_events(_owner_id(x_user_id), year, month, today)
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)
    return {
        "year": year,
        "month": month,
        "previous": {"year": prev_year, "month": prev_month},
        "next": {"year": next_year, "month": next_month},
        "days": [
            {
                "date": day.isoformat(),
                "is_today": day == today,
                "events": [_event_item(e) for e in events_on(events, day)],
            }
            for day in month_days(year, month)
        ],
    }


@app.post("/events")
def create_event(
    body: EventBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    result = service.add_event(
        _owner_id(x_user_id),
        EventForm(
            title=body.title,
            date=body.date,
            kind=body.kind,
            contact_id=body.contact_id,
            description=body.description,
        ),
    )
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    return JSONResponse(
        content={"id": result.event_id, "title": result.title},
        status_code=201,
    )


@app.delete("/events/{event_id}", status_code=204)
def delete_event(
    event_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    if is_derived_event_id(event_id):
        raise HTTPException(
            status_code=400, detail="Birthday events follow the contact's birthday."
        )
    if not service.delete_event(_owner_id(x_user_id), event_id):
        raise HTTPException(status_code=404, detail="Event not found.")
    return Response(status_code=204)


# --- REST: dashboard ---


@app.get("/dashboard")
def dashboard(
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(request.app)
    owner_id = _owner_id(x_user_id)
    today = _today()
    stats = service.dashboard(owner_id, today)
    driver = getattr(request.app.state, "driver", None)
    if driver is not None:
        stats = replace(stats, profile=get_account_profile(driver, owner_id))
    profile = stats.profile
    return {
        "display_name": profile.display_name if profile else None,
        "email": profile.email if profile else None,
        "total_contacts": stats.total_contacts,
        "total_notes": stats.total_notes,
        "upcoming_birthdays": stats.upcoming_count,
        "upcoming_preview": [
            {
                "id": u.contact.id,
                "name": full_name(u.contact),
                "date": u.next_date.isoformat(),
                "days_until": u.days_until,
            }
            for u in stats.upcoming_preview
        ],
    }

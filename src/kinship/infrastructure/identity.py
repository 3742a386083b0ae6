"""Accounts: map a sign-in identity to the owner id that scopes all data.

Authentication is done elsewhere. An (:AccountLink {provider, external_id})
node records who signed in and points at the (:Owner) whose id every
repository call is scoped by. The Owner node also holds the dashboard profile.
"""

import uuid
from datetime import datetime, timezone

from kinship.domain import AccountProfile
from kinship.domain.entities import NAME_MAX_LENGTH

PROVIDER_EMAIL = "email"

_LINK_CONSTRAINT = """
CREATE CONSTRAINT account_link_unique IF NOT EXISTS
FOR (l:AccountLink) REQUIRE (l.provider, l.external_id) IS NODE UNIQUE
"""

# At most one Owner attaches to a link (see the WHERE in _ATTACH_OWNER).
_CLAIM_LINK = """
MERGE (l:AccountLink { provider: $provider, external_id: $external_id })
ON CREATE SET l.linked_at = $now
WITH l
OPTIONAL MATCH (l)-[:BELONGS_TO]->(o:Owner)
RETURN o.id AS owner_id
"""

_ATTACH_OWNER = """
MATCH (l:AccountLink { provider: $provider, external_id: $external_id })
WHERE NOT (l)-[:BELONGS_TO]->()
MERGE (o:Owner { id: $owner_id })
ON CREATE SET o.created_at = $now, o.display_name = $display_name, o.email = $email
CREATE (l)-[:BELONGS_TO]->(o)
RETURN o.id AS owner_id
"""

_SET_DISPLAY_NAME = """
MATCH (o:Owner { id: $owner_id })
SET o.display_name = $display_name
"""

_READ_PROFILE = """
MATCH (o:Owner { id: $owner_id })
RETURN o.display_name AS display_name, o.email AS email
"""


def ensure_identity_constraint(driver) -> None:
    with driver.session() as session:
        session.run(_LINK_CONSTRAINT)


def get_or_create_owner_id(
    driver,
    provider: str,
    external_id: str,
    *,
    display_name: str | None = None,
    email: str | None = None,
) -> tuple[str, bool]:
    """Return (owner_id, created) for a sign-in identity.

    The first sign-in creates the Owner with the given profile; later ones
    return the same id and ignore the profile arguments.
    """
    provider = (provider or "").strip()
    external_id = (external_id or "").strip()
    if not external_id:
        raise ValueError("external_id must be non-empty")
    if not provider:
        raise ValueError("provider must be non-empty")
    profile = AccountProfile(display_name=display_name, email=email)
    now = datetime.now(timezone.utc).isoformat()
    key = {"provider": provider, "external_id": external_id}

    with driver.session() as session:
        claimed = session.run(_CLAIM_LINK, now=now, **key).single()
        if claimed is not None and claimed["owner_id"] is not None:
            return claimed["owner_id"], False
        attached = session.run(
            _ATTACH_OWNER,
            owner_id=str(uuid.uuid4()),
            now=now,
            display_name=profile.display_name,
            email=profile.email,
            **key,
        ).single()
    if attached is None:
        raise RuntimeError(f"Could not attach an owner to {provider}:{external_id}")
    return attached["owner_id"], True


def update_account_profile(
    driver,
    owner_id: str,
    *,
    display_name: str | None = None,
) -> None:
    """Set the owner's display name; None leaves it as is, blank clears it."""
    if display_name is None:
        return
    display_name = display_name.strip() or None
    if display_name and len(display_name) > NAME_MAX_LENGTH:
        raise ValueError(f"Display name must be at most {NAME_MAX_LENGTH} characters.")
    with driver.session() as session:
        session.run(_SET_DISPLAY_NAME, owner_id=owner_id, display_name=display_name)


def get_account_profile(driver, owner_id: str) -> AccountProfile | None:
    with driver.session() as session:
        record = session.run(_READ_PROFILE, owner_id=owner_id).single()
    if record is None:
        return None
    return AccountProfile(display_name=record["display_name"], email=record["email"])

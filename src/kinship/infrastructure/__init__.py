"""Infrastructure layer: concrete implementations of application ports."""

from kinship.infrastructure.identity import (
    PROVIDER_EMAIL,
    ensure_identity_constraint,
    get_account_profile,
    get_or_create_owner_id,
    update_account_profile,
)
from kinship.infrastructure.memory_repository import (
    InMemoryContactRepository,
    InMemoryEventRepository,
    InMemoryNoteRepository,
)
from kinship.infrastructure.persistence.neo4j_repository import (
    Neo4jContactRepository,
    Neo4jEventRepository,
    Neo4jNoteRepository,
)

__all__ = [
    "PROVIDER_EMAIL",
    "InMemoryContactRepository",
    "InMemoryEventRepository",
    "InMemoryNoteRepository",
    "Neo4jContactRepository",
    "Neo4jEventRepository",
    "Neo4jNoteRepository",
    "ensure_identity_constraint",
    "get_account_profile",
    "get_or_create_owner_id",
    "update_account_profile",
]

"""Domain models for photographers and their identities."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """An authenticated user as reported by the identity provider."""

    user_id: UUID
    email: str
    name: str | None = None


@dataclass(frozen=True)
class PhotographerRecord:
    """Represents a photographer stored in the database."""

    id: UUID
    email: str
    name: str | None

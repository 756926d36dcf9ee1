"""Photographer identity and lifecycle."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from photo_proofing.domain.errors import AuthenticationError
from photo_proofing.domain.models import Identity, PhotographerRecord

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Resolves bearer tokens to authenticated identities."""

    def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity for a token, or None when it is not valid."""


class PhotographerRepository(Protocol):
    """Persistence interface for photographer data."""

    def get_photographer(self, photographer_id: UUID) -> PhotographerRecord | None:
        """Return the photographer with this id, if present."""

    def create_photographer(self, identity: Identity) -> PhotographerRecord:
        """Create and return a photographer row for an identity."""


@dataclass
class PhotographerService:
    """Application service for photographer sessions."""

    identity_provider: IdentityProvider
    repository: PhotographerRepository

    def authenticate(self, access_token: str | None) -> PhotographerRecord:
        """Resolve a bearer token to a photographer, creating the row on first use."""
        if not access_token:
            raise AuthenticationError
        identity = self.identity_provider.get_identity(access_token)
        if identity is None:
            raise AuthenticationError
        return self.ensure_photographer(identity)

    def ensure_photographer(self, identity: Identity) -> PhotographerRecord:
        """Ensure a photographer exists for the identity and return it."""
        existing = self.repository.get_photographer(identity.user_id)
        if existing:
            return existing
        logger.info(
            "Registering photographer", extra={"photographer_id": str(identity.user_id)}
        )
        return self.repository.create_photographer(identity)

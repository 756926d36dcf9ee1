"""Supabase Auth adapter for photographer sessions."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from photo_proofing.domain.models import Identity
from photo_proofing.services.photographers import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Validates access tokens against Supabase Auth."""

    client: Client

    def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity for a token, or None when Supabase rejects it."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            logger.info("Rejected photographer access token")
            return None
        user = getattr(response, "user", None)
        if user is None or not user.email:
            return None
        metadata = user.user_metadata or {}
        name = metadata.get("name") or metadata.get("full_name")
        return Identity(user_id=UUID(str(user.id)), email=user.email, name=name)

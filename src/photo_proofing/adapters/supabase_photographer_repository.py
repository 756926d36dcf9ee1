"""Supabase-backed photographer repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from photo_proofing.domain.models import Identity, PhotographerRecord
from photo_proofing.services.photographers import PhotographerRepository


@dataclass
class SupabasePhotographerRepository(PhotographerRepository):
    """Supabase implementation for photographer rows."""

    client: Client

    def get_photographer(self, photographer_id: UUID) -> PhotographerRecord | None:
        """Return the photographer with this id, if present."""
        response = (
            self.client.table("photographers")
            .select("id, email, name")
            .eq("id", str(photographer_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_photographer(response.data[0])
        return None

    def create_photographer(self, identity: Identity) -> PhotographerRecord:
        """Insert the photographer row keyed by the auth user id."""
        response = (
            self.client.table("photographers")
            .upsert(
                {
                    "id": str(identity.user_id),
                    "email": identity.email,
                    "name": identity.name,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photographer in Supabase")
        return _parse_photographer(response.data[0])


def _parse_photographer(row: dict[str, object]) -> PhotographerRecord:
    return PhotographerRecord(
        id=UUID(str(row["id"])),
        email=str(row.get("email", "")),
        name=row.get("name"),
    )

"""Supabase-backed gallery repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from photo_proofing.domain.galleries import GalleryDraft, GalleryRecord
from photo_proofing.services.galleries import GalleryRepository

_GALLERY_COLUMNS = (
    "id, name, description, photographer_id, client_email, client_name, "
    "access_code, is_active, expires_at, views, created_at"
)


@dataclass
class SupabaseGalleryRepository(GalleryRepository):
    """Supabase implementation for gallery persistence."""

    client: Client

    def create_gallery(
        self, photographer_id: UUID, draft: GalleryDraft, access_code: str
    ) -> GalleryRecord:
        """Create a gallery row and return it."""
        response = (
            self.client.table("galleries")
            .insert(
                {
                    "photographer_id": str(photographer_id),
                    "name": draft.name,
                    "description": draft.description,
                    "client_email": draft.client_email,
                    "client_name": draft.client_name,
                    "access_code": access_code,
                    "expires_at": draft.expires_at.isoformat()
                    if draft.expires_at
                    else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create gallery in Supabase")
        return _parse_gallery(response.data[0])

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        """Return a gallery by id, if present."""
        response = (
            self.client.table("galleries")
            .select(_GALLERY_COLUMNS)
            .eq("id", str(gallery_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def get_by_access_code(self, access_code: str) -> GalleryRecord | None:
        """Return the gallery holding this access code, if present."""
        response = (
            self.client.table("galleries")
            .select(_GALLERY_COLUMNS)
            .eq("access_code", access_code)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def access_code_exists(self, access_code: str) -> bool:
        """Return True when the access code is already taken."""
        response = (
            self.client.table("galleries")
            .select("id")
            .eq("access_code", access_code)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def list_by_photographer(self, photographer_id: UUID) -> list[GalleryRecord]:
        """Return a photographer's galleries, newest first."""
        response = (
            self.client.table("galleries")
            .select(_GALLERY_COLUMNS)
            .eq("photographer_id", str(photographer_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_gallery(row) for row in response.data or []]

    def update_gallery(
        self, gallery_id: UUID, changes: dict[str, object]
    ) -> GalleryRecord:
        """Apply field changes and return the updated row."""
        payload = {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in changes.items()
        }
        response = (
            self.client.table("galleries")
            .update(payload)
            .eq("id", str(gallery_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update gallery in Supabase")
        return _parse_gallery(response.data[0])

    def delete_gallery(self, gallery_id: UUID) -> None:
        """Delete a gallery; images and orders cascade in the database."""
        self.client.table("galleries").delete().eq("id", str(gallery_id)).execute()

    def increment_views(self, gallery_id: UUID) -> int:
        """Increment the view counter in a single database statement."""
        response = self.client.rpc(
            "increment_gallery_views", {"p_gallery_id": str(gallery_id)}
        ).execute()
        return int(response.data or 0)

    def count_orders(self, gallery_id: UUID) -> int:
        """Return the number of orders for a gallery."""
        response = (
            self.client.table("orders")
            .select("id", count="exact")
            .eq("gallery_id", str(gallery_id))
            .execute()
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])


def _parse_gallery(row: dict[str, object]) -> GalleryRecord:
    expires_at = row.get("expires_at")
    return GalleryRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        description=row.get("description"),
        photographer_id=UUID(str(row["photographer_id"])),
        client_email=str(row.get("client_email", "")),
        client_name=str(row.get("client_name", "")),
        access_code=str(row["access_code"]),
        is_active=bool(row.get("is_active", True)),
        expires_at=datetime.fromisoformat(expires_at)
        if isinstance(expires_at, str) and expires_at
        else None,
        views=int(row.get("views") or 0),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )

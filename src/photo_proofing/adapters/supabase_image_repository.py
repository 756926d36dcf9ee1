"""Supabase repository for gallery images."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from supabase import Client

from photo_proofing.domain.galleries import ImageRecord
from photo_proofing.services.galleries import ImageRepository

_IMAGE_COLUMNS = (
    "id, gallery_id, filename, original_url, thumbnail_url, price, size_bytes, "
    "uploaded_at"
)


@dataclass
class SupabaseImageRepository(ImageRepository):
    """Supabase implementation for image rows."""

    client: Client

    def create_image(  # noqa: PLR0913
        self,
        gallery_id: UUID,
        filename: str,
        original_url: str,
        thumbnail_url: str,
        size_bytes: int,
    ) -> ImageRecord:
        """Create an image row and return it."""
        response = (
            self.client.table("images")
            .insert(
                {
                    "gallery_id": str(gallery_id),
                    "filename": filename,
                    "original_url": original_url,
                    "thumbnail_url": thumbnail_url,
                    "size_bytes": size_bytes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create image")
        return _parse_image(response.data[0])

    def list_images(self, gallery_id: UUID) -> list[ImageRecord]:
        """Return a gallery's images, newest upload first."""
        response = (
            self.client.table("images")
            .select(_IMAGE_COLUMNS)
            .eq("gallery_id", str(gallery_id))
            .order("uploaded_at", desc=True)
            .execute()
        )
        return [_parse_image(row) for row in response.data or []]

    def get_images(self, gallery_id: UUID, image_ids: list[UUID]) -> list[ImageRecord]:
        """Return the listed images, restricted to the gallery."""
        if not image_ids:
            return []
        response = (
            self.client.table("images")
            .select(_IMAGE_COLUMNS)
            .eq("gallery_id", str(gallery_id))
            .in_("id", [str(image_id) for image_id in image_ids])
            .execute()
        )
        return [_parse_image(row) for row in response.data or []]

    def update_price(self, gallery_id: UUID, image_id: UUID, price: Decimal) -> bool:
        """Update one image's price; the gallery filter blocks cross-gallery writes."""
        response = (
            self.client.table("images")
            .update({"price": str(price)})
            .eq("id", str(image_id))
            .eq("gallery_id", str(gallery_id))
            .execute()
        )
        return bool(response.data)


def _parse_image(row: dict[str, object]) -> ImageRecord:
    return ImageRecord(
        id=UUID(str(row["id"])),
        gallery_id=UUID(str(row["gallery_id"])),
        filename=str(row.get("filename", "")),
        original_url=str(row.get("original_url", "")),
        thumbnail_url=str(row.get("thumbnail_url", "")),
        price=Decimal(str(row.get("price") or 0)),
        size_bytes=int(row.get("size_bytes") or 0),
        uploaded_at=datetime.fromisoformat(str(row["uploaded_at"])),
    )

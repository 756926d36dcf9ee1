"""Gallery catalog management for photographers."""

import logging
import secrets
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from photo_proofing.domain.errors import GalleryNotFoundError, PermissionDeniedError
from photo_proofing.domain.galleries import (
    GalleryDetail,
    GalleryDraft,
    GalleryRecord,
    ImageRecord,
)

logger = logging.getLogger(__name__)

ACCESS_CODE_BYTES = 16
ACCESS_CODE_ATTEMPTS = 5
UPDATABLE_FIELDS = frozenset(
    {"name", "description", "client_email", "client_name", "is_active", "expires_at"}
)


class GalleryRepository(Protocol):
    """Persistence interface for galleries."""

    def create_gallery(
        self, photographer_id: UUID, draft: GalleryDraft, access_code: str
    ) -> GalleryRecord:
        """Create a gallery row and return it."""

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        """Return a gallery by id, if present."""

    def get_by_access_code(self, access_code: str) -> GalleryRecord | None:
        """Return the gallery holding this access code, if present."""

    def access_code_exists(self, access_code: str) -> bool:
        """Return True when any gallery already uses the access code."""

    def list_by_photographer(self, photographer_id: UUID) -> list[GalleryRecord]:
        """Return a photographer's galleries, newest first."""

    def update_gallery(
        self, gallery_id: UUID, changes: dict[str, object]
    ) -> GalleryRecord:
        """Apply field changes and return the updated gallery."""

    def delete_gallery(self, gallery_id: UUID) -> None:
        """Delete a gallery and everything that belongs to it."""

    def increment_views(self, gallery_id: UUID) -> int:
        """Atomically add one view and return the new count."""

    def count_orders(self, gallery_id: UUID) -> int:
        """Return the number of orders placed against a gallery."""


class ImageRepository(Protocol):
    """Persistence interface for gallery images."""

    def create_image(  # noqa: PLR0913
        self,
        gallery_id: UUID,
        filename: str,
        original_url: str,
        thumbnail_url: str,
        size_bytes: int,
    ) -> ImageRecord:
        """Create an image row and return it."""

    def list_images(self, gallery_id: UUID) -> list[ImageRecord]:
        """Return a gallery's images, newest upload first."""

    def get_images(self, gallery_id: UUID, image_ids: list[UUID]) -> list[ImageRecord]:
        """Return the listed images that belong to the gallery."""

    def update_price(self, gallery_id: UUID, image_id: UUID, price: Decimal) -> bool:
        """Set one image's price, scoped to its gallery; False if nothing matched."""


@dataclass
class GalleryService:
    """Owner-scoped CRUD over galleries."""

    gallery_repository: GalleryRepository
    image_repository: ImageRepository

    def list_galleries(self, photographer_id: UUID) -> list[GalleryDetail]:
        """Return the photographer's galleries with images and counts."""
        galleries = self.gallery_repository.list_by_photographer(photographer_id)
        return [self._detail(gallery) for gallery in galleries]

    def create_gallery(
        self, photographer_id: UUID, draft: GalleryDraft
    ) -> GalleryDetail:
        """Create a gallery with a fresh access code."""
        access_code = self._generate_access_code()
        gallery = self.gallery_repository.create_gallery(
            photographer_id, draft, access_code
        )
        logger.info(
            "Created gallery",
            extra={
                "gallery_id": str(gallery.id),
                "photographer_id": str(photographer_id),
            },
        )
        return GalleryDetail(gallery=gallery, images=[], image_count=0, order_count=0)

    def get_owned(self, photographer_id: UUID, gallery_id: UUID) -> GalleryRecord:
        """Return a gallery the photographer owns, or raise 404/403 errors."""
        gallery = self.gallery_repository.get_gallery(gallery_id)
        if gallery is None:
            raise GalleryNotFoundError
        if gallery.photographer_id != photographer_id:
            raise PermissionDeniedError
        return gallery

    def get_gallery(self, photographer_id: UUID, gallery_id: UUID) -> GalleryDetail:
        """Return one owned gallery with images and counts."""
        return self._detail(self.get_owned(photographer_id, gallery_id))

    def update_gallery(
        self, photographer_id: UUID, gallery_id: UUID, changes: dict[str, object]
    ) -> GalleryDetail:
        """Apply allowed field changes. The access code is never updated."""
        self.get_owned(photographer_id, gallery_id)
        allowed = {
            key: value for key, value in changes.items() if key in UPDATABLE_FIELDS
        }
        if not allowed:
            return self.get_gallery(photographer_id, gallery_id)
        updated = self.gallery_repository.update_gallery(gallery_id, allowed)
        return self._detail(updated)

    def delete_gallery(self, photographer_id: UUID, gallery_id: UUID) -> None:
        """Delete an owned gallery."""
        self.get_owned(photographer_id, gallery_id)
        self.gallery_repository.delete_gallery(gallery_id)
        logger.info("Deleted gallery", extra={"gallery_id": str(gallery_id)})

    def _detail(self, gallery: GalleryRecord) -> GalleryDetail:
        images = self.image_repository.list_images(gallery.id)
        return GalleryDetail(
            gallery=gallery,
            images=images,
            image_count=len(images),
            order_count=self.gallery_repository.count_orders(gallery.id),
        )

    def _generate_access_code(self) -> str:
        for _ in range(ACCESS_CODE_ATTEMPTS):
            candidate = secrets.token_urlsafe(ACCESS_CODE_BYTES)
            if not self.gallery_repository.access_code_exists(candidate):
                return candidate
        raise RuntimeError("Could not generate a unique gallery access code")

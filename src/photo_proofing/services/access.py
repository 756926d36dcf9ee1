"""Client access to galleries by shareable code."""

from dataclasses import dataclass
from datetime import UTC, datetime

from photo_proofing.domain.errors import GalleryExpiredError, GalleryNotFoundError
from photo_proofing.domain.galleries import (
    ClientGallery,
    GalleryRecord,
    PhotographerContact,
)
from photo_proofing.services.galleries import GalleryRepository, ImageRepository
from photo_proofing.services.photographers import PhotographerRepository


@dataclass
class GalleryAccessService:
    """Resolves access codes and tracks gallery views."""

    gallery_repository: GalleryRepository
    image_repository: ImageRepository
    photographer_repository: PhotographerRepository

    def resolve(self, access_code: str) -> ClientGallery:
        """Return the gallery behind an access code.

        Unknown codes and inactive galleries raise ``GalleryNotFoundError``;
        galleries past their expiry raise ``GalleryExpiredError``.
        """
        gallery = self._find(access_code)
        if gallery.is_expired(datetime.now(tz=UTC)):
            raise GalleryExpiredError
        photographer = self.photographer_repository.get_photographer(
            gallery.photographer_id
        )
        contact = (
            PhotographerContact(name=photographer.name, email=photographer.email)
            if photographer
            else None
        )
        return ClientGallery(
            gallery=gallery,
            images=self.image_repository.list_images(gallery.id),
            photographer=contact,
        )

    def record_view(self, access_code: str) -> int:
        """Add one view to the gallery behind a code and return the new count."""
        gallery = self._find(access_code)
        return self.gallery_repository.increment_views(gallery.id)

    def _find(self, access_code: str) -> GalleryRecord:
        gallery = self.gallery_repository.get_by_access_code(access_code)
        if gallery is None or not gallery.is_active:
            raise GalleryNotFoundError
        return gallery

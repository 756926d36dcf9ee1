"""Domain models for galleries and their images."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class GalleryRecord:
    """Gallery row as stored."""

    id: UUID
    name: str
    description: str | None
    photographer_id: UUID
    client_email: str
    client_name: str
    access_code: str
    is_active: bool
    expires_at: datetime | None
    views: int
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Return True when the gallery has an expiry in the past."""
        return self.expires_at is not None and now > self.expires_at


@dataclass(frozen=True)
class GalleryDraft:
    """Fields a photographer supplies when creating a gallery."""

    name: str
    client_email: str
    client_name: str
    description: str | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True)
class ImageRecord:
    """Image row belonging to exactly one gallery."""

    id: UUID
    gallery_id: UUID
    filename: str
    original_url: str
    thumbnail_url: str
    price: Decimal
    size_bytes: int
    uploaded_at: datetime


@dataclass(frozen=True)
class PhotographerContact:
    """The photographer fields exposed to clients."""

    name: str | None
    email: str


@dataclass(frozen=True)
class ClientGallery:
    """A resolved gallery as shown to a client."""

    gallery: GalleryRecord
    images: list[ImageRecord]
    photographer: PhotographerContact | None


@dataclass(frozen=True)
class GalleryDetail:
    """A gallery as shown to its owner."""

    gallery: GalleryRecord
    images: list[ImageRecord]
    image_count: int
    order_count: int

"""Image upload handling for galleries."""

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from photo_proofing.domain.errors import (
    GalleryNotFoundError,
    PermissionDeniedError,
    UploadRejectedError,
)
from photo_proofing.domain.galleries import ImageRecord
from photo_proofing.services.galleries import GalleryService, ImageRepository
from photo_proofing.services.imaging import (
    WatermarkOptions,
    apply_watermark,
    content_type_for,
    make_thumbnail,
    probe_format,
)

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_CONTENT_TYPE_ALIASES = {"image/jpg": "image/jpeg"}


class ImageStorage(Protocol):
    """Object storage for originals and thumbnails."""

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store bytes at a path and return the public URL."""


@dataclass(frozen=True)
class UploadedFile:
    """A file received from the client."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class UploadService:
    """Validates uploads, renders thumbnails and records images."""

    gallery_service: GalleryService
    image_repository: ImageRepository
    storage: ImageStorage
    allowed_types: set[str]
    max_bytes: int
    thumbnail_max_px: int = 300
    watermark: WatermarkOptions | None = None

    async def upload_images(
        self, photographer_id: UUID, gallery_id: UUID, files: list[UploadedFile]
    ) -> list[ImageRecord]:
        """Store every file under the gallery and create image records."""
        try:
            self.gallery_service.get_owned(photographer_id, gallery_id)
        except (GalleryNotFoundError, PermissionDeniedError) as exc:
            raise PermissionDeniedError("Gallery not found or access denied") from exc
        if not files:
            raise UploadRejectedError("No files provided")
        for upload in files:
            self.validate(upload)

        images = []
        for upload in files:
            images.append(await asyncio.to_thread(self._store, gallery_id, upload))
        logger.info(
            "Uploaded images",
            extra={"gallery_id": str(gallery_id), "count": len(images)},
        )
        return images

    def validate(self, upload: UploadedFile) -> None:
        """Reject files that are empty, too large, mistyped or undecodable."""
        if upload.size == 0:
            raise UploadRejectedError(f"{upload.filename}: file is empty")
        if upload.size > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            raise UploadRejectedError(
                f"{upload.filename}: file size too large. "
                f"Maximum {limit_mb}MB allowed."
            )
        if upload.content_type.lower() not in self.allowed_types:
            raise UploadRejectedError(
                f"{upload.filename}: invalid file type {upload.content_type}"
            )
        image_format = probe_format(upload.content)
        if image_format is None:
            raise UploadRejectedError(f"{upload.filename}: not a readable image")
        declared = upload.content_type.lower()
        if content_type_for(image_format) != _CONTENT_TYPE_ALIASES.get(
            declared, declared
        ):
            raise UploadRejectedError(
                f"{upload.filename}: content does not match type {upload.content_type}"
            )

    def _store(self, gallery_id: UUID, upload: UploadedFile) -> ImageRecord:
        stored_name = stored_filename(upload.filename)
        thumbnail = make_thumbnail(
            upload.content, self.thumbnail_max_px, self.thumbnail_max_px
        )
        if self.watermark is not None:
            thumbnail = apply_watermark(thumbnail, self.watermark)
        original_url = self.storage.upload(
            f"{gallery_id}/{stored_name}", upload.content, upload.content_type
        )
        thumbnail_url = self.storage.upload(
            f"{gallery_id}/thumbnails/{stored_name}", thumbnail, upload.content_type
        )
        return self.image_repository.create_image(
            gallery_id=gallery_id,
            filename=upload.filename,
            original_url=original_url,
            thumbnail_url=thumbnail_url,
            size_bytes=upload.size,
        )


def stored_filename(filename: str, now_ms: int | None = None) -> str:
    """Build a unique, storage-safe name for an uploaded file."""
    timestamp = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    return f"{timestamp}-{_UNSAFE_FILENAME_CHARS.sub('_', filename)}"

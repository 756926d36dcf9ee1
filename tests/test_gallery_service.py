"""Tests for photographer gallery management."""

from uuid import uuid4

import pytest

from photo_proofing.domain.errors import GalleryNotFoundError, PermissionDeniedError
from photo_proofing.domain.galleries import GalleryDraft
from photo_proofing.services.galleries import GalleryService
from tests.conftest import (
    PHOTOGRAPHER_ID,
    InMemoryGalleryRepository,
    InMemoryImageRepository,
)


def test_create_gallery_generates_unique_code(
    gallery_service: GalleryService,
) -> None:
    draft = GalleryDraft(
        name="Portraits", client_email="c@example.com", client_name="Cara"
    )

    first = gallery_service.create_gallery(PHOTOGRAPHER_ID, draft)
    second = gallery_service.create_gallery(PHOTOGRAPHER_ID, draft)

    assert first.gallery.access_code != second.gallery.access_code
    assert len(first.gallery.access_code) >= 16
    assert first.image_count == 0
    assert first.gallery.is_active


def test_list_galleries_includes_counts(
    gallery_service: GalleryService,
    gallery_repository: InMemoryGalleryRepository,
    image_repository: InMemoryImageRepository,
) -> None:
    older = gallery_repository.add()
    newer = gallery_repository.add()
    gallery_repository.add(photographer_id=uuid4())
    image_repository.add(older.id)
    image_repository.add(older.id)
    gallery_repository.order_counts[older.id] = 3

    details = gallery_service.list_galleries(PHOTOGRAPHER_ID)

    assert [detail.gallery.id for detail in details] == [newer.id, older.id]
    assert details[1].image_count == 2
    assert details[1].order_count == 3


def test_other_photographers_gallery_is_forbidden(
    gallery_service: GalleryService, gallery_repository: InMemoryGalleryRepository
) -> None:
    gallery = gallery_repository.add(photographer_id=uuid4())

    with pytest.raises(PermissionDeniedError):
        gallery_service.get_gallery(PHOTOGRAPHER_ID, gallery.id)
    with pytest.raises(GalleryNotFoundError):
        gallery_service.get_gallery(PHOTOGRAPHER_ID, uuid4())


def test_update_never_changes_access_code(
    gallery_service: GalleryService, gallery_repository: InMemoryGalleryRepository
) -> None:
    gallery = gallery_repository.add(access_code="fixed-code")

    detail = gallery_service.update_gallery(
        PHOTOGRAPHER_ID,
        gallery.id,
        {"name": "Renamed", "is_active": False, "access_code": "stolen"},
    )

    assert detail.gallery.name == "Renamed"
    assert detail.gallery.is_active is False
    assert detail.gallery.access_code == "fixed-code"


def test_delete_gallery_requires_ownership(
    gallery_service: GalleryService, gallery_repository: InMemoryGalleryRepository
) -> None:
    mine = gallery_repository.add()
    theirs = gallery_repository.add(photographer_id=uuid4())

    gallery_service.delete_gallery(PHOTOGRAPHER_ID, mine.id)
    with pytest.raises(PermissionDeniedError):
        gallery_service.delete_gallery(PHOTOGRAPHER_ID, theirs.id)

    assert gallery_repository.deleted == [mine.id]

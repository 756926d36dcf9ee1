"""Photographer endpoints authenticated with a bearer token."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Header, Request, UploadFile

from photo_proofing.api.schemas import GalleryCreate, GalleryUpdate, PricingUpdate
from photo_proofing.api.serializers import (
    serialize_gallery_detail,
    serialize_image,
)
from photo_proofing.domain.models import PhotographerRecord
from photo_proofing.services.uploads import UploadedFile

if TYPE_CHECKING:
    from photo_proofing.containers import AppContainer

router = APIRouter(tags=["galleries"])

_BEARER_PREFIX = "bearer "


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    return authorization[len(_BEARER_PREFIX) :].strip() or None


async def require_photographer(
    request: Request, authorization: str | None = Header(default=None)
) -> PhotographerRecord:
    """Resolve the bearer token to a photographer or raise 401."""
    container: AppContainer = request.app.state.container
    return container.photographer_service.authenticate(_bearer_token(authorization))


@router.get("/galleries")
async def list_galleries(
    request: Request,
    photographer: PhotographerRecord = Depends(require_photographer),
) -> list[dict[str, object]]:
    container: AppContainer = request.app.state.container
    details = container.gallery_service.list_galleries(photographer.id)
    return [serialize_gallery_detail(detail) for detail in details]


@router.post("/galleries")
async def create_gallery(
    payload: GalleryCreate,
    request: Request,
    photographer: PhotographerRecord = Depends(require_photographer),
) -> dict[str, object]:
    """Create a gallery with a fresh access code."""
    container: AppContainer = request.app.state.container
    detail = container.gallery_service.create_gallery(
        photographer.id, payload.to_draft()
    )
    return serialize_gallery_detail(detail)


@router.get("/galleries/{gallery_id}")
async def get_gallery(
    gallery_id: UUID,
    request: Request,
    photographer: PhotographerRecord = Depends(require_photographer),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    detail = container.gallery_service.get_gallery(photographer.id, gallery_id)
    return serialize_gallery_detail(detail)


@router.put("/galleries/{gallery_id}")
async def update_gallery(
    gallery_id: UUID,
    payload: GalleryUpdate,
    request: Request,
    photographer: PhotographerRecord = Depends(require_photographer),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    detail = container.gallery_service.update_gallery(
        photographer.id, gallery_id, payload.changes()
    )
    return serialize_gallery_detail(detail)


@router.delete("/galleries/{gallery_id}")
async def delete_gallery(
    gallery_id: UUID,
    request: Request,
    photographer: PhotographerRecord = Depends(require_photographer),
) -> dict[str, bool]:
    container: AppContainer = request.app.state.container
    container.gallery_service.delete_gallery(photographer.id, gallery_id)
    return {"success": True}


@router.put("/galleries/{gallery_id}/pricing")
async def update_pricing(
    gallery_id: UUID,
    payload: PricingUpdate,
    request: Request,
    photographer: PhotographerRecord = Depends(require_photographer),
) -> dict[str, object]:
    """Save the full image-id to price mapping for a gallery."""
    container: AppContainer = request.app.state.container
    images = await container.pricing_service.apply_prices(
        photographer.id, gallery_id, payload.prices
    )
    return {"success": True, "images": [serialize_image(image) for image in images]}


@router.post("/upload")
async def upload_images(
    request: Request,
    gallery_id: UUID = Form(...),
    files: list[UploadFile] = File(...),
    photographer: PhotographerRecord = Depends(require_photographer),
) -> dict[str, object]:
    """Accept multipart image uploads into one of the photographer's galleries."""
    container: AppContainer = request.app.state.container
    uploads = [
        UploadedFile(
            filename=upload.filename or "upload",
            content_type=upload.content_type or "application/octet-stream",
            content=await upload.read(),
        )
        for upload in files
    ]
    images = await container.upload_service.upload_images(
        photographer.id, gallery_id, uploads
    )
    return {
        "message": "Files uploaded successfully",
        "images": [serialize_image(image) for image in images],
    }

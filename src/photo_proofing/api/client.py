"""Client-facing endpoints reached through an access code."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from photo_proofing.api.schemas import CheckoutPayload
from photo_proofing.api.serializers import serialize_client_gallery

if TYPE_CHECKING:
    from photo_proofing.containers import AppContainer

router = APIRouter(tags=["client"])


@router.get("/gallery-by-code/{code}")
async def gallery_by_code(code: str, request: Request) -> dict[str, object]:
    """Return the gallery behind an access code.

    Visits are counted separately through the view endpoint.
    """
    container: AppContainer = request.app.state.container
    return serialize_client_gallery(container.access_service.resolve(code))


@router.post("/gallery-by-code/{code}/view")
async def record_view(code: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    views = container.access_service.record_view(code)
    return {"success": True, "views": views}


@router.post("/checkout")
async def checkout(payload: CheckoutPayload, request: Request) -> dict[str, str]:
    """Create an order and return the hosted payment page URL."""
    container: AppContainer = request.app.state.container
    base_url = container.settings.public_base_url or str(request.base_url)
    result = await container.checkout_service.checkout(payload.to_request(), base_url)
    return {"url": result.url, "order_id": str(result.order_id)}

"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, Query, Request

from photo_proofing.api.serializers import serialize_order, serialize_order_item
from photo_proofing.domain.errors import AuthenticationError

if TYPE_CHECKING:
    from photo_proofing.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise AuthenticationError


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/orders", dependencies=[Depends(require_admin)])
async def list_orders(
    request: Request,
    status: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
) -> dict[str, object]:
    """Return recent orders, optionally filtered by status."""
    container: AppContainer = request.app.state.container
    orders = container.checkout_service.list_orders(status=status, limit=limit)
    return {"orders": [serialize_order(order) for order in orders]}


@router.get("/orders/{order_id}", dependencies=[Depends(require_admin)])
async def order_detail(order_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    order, items = container.checkout_service.get_order(order_id)
    return {
        **serialize_order(order),
        "items": [serialize_order_item(item) for item in items],
    }


@router.post("/orders/reconcile", dependencies=[Depends(require_admin)])
async def reconcile_orders(
    request: Request, minutes: int | None = Query(default=None, ge=1)
) -> dict[str, object]:
    """Mark orders that never received a payment session as failed."""
    container: AppContainer = request.app.state.container
    older_than = timedelta(
        minutes=minutes or container.settings.stale_order_minutes
    )
    swept = container.checkout_service.reconcile_stale_orders(older_than)
    return {"failed_order_ids": [str(order_id) for order_id in swept]}

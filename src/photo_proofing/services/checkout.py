"""Order submission and hosted payment handoff.

An order moves through three states. It is written as ``awaiting_session``
before the payment provider is called, becomes ``pending`` once the hosted
session is attached, and ``failed`` if the provider call raises. Orders stuck
in ``awaiting_session`` (a crash between the two writes) are swept to
``failed`` by :meth:`CheckoutService.reconcile_stale_orders`.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from photo_proofing.domain.errors import (
    CheckoutError,
    GalleryExpiredError,
    GalleryNotFoundError,
    InvalidRequestError,
    NotFoundError,
)
from photo_proofing.domain.galleries import GalleryRecord
from photo_proofing.domain.orders import (
    STATUS_AWAITING_SESSION,
    STATUS_FAILED,
    STATUS_PENDING,
    CheckoutRequest,
    CheckoutResult,
    LineItem,
    OrderItemRecord,
    OrderItemSnapshot,
    OrderRecord,
    PaymentLineItem,
    PaymentSession,
    order_total,
    to_minor_units,
)
from photo_proofing.services.galleries import GalleryRepository, ImageRepository

logger = logging.getLogger(__name__)


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def create_order(  # noqa: PLR0913
        self,
        gallery_id: UUID,
        client_email: str | None,
        client_name: str | None,
        total: Decimal,
        status: str,
        items: list[OrderItemSnapshot],
    ) -> OrderRecord:
        """Create an order with its items and return it."""

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        """Return an order by id, if present."""

    def list_order_items(self, order_id: UUID) -> list[OrderItemRecord]:
        """Return the items captured for an order."""

    def attach_payment_session(
        self, order_id: UUID, session_id: str, status: str
    ) -> None:
        """Store the payment session reference and move the order's status."""

    def update_status(self, order_id: UUID, status: str) -> None:
        """Set an order's status."""

    def list_orders(self, status: str | None, limit: int) -> list[OrderRecord]:
        """Return recent orders, optionally filtered by status."""

    def list_stale_orders(
        self, status: str, created_before: datetime
    ) -> list[OrderRecord]:
        """Return orders in a status created before the cutoff."""


class PaymentSessionClient(Protocol):
    """Interface for the hosted payment provider."""

    async def create_session(  # noqa: PLR0913
        self,
        *,
        line_items: list[PaymentLineItem],
        success_url: str,
        cancel_url: str,
        customer_email: str | None,
        metadata: dict[str, str],
    ) -> PaymentSession:
        """Create a hosted checkout session."""


@dataclass
class CheckoutService:
    """Turns a client's cart into an order and a payment session."""

    gallery_repository: GalleryRepository
    image_repository: ImageRepository
    order_repository: OrderRepository
    payment_client: PaymentSessionClient

    async def checkout(self, request: CheckoutRequest, base_url: str) -> CheckoutResult:
        """Create an order priced from the store and hand off to the provider."""
        if not request.items:
            raise InvalidRequestError("Your cart is empty")
        gallery = self._load_gallery(request.gallery_id)
        snapshots = self._price_items(gallery, request.items)
        total = order_total(snapshots)

        order = self.order_repository.create_order(
            gallery_id=gallery.id,
            client_email=request.client_email,
            client_name=request.client_name,
            total=total,
            status=STATUS_AWAITING_SESSION,
            items=snapshots,
        )
        log_extra = {"order_id": str(order.id), "gallery_id": str(gallery.id)}
        logger.info("Created order", extra={**log_extra, "total": str(total)})

        root = base_url.rstrip("/")
        try:
            session = await self.payment_client.create_session(
                line_items=[
                    _payment_line_item(snapshot, gallery) for snapshot in snapshots
                ],
                success_url=(
                    f"{root}/client/{gallery.access_code}/success"
                    "?session_id={CHECKOUT_SESSION_ID}"
                ),
                cancel_url=f"{root}/client/{gallery.access_code}",
                customer_email=request.client_email,
                metadata={"order_id": str(order.id), "gallery_id": str(gallery.id)},
            )
        except Exception as exc:
            logger.exception("Payment session creation failed", extra=log_extra)
            self._mark_failed(order.id)
            raise CheckoutError from exc

        try:
            self.order_repository.attach_payment_session(
                order.id, session.id, STATUS_PENDING
            )
        except Exception as exc:
            logger.exception(
                "Failed to attach payment session",
                extra={**log_extra, "payment_session_id": session.id},
            )
            raise CheckoutError from exc
        return CheckoutResult(order_id=order.id, url=session.url)

    def reconcile_stale_orders(self, older_than: timedelta) -> list[UUID]:
        """Mark orders that never received a payment session as failed."""
        cutoff = datetime.now(tz=UTC) - older_than
        stale = self.order_repository.list_stale_orders(
            STATUS_AWAITING_SESSION, created_before=cutoff
        )
        swept = []
        for order in stale:
            self.order_repository.update_status(order.id, STATUS_FAILED)
            swept.append(order.id)
        if swept:
            logger.warning("Swept stale orders", extra={"count": len(swept)})
        return swept

    def list_orders(
        self, status: str | None = None, limit: int = 50
    ) -> list[OrderRecord]:
        """Return recent orders for the admin view."""
        return self.order_repository.list_orders(status, limit)

    def get_order(
        self, order_id: UUID
    ) -> tuple[OrderRecord, list[OrderItemRecord]]:
        """Return an order and its items."""
        order = self.order_repository.get_order(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order, self.order_repository.list_order_items(order_id)

    def _load_gallery(self, gallery_id: UUID) -> GalleryRecord:
        gallery = self.gallery_repository.get_gallery(gallery_id)
        if gallery is None or not gallery.is_active:
            raise GalleryNotFoundError
        if gallery.is_expired(datetime.now(tz=UTC)):
            raise GalleryExpiredError
        return gallery

    def _price_items(
        self, gallery: GalleryRecord, items: list[LineItem]
    ) -> list[OrderItemSnapshot]:
        quantities: dict[UUID, int] = {}
        submitted: dict[UUID, Decimal | None] = {}
        for item in items:
            if item.quantity <= 0:
                raise InvalidRequestError("Quantity must be at least 1")
            quantities[item.image_id] = (
                quantities.get(item.image_id, 0) + item.quantity
            )
            submitted[item.image_id] = item.price

        images = {
            image.id: image
            for image in self.image_repository.get_images(gallery.id, list(quantities))
        }
        unknown = sorted(
            str(image_id) for image_id in quantities if image_id not in images
        )
        if unknown:
            raise InvalidRequestError(
                "Images do not belong to this gallery",
                details={"image_ids": unknown},
            )

        snapshots = []
        for image_id, quantity in quantities.items():
            image = images[image_id]
            claimed = submitted[image_id]
            if claimed is not None and claimed != image.price:
                logger.warning(
                    "Submitted price differs from stored price",
                    extra={
                        "image_id": str(image_id),
                        "submitted": str(claimed),
                        "stored": str(image.price),
                    },
                )
            snapshots.append(
                OrderItemSnapshot(
                    image_id=image_id,
                    name=image.filename or "Photo",
                    quantity=quantity,
                    price=image.price,
                )
            )
        return snapshots

    def _mark_failed(self, order_id: UUID) -> None:
        try:
            self.order_repository.update_status(order_id, STATUS_FAILED)
        except Exception:
            logger.exception(
                "Failed to mark order as failed", extra={"order_id": str(order_id)}
            )


def _payment_line_item(
    snapshot: OrderItemSnapshot, gallery: GalleryRecord
) -> PaymentLineItem:
    return PaymentLineItem(
        name=snapshot.name,
        description=f"High-resolution photo from {gallery.name}",
        unit_amount=to_minor_units(snapshot.price),
        quantity=snapshot.quantity,
    )

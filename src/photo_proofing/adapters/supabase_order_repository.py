"""Supabase repository for orders and order items."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from supabase import Client

from photo_proofing.domain.orders import OrderItemRecord, OrderItemSnapshot, OrderRecord
from photo_proofing.services.checkout import OrderRepository

_ORDER_COLUMNS = (
    "id, gallery_id, client_email, client_name, total, status, "
    "payment_session_id, created_at"
)


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for orders."""

    client: Client

    def create_order(  # noqa: PLR0913
        self,
        gallery_id: UUID,
        client_email: str | None,
        client_name: str | None,
        total: Decimal,
        status: str,
        items: list[OrderItemSnapshot],
    ) -> OrderRecord:
        """Create an order row followed by its item rows."""
        response = (
            self.client.table("orders")
            .insert(
                {
                    "gallery_id": str(gallery_id),
                    "client_email": client_email,
                    "client_name": client_name,
                    "total": str(total),
                    "status": status,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create order")
        order = _parse_order(response.data[0])
        payload = [
            {
                "order_id": str(order.id),
                "image_id": str(item.image_id),
                "price": str(item.price),
                "quantity": item.quantity,
            }
            for item in items
        ]
        if payload:
            self.client.table("order_items").insert(payload).execute()
        return order

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        """Return an order by id."""
        response = (
            self.client.table("orders")
            .select(_ORDER_COLUMNS)
            .eq("id", str(order_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_order(response.data[0])

    def list_order_items(self, order_id: UUID) -> list[OrderItemRecord]:
        """Return the items captured for an order."""
        response = (
            self.client.table("order_items")
            .select("id, order_id, image_id, price, quantity")
            .eq("order_id", str(order_id))
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def attach_payment_session(
        self, order_id: UUID, session_id: str, status: str
    ) -> None:
        """Store the payment session reference on the order."""
        self.client.table("orders").update(
            {"payment_session_id": session_id, "status": status}
        ).eq("id", str(order_id)).execute()

    def update_status(self, order_id: UUID, status: str) -> None:
        """Set an order's status."""
        self.client.table("orders").update({"status": status}).eq(
            "id", str(order_id)
        ).execute()

    def list_orders(self, status: str | None, limit: int) -> list[OrderRecord]:
        """Return recent orders, newest first."""
        query = self.client.table("orders").select(_ORDER_COLUMNS)
        if status:
            query = query.eq("status", status)
        response = query.order("created_at", desc=True).limit(limit).execute()
        return [_parse_order(row) for row in response.data or []]

    def list_stale_orders(
        self, status: str, created_before: datetime
    ) -> list[OrderRecord]:
        """Return orders in a status created before the cutoff."""
        response = (
            self.client.table("orders")
            .select(_ORDER_COLUMNS)
            .eq("status", status)
            .lt("created_at", created_before.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_order(row) for row in response.data or []]


def _parse_order(row: dict[str, object]) -> OrderRecord:
    return OrderRecord(
        id=UUID(str(row["id"])),
        gallery_id=UUID(str(row["gallery_id"])),
        client_email=row.get("client_email"),
        client_name=row.get("client_name"),
        total=Decimal(str(row.get("total") or 0)),
        status=str(row.get("status", "")),
        payment_session_id=row.get("payment_session_id"),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )


def _parse_item(row: dict[str, object]) -> OrderItemRecord:
    return OrderItemRecord(
        id=UUID(str(row["id"])),
        order_id=UUID(str(row["order_id"])),
        image_id=UUID(str(row["image_id"])),
        price=Decimal(str(row.get("price") or 0)),
        quantity=int(row.get("quantity") or 1),
    )

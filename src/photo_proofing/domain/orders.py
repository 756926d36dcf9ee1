"""Domain models for orders and checkout."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

STATUS_AWAITING_SESSION = "awaiting_session"
STATUS_PENDING = "pending"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class LineItem:
    """One (image, quantity, price) tuple submitted at checkout."""

    image_id: UUID
    quantity: int
    price: Decimal | None = None


@dataclass(frozen=True)
class CheckoutRequest:
    """A client's request to pay for selected images."""

    gallery_id: UUID
    items: list[LineItem]
    client_email: str | None = None
    client_name: str | None = None


@dataclass(frozen=True)
class OrderItemSnapshot:
    """Line item priced from the store at order time."""

    image_id: UUID
    name: str
    quantity: int
    price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class OrderItemRecord:
    """Order item row."""

    id: UUID
    order_id: UUID
    image_id: UUID
    price: Decimal
    quantity: int


@dataclass(frozen=True)
class OrderRecord:
    """Order row."""

    id: UUID
    gallery_id: UUID
    client_email: str | None
    client_name: str | None
    total: Decimal
    status: str
    payment_session_id: str | None
    created_at: datetime


@dataclass(frozen=True)
class PaymentLineItem:
    """A line item in the shape the payment provider expects."""

    name: str
    description: str
    unit_amount: int
    quantity: int


@dataclass(frozen=True)
class PaymentSession:
    """A hosted payment session returned by the provider."""

    id: str
    url: str


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of a successful checkout."""

    order_id: UUID
    url: str


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to integer cents, rounding half up."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def order_total(items: list[OrderItemSnapshot]) -> Decimal:
    """Sum price times quantity over order items."""
    return sum((item.subtotal for item in items), Decimal("0"))

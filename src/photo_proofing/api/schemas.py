"""Pydantic models for request payloads."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from photo_proofing.domain.galleries import GalleryDraft
from photo_proofing.domain.orders import CheckoutRequest, LineItem


class GalleryCreate(BaseModel):
    """Payload for creating a gallery."""

    name: str = Field(min_length=1)
    description: str | None = None
    client_email: EmailStr
    client_name: str = Field(min_length=1)
    expires_at: datetime | None = None

    def to_draft(self) -> GalleryDraft:
        return GalleryDraft(
            name=self.name,
            description=self.description,
            client_email=str(self.client_email),
            client_name=self.client_name,
            expires_at=self.expires_at,
        )


class GalleryUpdate(BaseModel):
    """Partial gallery update. Fields left out are not changed."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    client_email: EmailStr | None = None
    client_name: str | None = Field(default=None, min_length=1)
    is_active: bool | None = None
    expires_at: datetime | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields the client sent."""
        changes = self.model_dump(exclude_unset=True)
        if changes.get("client_email") is not None:
            changes["client_email"] = str(changes["client_email"])
        return changes


class PricingUpdate(BaseModel):
    """Full image-id to price mapping saved from the pricing console."""

    prices: dict[UUID, Decimal] = Field(min_length=1)


class CheckoutItem(BaseModel):
    """One cart entry submitted at checkout."""

    image_id: UUID
    quantity: int = Field(ge=1)
    price: Decimal | None = Field(default=None, ge=0)


class CheckoutPayload(BaseModel):
    """Checkout request body."""

    gallery_id: UUID
    items: list[CheckoutItem]
    client_email: EmailStr | None = None
    client_name: str | None = None

    def to_request(self) -> CheckoutRequest:
        return CheckoutRequest(
            gallery_id=self.gallery_id,
            items=[
                LineItem(
                    image_id=item.image_id, quantity=item.quantity, price=item.price
                )
                for item in self.items
            ],
            client_email=str(self.client_email) if self.client_email else None,
            client_name=self.client_name,
        )

"""Photographer-side price sheet for a gallery."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from uuid import UUID

from photo_proofing.domain.errors import InvalidRequestError
from photo_proofing.domain.galleries import ImageRecord


@dataclass(frozen=True)
class PriceSheet:
    """Unsaved prices keyed by image id."""

    prices: Mapping[UUID, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "prices", MappingProxyType(dict(self.prices)))

    @classmethod
    def from_images(cls, images: Iterable[ImageRecord]) -> "PriceSheet":
        """Start a sheet from the images' current prices."""
        return cls(prices={image.id: image.price for image in images})

    def set_bulk_price(self, price: Decimal) -> "PriceSheet":
        """Assign one price to every image on the sheet."""
        _ensure_non_negative(price)
        return PriceSheet(prices=dict.fromkeys(self.prices, price))

    def set_price(self, image_id: UUID, price: Decimal) -> "PriceSheet":
        """Assign a price to a single image."""
        _ensure_non_negative(price)
        updated = dict(self.prices)
        updated[image_id] = price
        return PriceSheet(prices=updated)

    def price_for(self, image_id: UUID) -> Decimal | None:
        return self.prices.get(image_id)

    def as_payload(self) -> dict[str, float]:
        """Return the full mapping in the shape the pricing endpoint accepts."""
        return {str(image_id): float(price) for image_id, price in self.prices.items()}


def _ensure_non_negative(price: Decimal) -> None:
    if price < 0:
        raise InvalidRequestError("Price must be non-negative")

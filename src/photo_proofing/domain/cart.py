"""Client-side selection cart.

The cart is an immutable value: every operation returns a new cart and leaves
the original untouched. Selected image ids are derived from the entry keys, so
a selection marker can never outlive its cart entry.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from uuid import UUID

from photo_proofing.domain.orders import LineItem


@dataclass(frozen=True)
class CartEntry:
    """One selected image and its requested quantity."""

    image_id: UUID
    unit_price: Decimal
    quantity: int = 1

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Cart:
    """Mapping from image id to cart entry, in selection order."""

    entries: tuple[CartEntry, ...] = field(default_factory=tuple)

    @property
    def selected_image_ids(self) -> frozenset[UUID]:
        """Ids of images currently selected."""
        return frozenset(entry.image_id for entry in self.entries)

    def get(self, image_id: UUID) -> CartEntry | None:
        """Return the entry for an image, if present."""
        for entry in self.entries:
            if entry.image_id == image_id:
                return entry
        return None

    def select(
        self, image_id: UUID, unit_price: Decimal, selected: bool = True
    ) -> "Cart":
        """Select an image, or deselect it when ``selected`` is false.

        Selecting an image that is already in the cart adds one more unit.
        """
        if not selected:
            return self.remove(image_id)
        existing = self.get(image_id)
        if existing is None:
            entry = CartEntry(image_id=image_id, unit_price=unit_price, quantity=1)
            return Cart(entries=(*self.entries, entry))
        return self._replace_entry(
            replace(existing, quantity=existing.quantity + 1)
        )

    def set_quantity(self, image_id: UUID, quantity: int) -> "Cart":
        """Overwrite an entry's quantity; zero or less removes it."""
        if quantity <= 0:
            return self.remove(image_id)
        existing = self.get(image_id)
        if existing is None:
            return self
        return self._replace_entry(replace(existing, quantity=quantity))

    def remove(self, image_id: UUID) -> "Cart":
        """Drop an entry regardless of quantity."""
        return Cart(
            entries=tuple(
                entry for entry in self.entries if entry.image_id != image_id
            )
        )

    def clear(self) -> "Cart":
        return Cart()

    def total(self) -> Decimal:
        """Sum of unit price times quantity over all entries."""
        return sum((entry.subtotal for entry in self.entries), Decimal("0"))

    def item_count(self) -> int:
        """Total number of units across entries."""
        return sum(entry.quantity for entry in self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def line_items(self) -> list[LineItem]:
        """Return the checkout payload for this cart."""
        return [
            LineItem(
                image_id=entry.image_id,
                quantity=entry.quantity,
                price=entry.unit_price,
            )
            for entry in self.entries
        ]

    def _replace_entry(self, updated: CartEntry) -> "Cart":
        return Cart(
            entries=tuple(
                updated if entry.image_id == updated.image_id else entry
                for entry in self.entries
            )
        )

"""Tests for the selection cart."""

from decimal import Decimal
from uuid import uuid4

from photo_proofing.domain.cart import Cart


def test_select_then_add_again_totals_quantities() -> None:
    first, second = uuid4(), uuid4()
    cart = Cart().select(first, Decimal("5")).select(second, Decimal("3"))
    cart = cart.select(first, Decimal("5"))

    assert cart.get(first).quantity == 2
    assert cart.total() == Decimal("13")
    assert cart.item_count() == 3


def test_selected_ids_always_match_entries() -> None:
    first, second = uuid4(), uuid4()
    cart = Cart().select(first, Decimal("5")).select(second, Decimal("3"))
    assert cart.selected_image_ids == {first, second}

    cart = cart.set_quantity(first, 0)

    assert cart.selected_image_ids == {second}
    assert cart.total() == Decimal("3")


def test_deselect_removes_entry() -> None:
    image_id = uuid4()
    cart = Cart().select(image_id, Decimal("5")).select(image_id, Decimal("5"))

    cart = cart.select(image_id, Decimal("5"), selected=False)

    assert cart.is_empty()
    assert image_id not in cart.selected_image_ids


def test_remove_twice_is_noop() -> None:
    keep, drop = uuid4(), uuid4()
    cart = Cart().select(keep, Decimal("2")).select(drop, Decimal("4"))

    once = cart.remove(drop)
    twice = once.remove(drop)

    assert once == twice
    assert twice.total() == Decimal("2")


def test_set_quantity_on_unknown_image_is_noop() -> None:
    cart = Cart().select(uuid4(), Decimal("1"))

    assert cart.set_quantity(uuid4(), 4) == cart


def test_operations_leave_original_unchanged() -> None:
    image_id = uuid4()
    original = Cart().select(image_id, Decimal("7.50"))

    original.set_quantity(image_id, 3)
    original.clear()

    assert original.get(image_id).quantity == 1
    assert original.total() == Decimal("7.50")


def test_line_items_carry_quantity_and_price() -> None:
    image_id = uuid4()
    cart = Cart().select(image_id, Decimal("4.25")).set_quantity(image_id, 3)

    [item] = cart.line_items()

    assert item.image_id == image_id
    assert item.quantity == 3
    assert item.price == Decimal("4.25")

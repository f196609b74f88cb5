"""Tests for the session-held shopping cart."""

import pytest
from ordering.cart.cart import Cart, CartItem
from protean.exceptions import ValidationError


def _add(cart, variant_id="var-1", price=100.0, name="Black Pepper", variant_name="1 Ton"):
    return cart.add_to_cart(
        product_id="prod-1",
        variant_id=variant_id,
        price=price,
        name=name,
        variant_name=variant_name,
        image="/uploads/1-pepper.jpg",
    )


class TestAddToCart:
    def test_new_variant_appends_with_quantity_one(self):
        cart = Cart()
        _add(cart)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 1

    def test_same_variant_increments(self):
        cart = Cart()
        for _ in range(3):
            _add(cart)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_distinct_variants_are_separate_lines(self):
        cart = Cart()
        _add(cart, "var-1")
        _add(cart, "var-2")
        assert [i.variant_id for i in cart.items] == ["var-1", "var-2"]

    def test_notification_names_the_variant(self):
        assert _add(Cart()) == "Black Pepper (1 Ton) has been added to your cart."

    def test_notification_without_variant_name(self):
        assert _add(Cart(), variant_name=None) == "Black Pepper has been added to your cart."


class TestTotals:
    def test_total_and_count(self):
        cart = Cart()
        _add(cart, "var-1", price=100.0)
        _add(cart, "var-1", price=100.0)
        _add(cart, "var-2", price=45.5)
        assert cart.total == 245.5
        assert cart.count == 3

    def test_empty_cart(self):
        cart = Cart()
        assert cart.total == 0
        assert cart.count == 0
        assert cart.is_empty


class TestUpdateQuantity:
    def test_sets_quantity(self):
        cart = Cart()
        _add(cart)
        assert cart.update_quantity("var-1", 5) == "Cart updated."
        assert cart.items[0].quantity == 5
        assert cart.total == 500.0

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_zero_or_less_removes(self, quantity):
        cart = Cart()
        _add(cart)
        cart.update_quantity("var-1", quantity)
        assert cart.is_empty

    def test_unknown_variant(self):
        with pytest.raises(ValidationError):
            Cart().update_quantity("var-9", 2)


class TestRemoveAndClear:
    def test_remove(self):
        cart = Cart()
        _add(cart, "var-1")
        _add(cart, "var-2")
        assert cart.remove_from_cart("var-1") == "The item has been removed from your cart."
        assert [i.variant_id for i in cart.items] == ["var-2"]

    def test_remove_missing_is_harmless(self):
        cart = Cart()
        _add(cart)
        cart.remove_from_cart("var-9")
        assert len(cart.items) == 1

    def test_clear(self):
        cart = Cart()
        _add(cart)
        assert cart.clear() == "Your cart is now empty."
        assert cart.is_empty


class TestSessionRoundTrip:
    @staticmethod
    def _describe(product_id, variant_id):
        return {"name": "Black Pepper", "variant_name": "1 Ton", "image": "/uploads/1-pepper.jpg"}

    def test_cart_survives_the_session(self):
        cart = Cart()
        _add(cart, "var-1")
        _add(cart, "var-1")
        restored = Cart.from_session(cart.to_session(), self._describe)
        assert restored.items == cart.items
        assert restored.total == 200.0

    def test_session_keeps_ids_quantity_and_price_only(self):
        cart = Cart()
        _add(cart, "var-1")
        assert cart.to_session() == [["prod-1", "var-1", 1, 100.0]]

    def test_lines_the_catalogue_no_longer_knows_are_dropped(self):
        rows = [["prod-1", "var-1", 2, 100.0], ["prod-1", "gone", 1, 50.0]]
        restored = Cart.from_session(rows, lambda p, v: None if v == "gone" else self._describe(p, v))
        assert [i.variant_id for i in restored.items] == ["var-1"]
        assert restored.total == 200.0

    def test_missing_session_is_empty(self):
        assert Cart.from_session(None, self._describe).is_empty

class TestCartItem:
    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            CartItem(product_id="p", variant_id="v", quantity=0, price=1.0, name="X")

    def test_price_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            CartItem(product_id="p", variant_id="v", quantity=1, price=-1.0, name="X")

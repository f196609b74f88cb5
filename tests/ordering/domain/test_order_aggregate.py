"""Tests for Order placement."""

from datetime import UTC, datetime, timedelta

import pytest
from ordering.order.events import OrderPlaced
from ordering.order.order import Order, OrderStatus, PaymentStatus
from protean.exceptions import ValidationError

ITEMS = [
    {
        "product_id": "prod-1",
        "variant_id": "var-1",
        "quantity": 2,
        "price": 950.0,
        "name": "Premium Cashew W240",
        "variant_name": "1 Ton",
        "image": "/uploads/1-cashew.jpg",
    },
    {
        "product_id": "prod-2",
        "variant_id": "var-2",
        "quantity": 1,
        "price": 120.0,
        "name": "Turmeric Finger",
        "variant_name": "500 Kg",
        "image": None,
    },
]

ADDRESS = {"name": "Asha Rao", "address": "12 Market Road", "city": "Kochi", "country": "India", "zip": "682001"}


def _place(**overrides):
    defaults = {"user_id": "acc-1", "items_data": ITEMS, "total": 2020.0, "shipping_address": ADDRESS}
    defaults.update(overrides)
    return Order.place(**defaults)


class TestOrderPlacement:
    def test_defaults(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PENDING.value

    def test_items_are_snapshotted_in_order(self):
        order = _place()
        assert order.items_snapshot() == ITEMS
        assert order.total == 2020.0

    def test_created_at_is_server_side_utc(self):
        before = datetime.now(UTC)
        order = _place()
        assert before - timedelta(seconds=1) <= order.created_at <= datetime.now(UTC)

    def test_shipping_address(self):
        order = _place()
        assert order.shipping_address.city == "Kochi"

    def test_shipping_address_fields_are_required(self):
        with pytest.raises(ValidationError):
            _place(shipping_address={**ADDRESS, "zip": ""})

    def test_empty_items_are_rejected(self):
        with pytest.raises(ValidationError):
            _place(items_data=[])

    def test_paid_checkout_order(self):
        order = _place(status="Processing", payment_status="Paid", payment_id="pay_123", payment_method="Razorpay")
        assert order.status == "Processing"
        assert order.payment_status == "Paid"
        assert order.payment_id == "pay_123"

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            _place(status="Lost")

    def test_place_raises_event(self):
        order = _place()
        [event] = order._events
        assert isinstance(event, OrderPlaced)
        assert event.item_count == 2
        assert event.total == 2020.0

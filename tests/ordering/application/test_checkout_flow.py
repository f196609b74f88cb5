"""Application tests for the checkout flow against the fake gateway."""

import asyncio

import pytest
from ordering.cart.cart import Cart
from ordering.checkout.flow import (
    CheckoutError,
    OrderNotSaved,
    PaymentNotVerified,
    complete_checkout,
    open_checkout,
)
from ordering.order.order import Order
from payments.gateway import set_gateway
from payments.gateway.fake_adapter import FakeGateway
from protean import current_domain

ADDRESS = {"name": "Asha Rao", "address": "12 Market Road", "city": "Kochi", "country": "India", "zip": "682001"}


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def cart():
    cart = Cart()
    cart.add_to_cart(product_id="prod-1", variant_id="var-1", price=950.0, name="Cashew", variant_name="1 Ton")
    cart.add_to_cart(product_id="prod-1", variant_id="var-1", price=950.0, name="Cashew", variant_name="1 Ton")
    return cart


def _complete(cart, attempt, signature="sig", address=ADDRESS):
    return asyncio.run(complete_checkout("acc-1", cart, attempt, address, "pay_123", signature))


def _open(cart):
    return asyncio.run(open_checkout("acc-1", cart))


class TestOpenCheckout:
    def test_opens_gateway_order_for_cart_total(self, gateway, cart):
        attempt = _open(cart)
        assert attempt.amount == 1900.0
        assert attempt.amount_minor == 190000
        assert attempt.currency == "INR"
        assert attempt.idempotency_key.startswith("chk_")
        assert gateway.calls[0]["receipt"] == attempt.idempotency_key

    def test_empty_cart(self, gateway):
        with pytest.raises(CheckoutError) as exc:
            _open(Cart())
        assert exc.value.status_code == 400


class TestCompleteCheckout:
    def test_verified_payment_places_paid_order(self, gateway, cart):
        attempt = _open(cart)
        order, created = _complete(cart, attempt)

        assert created
        assert order.status == "Processing"
        assert order.payment_status == "Paid"
        assert order.payment_id == "pay_123"
        assert order.total == 1900.0
        assert order.items_snapshot() == cart.snapshot()
        assert order.idempotency_key == attempt.idempotency_key

    def test_failed_verification_places_nothing(self, gateway, cart):
        attempt = _open(cart)
        gateway.configure(should_succeed=False, failure_reason="Card declined")

        with pytest.raises(PaymentNotVerified) as exc:
            _complete(cart, attempt)
        assert exc.value.status_code == 402
        assert exc.value.message == "Card declined"
        assert current_domain.repository_for(Order).list_all() == []

    def test_retry_returns_existing_order(self, gateway, cart):
        attempt = _open(cart)
        first, _ = _complete(cart, attempt)
        cart.clear()

        second, created = _complete(cart, attempt)
        assert not created
        assert str(second.id) == str(first.id)
        assert len(current_domain.repository_for(Order).list_all()) == 1

    def test_no_attempt(self, gateway, cart):
        with pytest.raises(CheckoutError):
            _complete(cart, None)

    def test_order_failure_after_payment_reports_payment_id(self, gateway, cart):
        attempt = _open(cart)
        with pytest.raises(OrderNotSaved) as exc:
            _complete(cart, attempt, address={**ADDRESS, "city": ""})
        assert exc.value.payment_id == "pay_123"
        assert exc.value.status_code == 500
        assert current_domain.repository_for(Order).list_all() == []

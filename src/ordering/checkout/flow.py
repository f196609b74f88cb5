"""Checkout flow - from a session cart to a paid, persisted Order.

Two steps, both driven by the buyer's browser:

1. ``open_checkout`` mints an idempotency key for the attempt and asks the
   payment gateway for a gateway order covering the cart total. Both are
   remembered in the session.
2. ``complete_checkout`` verifies the gateway's signed payment callback,
   then places the order keyed on the idempotency key. The cart is cleared
   only once the order is stored.

A completion retried with the same key returns the order that already
exists. When a verified payment cannot be turned into an order, the cart is
kept and the caller gets ``OrderNotSaved`` carrying the payment id for
manual follow-up.
"""

import json
from dataclasses import dataclass
from uuid import uuid4

from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import logger
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order, OrderStatus, PaymentStatus
from payments.gateway import get_gateway
from payments.gateway.port import GatewayOrder
from shared.settings import get_settings

PAYMENT_METHOD = "Razorpay"


class CheckoutError(Exception):
    """Checkout could not proceed; ``status_code`` is the HTTP status to report."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class PaymentNotVerified(CheckoutError):
    def __init__(self, message: str):
        super().__init__(message, status_code=402)


class OrderNotSaved(CheckoutError):
    """The payment went through but the order could not be stored."""

    def __init__(self, payment_id: str):
        self.payment_id = payment_id
        super().__init__(
            "Payment succeeded but the order could not be saved. "
            "Please contact support with your payment id.",
            status_code=500,
        )


@dataclass(frozen=True)
class CheckoutAttempt:
    idempotency_key: str
    gateway_order_id: str
    amount: float
    amount_minor: int
    currency: str

    def to_session(self) -> dict:
        return {
            "idempotency_key": self.idempotency_key,
            "gateway_order_id": self.gateway_order_id,
            "amount": self.amount,
            "amount_minor": self.amount_minor,
            "currency": self.currency,
        }

    @classmethod
    def from_session(cls, data: dict | None) -> "CheckoutAttempt | None":
        if not data:
            return None
        return cls(**data)


async def open_checkout(user_id: str, cart: Cart) -> CheckoutAttempt:
    if cart.is_empty:
        raise CheckoutError("Your cart is empty")

    currency = get_settings().currency
    idempotency_key = f"chk_{uuid4().hex}"
    gateway_order: GatewayOrder = await get_gateway().create_order(cart.total, currency, idempotency_key)
    if not gateway_order.success:
        logger.warning(
            "gateway_order_failed",
            user_id=user_id,
            amount=cart.total,
            reason=gateway_order.failure_reason,
        )
        raise CheckoutError(gateway_order.failure_reason or "Payment gateway unavailable", status_code=502)

    logger.info(
        "checkout_opened",
        user_id=user_id,
        idempotency_key=idempotency_key,
        gateway_order_id=gateway_order.gateway_order_id,
        amount=cart.total,
    )
    return CheckoutAttempt(
        idempotency_key=idempotency_key,
        gateway_order_id=gateway_order.gateway_order_id,
        amount=cart.total,
        amount_minor=gateway_order.amount_minor,
        currency=currency,
    )


async def complete_checkout(
    user_id: str,
    cart: Cart,
    attempt: CheckoutAttempt | None,
    shipping_address: dict,
    payment_id: str,
    signature: str,
) -> tuple[Order, bool]:
    """Verify the payment and place the order.

    Returns the order and whether it was created by this call. The caller
    clears the cart when an order comes back.
    """
    if attempt is None:
        raise CheckoutError("No checkout in progress")

    repo = current_domain.repository_for(Order)
    existing = repo.find_by_idempotency_key(attempt.idempotency_key)
    if existing is not None:
        return existing, False

    if cart.is_empty:
        raise CheckoutError("Your cart is empty")

    verification = await get_gateway().verify_payment(attempt.gateway_order_id, payment_id, signature)
    if not verification.verified:
        logger.warning(
            "payment_verification_failed",
            user_id=user_id,
            gateway_order_id=attempt.gateway_order_id,
            payment_id=payment_id,
            reason=verification.failure_reason,
        )
        raise PaymentNotVerified(verification.failure_reason or "Payment verification failed")

    if abs(cart.total - attempt.amount) > 0.005:
        logger.warning(
            "cart_changed_after_payment",
            user_id=user_id,
            paid_amount=attempt.amount,
            cart_total=cart.total,
            payment_id=payment_id,
        )

    command = PlaceOrder(
        user_id=user_id,
        items=json.dumps(cart.snapshot()),
        total=cart.total,
        shipping_address=json.dumps(shipping_address),
        payment_method=PAYMENT_METHOD,
        payment_status=PaymentStatus.PAID.value,
        payment_id=payment_id,
        status=OrderStatus.PROCESSING.value,
        idempotency_key=attempt.idempotency_key,
    )
    try:
        order_id = current_domain.process(command, asynchronous=False)
        order = repo.get(order_id)
    except Exception:
        logger.exception("order_not_saved_after_payment", user_id=user_id, payment_id=payment_id)
        raise OrderNotSaved(payment_id) from None

    logger.info("checkout_completed", order_id=str(order.id), user_id=user_id, payment_id=payment_id)
    return order, True

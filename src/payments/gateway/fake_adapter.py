"""Configurable fake payment gateway for development and testing.

Simulates the gateway without any external calls and can be configured at
runtime to succeed or fail. Every call is recorded in ``calls`` so tests can
assert on what checkout asked for.
"""

from uuid import uuid4

from payments.gateway.port import GatewayOrder, PaymentGateway, PaymentVerification, to_minor_units


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    async def create_order(self, amount: float, currency: str, receipt: str) -> GatewayOrder:
        self.calls.append(
            {
                "method": "create_order",
                "amount": amount,
                "currency": currency,
                "receipt": receipt,
            }
        )
        return GatewayOrder(
            success=True,
            gateway_order_id=f"fake_order_{uuid4().hex[:12]}",
            amount_minor=to_minor_units(amount),
            currency=currency,
            receipt=receipt,
        )

    async def verify_payment(self, gateway_order_id: str, payment_id: str, signature: str) -> PaymentVerification:
        self.calls.append(
            {
                "method": "verify_payment",
                "gateway_order_id": gateway_order_id,
                "payment_id": payment_id,
                "signature": signature,
            }
        )
        if self.should_succeed and signature:
            return PaymentVerification(verified=True, payment_id=payment_id)
        return PaymentVerification(verified=False, payment_id=payment_id, failure_reason=self.failure_reason)

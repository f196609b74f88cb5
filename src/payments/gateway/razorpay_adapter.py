"""Razorpay payment gateway adapter.

Orders are created through the REST API (basic auth with the key id and
secret). Checkout callbacks are verified locally: Razorpay signs
``"<order_id>|<payment_id>"`` with HMAC-SHA256 using the key secret.
"""

import hashlib
import hmac

import httpx

from payments.gateway.port import GatewayOrder, PaymentGateway, PaymentVerification, to_minor_units
from shared.logging import get_logger

logger = get_logger(__name__)


class RazorpayGateway(PaymentGateway):
    """Production Razorpay adapter."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        api_url: str = "https://api.razorpay.com/v1",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def create_order(self, amount: float, currency: str, receipt: str) -> GatewayOrder:
        payload = {
            "amount": to_minor_units(amount),
            "currency": currency,
            "receipt": receipt[:40],
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.api_url}/orders",
                    json=payload,
                    auth=(self.key_id, self.key_secret),
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("razorpay_order_failed", receipt=receipt, error=str(exc))
            return GatewayOrder(success=False, receipt=receipt, failure_reason="Payment gateway unavailable")

        body = response.json()
        return GatewayOrder(
            success=True,
            gateway_order_id=body["id"],
            amount_minor=body.get("amount", payload["amount"]),
            currency=body.get("currency", currency),
            receipt=receipt,
        )

    def expected_signature(self, gateway_order_id: str, payment_id: str) -> str:
        message = f"{gateway_order_id}|{payment_id}".encode()
        return hmac.new(self.key_secret.encode(), message, hashlib.sha256).hexdigest()

    async def verify_payment(self, gateway_order_id: str, payment_id: str, signature: str) -> PaymentVerification:
        expected = self.expected_signature(gateway_order_id, payment_id)
        if signature and hmac.compare_digest(expected, signature):
            return PaymentVerification(verified=True, payment_id=payment_id)
        return PaymentVerification(verified=False, payment_id=payment_id, failure_reason="Invalid payment signature")

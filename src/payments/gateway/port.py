"""Payment gateway port (abstract interface).

Checkout talks to the gateway in two steps: it opens a gateway order for the
cart total, and after the buyer pays in the gateway's widget it verifies the
signed callback. Adapters: FakeGateway (dev/test) and RazorpayGateway.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GatewayOrder:
    """Result of opening a payment order with the gateway."""

    success: bool
    gateway_order_id: str | None = None
    amount_minor: int | None = None
    currency: str | None = None
    receipt: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class PaymentVerification:
    """Result of verifying the gateway's payment callback."""

    verified: bool
    payment_id: str | None = None
    failure_reason: str | None = None


def to_minor_units(amount: float) -> int:
    """Gateways take amounts in the smallest currency unit (paise, cents)."""
    return int(round(amount * 100))


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    async def create_order(self, amount: float, currency: str, receipt: str) -> GatewayOrder:
        """Open a gateway order for ``amount`` (major units)."""
        ...

    @abstractmethod
    async def verify_payment(self, gateway_order_id: str, payment_id: str, signature: str) -> PaymentVerification:
        """Check that the payment callback is authentically from the gateway."""
        ...

"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) - separate from
internal Protean commands. Field names are camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
AddressLine = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ShippingAddressSchema(CamelModel):
    name: AddressLine
    address: AddressLine
    city: AddressLine
    country: AddressLine
    zip: AddressLine


class LineItemSchema(CamelModel):
    product_id: str
    variant_id: str
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    name: str
    variant_name: str | None = None
    image: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddCartItemRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"productId": "0b7c...", "variantId": "9a41..."}]},
    )

    product_id: str
    variant_id: str | None = None


class UpdateCartItemRequest(CamelModel):
    quantity: int


class CartResponse(CamelModel):
    items: list[LineItemSchema] = Field(default_factory=list)
    total: float = 0.0
    count: int = 0
    message: str | None = None

    @classmethod
    def from_cart(cls, cart, message: str | None = None) -> CartResponse:
        return cls(
            items=[LineItemSchema(**item) for item in cart.snapshot()],
            total=cart.total,
            count=cart.count,
            message=message,
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CreateOrderRequest(CamelModel):
    """Presence of userId, items and total is checked by the route so it can answer
    with a single "Missing required fields" message."""

    user_id: str | None = None
    items: list[LineItemSchema] | None = None
    total: float | None = Field(None, ge=0)
    shipping_address: ShippingAddressSchema | None = None
    payment_method: str | None = None
    payment_status: str | None = None
    payment_id: str | None = None
    status: str | None = None
    idempotency_key: str | None = None


class UpdateOrderStatusRequest(CamelModel):
    status: str | None = None


class OrderResponse(CamelModel):
    id: str
    user_id: str
    items: list[LineItemSchema]
    total: float
    status: str
    allowed_transitions: list[str]
    shipping_address: ShippingAddressSchema | None = None
    payment_method: str | None = None
    payment_status: str | None = None
    payment_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_aggregate(cls, order) -> OrderResponse:
        address = order.shipping_address
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            items=[LineItemSchema(**item) for item in order.items_snapshot()],
            total=order.total,
            status=order.status,
            allowed_transitions=order.allowed_transitions(),
            shipping_address=(
                ShippingAddressSchema(
                    name=address.name,
                    address=address.address,
                    city=address.city,
                    country=address.country,
                    zip=address.zip,
                )
                if address
                else None
            ),
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            payment_id=order.payment_id,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutSessionResponse(CamelModel):
    gateway_order_id: str
    amount: float
    amount_minor: int
    currency: str
    key_id: str | None = None


class CompleteCheckoutRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shippingAddress": {
                        "name": "Asha Rao",
                        "address": "12 Market Road",
                        "city": "Kochi",
                        "country": "India",
                        "zip": "682001",
                    },
                    "paymentId": "pay_29QQoUBi66xm2f",
                    "signature": "9ef4dffbfd84f1318f6739a3ce19f9d85851857ae648f114332d8401e0949a3d",
                }
            ]
        },
    )

    shipping_address: ShippingAddressSchema
    payment_id: str = Field(..., min_length=1)
    signature: str = Field(..., min_length=1)


class CheckoutResultResponse(CamelModel):
    message: str
    order: OrderResponse

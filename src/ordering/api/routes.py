"""FastAPI routes for the Ordering domain - cart, checkout and orders."""

import json

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from protean.utils.globals import current_domain

from identity.auth.dependencies import current_user, require_admin
from identity.auth.tokens import SessionUser
from ordering.api.schemas import (
    AddCartItemRequest,
    CartResponse,
    CheckoutResultResponse,
    CheckoutSessionResponse,
    CompleteCheckoutRequest,
    CreateOrderRequest,
    OrderResponse,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from ordering.cart.catalogue_lookup import resolve_cart_line
from ordering.cart.session import clear_checkout, load_cart, load_checkout, save_cart, save_checkout
from ordering.checkout.flow import (
    CheckoutAttempt,
    CheckoutError,
    OrderNotSaved,
    complete_checkout,
    open_checkout,
)
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import UpdateOrderStatus
from shared.errors import error_response
from shared.settings import get_settings


def _ensure_owner_or_admin(user: SessionUser, owner_id: str) -> None:
    if not user.is_admin and str(owner_id) != user.id:
        raise HTTPException(status_code=403, detail="You do not have access to this order")


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(request: Request) -> CartResponse:
    return CartResponse.from_cart(load_cart(request))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(request: Request, body: AddCartItemRequest) -> CartResponse:
    line = resolve_cart_line(body.product_id, body.variant_id)
    cart = load_cart(request)
    message = cart.add_to_cart(**line)
    save_cart(request, cart)
    return CartResponse.from_cart(cart, message)


@cart_router.put("/items/{variant_id}", response_model=CartResponse)
async def update_cart_item(request: Request, variant_id: str, body: UpdateCartItemRequest) -> CartResponse:
    cart = load_cart(request)
    message = cart.update_quantity(variant_id, body.quantity)
    save_cart(request, cart)
    return CartResponse.from_cart(cart, message)


@cart_router.delete("/items/{variant_id}", response_model=CartResponse)
async def remove_cart_item(request: Request, variant_id: str) -> CartResponse:
    cart = load_cart(request)
    message = cart.remove_from_cart(variant_id)
    save_cart(request, cart)
    return CartResponse.from_cart(cart, message)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(request: Request) -> CartResponse:
    cart = load_cart(request)
    message = cart.clear()
    save_cart(request, cart)
    return CartResponse.from_cart(cart, message)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("/session", response_model=CheckoutSessionResponse)
async def start_checkout(request: Request, user: SessionUser = Depends(current_user)):
    try:
        attempt = await open_checkout(user.id, load_cart(request))
    except CheckoutError as exc:
        return error_response(exc.status_code, exc.message)

    save_checkout(request, attempt.to_session())
    return CheckoutSessionResponse(
        gateway_order_id=attempt.gateway_order_id,
        amount=attempt.amount,
        amount_minor=attempt.amount_minor,
        currency=attempt.currency,
        key_id=get_settings().razorpay_key_id or None,
    )


@checkout_router.post("/complete", status_code=201, response_model=CheckoutResultResponse)
async def finish_checkout(
    request: Request,
    response: Response,
    body: CompleteCheckoutRequest,
    user: SessionUser = Depends(current_user),
):
    cart = load_cart(request)
    try:
        order, created = await complete_checkout(
            user_id=user.id,
            cart=cart,
            attempt=CheckoutAttempt.from_session(load_checkout(request)),
            shipping_address=body.shipping_address.model_dump(),
            payment_id=body.payment_id,
            signature=body.signature,
        )
    except OrderNotSaved as exc:
        return error_response(exc.status_code, exc.message, paymentId=exc.payment_id)
    except CheckoutError as exc:
        return error_response(exc.status_code, exc.message)

    # Cleared on retries as well; the first response may never have arrived.
    cart.clear()
    save_cart(request, cart)
    clear_checkout(request)

    if not created:
        response.status_code = 200
        return CheckoutResultResponse(message="Order already placed", order=OrderResponse.from_aggregate(order))
    return CheckoutResultResponse(message="Order placed successfully", order=OrderResponse.from_aggregate(order))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, user: SessionUser = Depends(current_user)) -> OrderResponse:
    if not body.user_id or not body.items or body.total is None:
        raise HTTPException(status_code=400, detail="Missing required fields")
    _ensure_owner_or_admin(user, body.user_id)

    command = PlaceOrder(
        user_id=body.user_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        total=body.total,
        shipping_address=json.dumps(body.shipping_address.model_dump()) if body.shipping_address else None,
        payment_method=body.payment_method,
        payment_status=body.payment_status,
        payment_id=body.payment_id,
        status=body.status,
        idempotency_key=body.idempotency_key,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_aggregate(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=list[OrderResponse], dependencies=[Depends(require_admin)])
async def list_orders() -> list[OrderResponse]:
    return [OrderResponse.from_aggregate(o) for o in current_domain.repository_for(Order).list_all()]


@order_router.get("/user/{user_id}", response_model=list[OrderResponse])
async def list_user_orders(user_id: str, user: SessionUser = Depends(current_user)) -> list[OrderResponse]:
    _ensure_owner_or_admin(user, user_id)
    orders = current_domain.repository_for(Order).find_by_user(user_id)
    return [OrderResponse.from_aggregate(o) for o in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: SessionUser = Depends(current_user)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    _ensure_owner_or_admin(user, order.user_id)
    return OrderResponse.from_aggregate(order)


@order_router.put("/{order_id}", response_model=OrderResponse, dependencies=[Depends(require_admin)])
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    if not body.status:
        raise HTTPException(status_code=400, detail="Status is required")

    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_aggregate(current_domain.repository_for(Order).get(order_id))

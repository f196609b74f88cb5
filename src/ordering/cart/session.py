"""Carts and checkout attempts live in the buyer's signed session cookie.

Browsers drop cookies larger than 4096 bytes without telling the server, so
``save_cart`` refuses a cart whose session would no longer fit.
"""

import json
from base64 import b64encode

from fastapi import Request
from protean.exceptions import ValidationError

from ordering.cart.cart import Cart
from ordering.cart.catalogue_lookup import describe_cart_line
from shared.settings import get_settings

CART_KEY = "cart"
CHECKOUT_KEY = "checkout"

MAX_COOKIE_BYTES = 4096
# Signature, timestamp and cookie attributes added by SessionMiddleware
COOKIE_OVERHEAD_BYTES = 160
# Room kept free for a checkout attempt opened after the cart is filled
CHECKOUT_RESERVE_BYTES = 400


def session_cookie_size(session: dict) -> int:
    """Approximate Set-Cookie size for ``session``, encoded the way SessionMiddleware does."""
    payload = b64encode(json.dumps(session).encode("utf-8"))
    return len(get_settings().session_cookie_name) + 1 + len(payload) + COOKIE_OVERHEAD_BYTES


def load_cart(request: Request) -> Cart:
    return Cart.from_session(request.session.get(CART_KEY), describe_cart_line)


def save_cart(request: Request, cart: Cart) -> None:
    rows = cart.to_session()
    size = session_cookie_size({**request.session, CART_KEY: rows})
    if CHECKOUT_KEY not in request.session:
        size += CHECKOUT_RESERVE_BYTES
    if size > MAX_COOKIE_BYTES:
        raise ValidationError({"cart": ["Your cart is full. Check out or remove items before adding more."]})
    request.session[CART_KEY] = rows


def load_checkout(request: Request) -> dict | None:
    return request.session.get(CHECKOUT_KEY)


def save_checkout(request: Request, checkout: dict) -> None:
    request.session[CHECKOUT_KEY] = checkout


def clear_checkout(request: Request) -> None:
    request.session.pop(CHECKOUT_KEY, None)

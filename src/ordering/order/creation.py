"""Order placement - command and handler.

Placing an order is an upsert keyed on the checkout's idempotency key: a
retried submission for the same checkout returns the order that already
exists instead of creating a duplicate.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of cart item dicts
    total = Float(required=True, min_value=0.0)
    shipping_address = Text()  # JSON: address dict
    payment_method = String(max_length=50)
    payment_status = String(max_length=20)
    payment_id = String(max_length=255)
    status = String(max_length=20)
    idempotency_key = String(max_length=100)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        repo = current_domain.repository_for(Order)

        existing = repo.find_by_idempotency_key(command.idempotency_key)
        if existing is not None:
            logger.info(
                "order_already_placed",
                order_id=str(existing.id),
                idempotency_key=command.idempotency_key,
            )
            return str(existing.id)

        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        shipping_address = None
        if command.shipping_address:
            shipping_address = (
                json.loads(command.shipping_address)
                if isinstance(command.shipping_address, str)
                else command.shipping_address
            )

        computed_total = sum(item["price"] * item["quantity"] for item in items_data)
        if abs(computed_total - command.total) > 0.005:
            logger.warning(
                "order_total_mismatch",
                user_id=str(command.user_id),
                submitted_total=command.total,
                computed_total=computed_total,
            )

        order = Order.place(
            user_id=command.user_id,
            items_data=items_data,
            total=command.total,
            shipping_address=shipping_address,
            payment_method=command.payment_method,
            payment_status=command.payment_status,
            payment_id=command.payment_id,
            status=command.status,
            idempotency_key=command.idempotency_key,
        )
        repo.add(order)
        logger.info("order_placed", order_id=str(order.id), user_id=str(command.user_id), total=command.total)
        return str(order.id)

"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """An order was created from a cart snapshot."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)
    status = String(required=True)
    payment_status = String(required=True)
    payment_id = String()
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved the order along its lifecycle."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)

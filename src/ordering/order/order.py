"""Order aggregate - a persisted snapshot of a cart plus shipping and payment details.

State Machine:
    Pending → Processing → Shipped → Delivered
    Cancelled (from Pending, Processing, Shipped)

Delivered and Cancelled are terminal. Every status change goes through
``change_status``, which rejects edges outside the table with
``InvalidStatusTransition``.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from ordering.domain import ordering


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

_STATUS_ORDER = [
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
]


def allowed_transitions_from(status):
    """Statuses an order in ``status`` may move to, in lifecycle order."""
    allowed = _VALID_TRANSITIONS[OrderStatus(status)]
    return [s.value for s in _STATUS_ORDER if s in allowed]


def is_terminal(status):
    return not _VALID_TRANSITIONS[OrderStatus(status)]


class InvalidStatusTransition(ValidationError):
    """Raised when an order is asked to move along an edge the state machine does not allow."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__({"status": [f"Cannot transition from {current} to {target}"]})


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, captured at checkout. Every field is a non-empty string."""

    name = String(required=True, max_length=100)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    country = String(required=True, max_length=100)
    zip = String(required=True, max_length=20)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line copied by value from the cart. Later catalogue price changes never touch it."""

    product_id = String(required=True, max_length=50)
    variant_id = String(required=True, max_length=50)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    name = String(required=True, max_length=255)
    variant_name = String(max_length=100)
    image = String(max_length=500)
    position = Integer(default=0)

    def snapshot(self):
        return {
            "product_id": self.product_id,
            "variant_id": self.variant_id,
            "quantity": self.quantity,
            "price": self.price,
            "name": self.name,
            "variant_name": self.variant_name,
            "image": self.image,
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(max_length=50)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_id = String(max_length=255)
    idempotency_key = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        items_data,
        total,
        shipping_address=None,
        payment_method=None,
        payment_status=None,
        payment_id=None,
        status=None,
        idempotency_key=None,
    ):
        """Create an order from a cart snapshot.

        Args:
            user_id: The account placing the order.
            items_data: List of dicts with product_id, variant_id, quantity,
                        price, name, variant_name, image.
            total: The cart total at checkout time.
            shipping_address: Dict with name, address, city, country, zip.
        """
        from ordering.order.events import OrderPlaced

        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=str(user_id),
            items=[OrderItem(**item, position=position) for position, item in enumerate(items_data)],
            total=total,
            status=status or OrderStatus.PENDING.value,
            shipping_address=ShippingAddress(**shipping_address) if shipping_address else None,
            payment_method=payment_method,
            payment_status=payment_status or PaymentStatus.PENDING.value,
            payment_id=payment_id,
            idempotency_key=idempotency_key,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                total=total,
                item_count=len(items_data),
                status=order.status,
                payment_status=order.payment_status,
                payment_id=payment_id,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def ordered_items(self):
        return sorted(self.items, key=lambda item: item.position)

    def items_snapshot(self):
        return [item.snapshot() for item in self.ordered_items]

    def allowed_transitions(self):
        return allowed_transitions_from(self.status)

    @property
    def is_terminal(self):
        return is_terminal(self.status)

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidStatusTransition(current.value, target_status.value)

    def change_status(self, new_status):
        """Move the order to ``new_status``. Re-applying the current status is a no-op."""
        from ordering.order.events import OrderStatusChanged

        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        if target.value == self.status:
            return False

        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )
        return True

"""Shopping Cart - a session-held collection of purchase intents.

The cart is not an aggregate: it has no identity and is never stored by the
server. It is rebuilt from the buyer's session on every request, mutated,
and written back. The session keeps ids, quantities and add-time prices
only; names and images are looked up again when the cart is rebuilt.

``variant_id`` is the uniqueness key; adding a variant that is already
present bumps its quantity instead of duplicating the line.

Every mutation returns a short notification for the presentation layer.
"""

from protean.exceptions import ValidationError
from protean.fields import Float, Integer, String

from ordering.domain import logger, ordering


@ordering.value_object
class CartItem:
    """One line of the cart, priced at the moment it was added."""

    product_id = String(required=True, max_length=50)
    variant_id = String(required=True, max_length=50)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    name = String(required=True, max_length=255)
    variant_name = String(max_length=100)
    image = String(max_length=500)

    @property
    def line_total(self):
        return self.price * self.quantity

    def with_quantity(self, quantity):
        return CartItem(**{**self.to_dict(), "quantity": quantity})


class Cart:
    def __init__(self, items=None):
        self._items = list(items or [])

    # -------------------------------------------------------------------
    # Session round-trip
    # -------------------------------------------------------------------
    @classmethod
    def from_session(cls, rows, describe):
        """Rebuild a cart from compact session rows.

        ``describe(product_id, variant_id)`` supplies the name, variant name
        and image of a line. Lines it returns ``None`` for are dropped.
        """
        items = []
        for product_id, variant_id, quantity, price in rows or []:
            labels = describe(product_id, variant_id)
            if labels is None:
                logger.info("cart_line_dropped", product_id=product_id, variant_id=variant_id)
                continue
            items.append(
                CartItem(
                    product_id=product_id,
                    variant_id=variant_id,
                    quantity=quantity,
                    price=price,
                    **labels,
                )
            )
        return cls(items)

    def to_session(self):
        """Only ids, quantity and the add-time price go into the cookie."""
        return [[item.product_id, item.variant_id, item.quantity, item.price] for item in self._items]

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def items(self):
        return tuple(self._items)

    @property
    def total(self):
        """Sum of price x quantity, recomputed on every read."""
        return sum(item.line_total for item in self._items)

    @property
    def count(self):
        return sum(item.quantity for item in self._items)

    @property
    def is_empty(self):
        return not self._items

    def find(self, variant_id):
        return next((item for item in self._items if item.variant_id == str(variant_id)), None)

    def snapshot(self):
        """Copy of the lines, for embedding into an Order."""
        return [item.to_dict() for item in self._items]

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_to_cart(self, product_id, variant_id, price, name, variant_name=None, image=None):
        """Add one unit of a variant; an existing line for the same variant is incremented."""
        variant_id = str(variant_id)
        existing = self.find(variant_id)

        if existing:
            self._replace(existing, existing.with_quantity(existing.quantity + 1))
        else:
            self._items.append(
                CartItem(
                    product_id=str(product_id),
                    variant_id=variant_id,
                    quantity=1,
                    price=price,
                    name=name,
                    variant_name=variant_name,
                    image=image,
                )
            )

        label = f"{name} ({variant_name})" if variant_name else name
        return f"{label} has been added to your cart."

    def update_quantity(self, variant_id, quantity):
        """Set a line's quantity. Zero or less removes the line."""
        if quantity <= 0:
            return self.remove_from_cart(variant_id)

        existing = self.find(variant_id)
        if existing is None:
            raise ValidationError({"variant_id": ["Item not found in cart"]})

        self._replace(existing, existing.with_quantity(quantity))
        return "Cart updated."

    def remove_from_cart(self, variant_id):
        self._items = [item for item in self._items if item.variant_id != str(variant_id)]
        return "The item has been removed from your cart."

    def clear(self):
        self._items = []
        return "Your cart is now empty."

    def _replace(self, old, new):
        self._items = [new if item is old else item for item in self._items]

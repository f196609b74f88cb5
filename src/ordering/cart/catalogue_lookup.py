"""Resolve what a cart line should say about a product, straight from the catalogue.

The buyer only sends a product id and a variant id; name, variant name,
image and the add-time price are read from the catalogue so a client cannot
choose its own price. The session keeps only ids, quantity and price, so the
labels are looked up again whenever the cart is rebuilt.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.pricing import option_for
from catalogue.product.product import Product


def resolve_cart_line(product_id: str, variant_id: str | None = None) -> dict:
    with catalogue.domain_context():
        product = current_domain.repository_for(Product).get(product_id)
        if not product.is_active:
            raise ValidationError({"product_id": ["This product is not available"]})

        option = option_for(product, variant_id)
        return {
            "product_id": str(product.id),
            "variant_id": option.variant_id,
            "price": option.price,
            "name": product.name,
            "variant_name": option.name,
            "image": product.primary_image,
        }


def describe_cart_line(product_id: str, variant_id: str) -> dict | None:
    """Labels for a stored cart line, or ``None`` once the product or variant is gone."""
    with catalogue.domain_context():
        try:
            product = current_domain.repository_for(Product).get(product_id)
            option = option_for(product, variant_id)
        except (ObjectNotFoundError, ValidationError):
            return None

        return {
            "name": product.name,
            "variant_name": option.name,
            "image": product.primary_image,
        }

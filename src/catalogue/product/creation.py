"""Product creation - command and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.product.product import Product


def ensure_category_exists(category_id):
    """Reject references to categories that are not in the catalogue. Returns the category."""
    try:
        return current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise ValidationError({"category": [f"Category {category_id} does not exist"]}) from None


def load_image_urls(value):
    if value is None:
        return None
    return json.loads(value) if isinstance(value, str) else list(value)


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text()
    category_id: Identifier(required=True)
    hs_code: String(max_length=20)
    min_order_qty: String(max_length=50)
    selling_price: Float()
    discounted_price: Float()
    images: Text(required=True)  # JSON: list of image URLs
    featured: Boolean(default=False)
    status: String(max_length=20)


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        ensure_category_exists(command.category_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            category_id=command.category_id,
            hs_code=command.hs_code,
            min_order_qty=command.min_order_qty,
            selling_price=command.selling_price,
            discounted_price=command.discounted_price,
            images=load_image_urls(command.images),
            featured=command.featured,
            status=command.status,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

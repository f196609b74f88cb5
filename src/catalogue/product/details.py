"""Product details management - command and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.creation import ensure_category_exists, load_image_urls
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProduct:
    """Partial update. Fields left empty keep their current value.

    ``images`` replaces the whole gallery when supplied.
    """

    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    category_id: Identifier()
    hs_code: String(max_length=20)
    min_order_qty: String(max_length=50)
    selling_price: Float()
    discounted_price: Float()
    images: Text()  # JSON: list of image URLs
    featured: Boolean()
    status: String(max_length=20)


@catalogue.command_handler(part_of=Product)
class ManageProductDetailsHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id and command.category_id != product.category_id:
            ensure_category_exists(command.category_id)

        product.update_details(
            name=command.name,
            description=command.description,
            category_id=command.category_id,
            hs_code=command.hs_code,
            min_order_qty=command.min_order_qty,
            selling_price=command.selling_price,
            discounted_price=command.discounted_price,
            featured=command.featured,
            status=command.status,
        )

        urls = load_image_urls(command.images)
        if urls is not None:
            product.replace_images(urls)

        repo.add(product)
        return str(product.id)

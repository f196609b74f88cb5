"""Product removal - command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class DeleteProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        # Orders hold their own snapshot of the product, so nothing cascades.
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(command.product_id), name=product.name)

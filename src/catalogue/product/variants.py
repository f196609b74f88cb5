"""Variant management - commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddVariant:
    product_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)


@catalogue.command(part_of="Product")
class UpdateVariantPrice:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    price: Float(required=True, min_value=0.0)


@catalogue.command(part_of="Product")
class RemoveVariant:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        variant = product.add_variant(name=command.name, price=command.price)
        repo.add(product)
        return str(variant.id)

    @handle(UpdateVariantPrice)
    def update_variant_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_variant_price(command.variant_id, command.price)
        repo.add(product)

    @handle(RemoveVariant)
    def remove_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.remove_variant(command.variant_id)
        repo.add(product)

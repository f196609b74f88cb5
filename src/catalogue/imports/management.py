"""Import ledger - commands and handler.

The category name is copied onto the record when it is written and is not
refreshed when the category is later renamed or removed.
"""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.imports.import_product import ImportProduct
from catalogue.product.creation import ensure_category_exists, load_image_urls


def _category_name(category_id):
    return ensure_category_exists(category_id).name


@catalogue.command(part_of="ImportProduct")
class RecordImport:
    category_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    total_quantity: Float(default=0.0)
    purchase_price: Float(default=0.0)
    shipping_cost: Float(default=0.0)
    tax_amount: Float(default=0.0)
    images: Text()  # JSON: list of image URLs


@catalogue.command(part_of="ImportProduct")
class ReviseImport:
    import_id: Identifier(required=True)
    category_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    total_quantity: Float(default=0.0)
    purchase_price: Float(default=0.0)
    shipping_cost: Float(default=0.0)
    tax_amount: Float(default=0.0)
    images: Text()  # JSON: list of image URLs


@catalogue.command(part_of="ImportProduct")
class DeleteImport:
    import_id: Identifier(required=True)


@catalogue.command_handler(part_of=ImportProduct)
class ImportLedgerHandler:
    @handle(RecordImport)
    def record_import(self, command):
        record = ImportProduct.record(
            category_id=command.category_id,
            category_name=_category_name(command.category_id),
            product_name=command.product_name,
            total_quantity=command.total_quantity,
            purchase_price=command.purchase_price,
            shipping_cost=command.shipping_cost,
            tax_amount=command.tax_amount,
            images=load_image_urls(command.images),
        )
        current_domain.repository_for(ImportProduct).add(record)
        logger.info("import_recorded", import_id=str(record.id), product_name=record.product_name)
        return str(record.id)

    @handle(ReviseImport)
    def revise_import(self, command):
        repo = current_domain.repository_for(ImportProduct)
        record = repo.get(command.import_id)
        record.revise(
            category_id=command.category_id,
            category_name=_category_name(command.category_id),
            product_name=command.product_name,
            total_quantity=command.total_quantity,
            purchase_price=command.purchase_price,
            shipping_cost=command.shipping_cost,
            tax_amount=command.tax_amount,
            images=load_image_urls(command.images),
        )
        repo.add(record)
        return str(record.id)

    @handle(DeleteImport)
    def delete_import(self, command):
        repo = current_domain.repository_for(ImportProduct)
        record = repo.get(command.import_id)
        repo._dao.delete(record)
        logger.info("import_deleted", import_id=str(command.import_id))

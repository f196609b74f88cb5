"""Domain events for the ImportProduct ledger."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="ImportProduct")
class ImportRecorded:
    __version__ = 1

    import_id: Identifier(required=True)
    category_id: Identifier(required=True)
    product_name: String(required=True)
    total_quantity: Float()
    created_at: DateTime(required=True)


@catalogue.event(part_of="ImportProduct")
class ImportRevised:
    __version__ = 1

    import_id: Identifier(required=True)
    category_id: Identifier(required=True)
    product_name: String(required=True)
    total_quantity: Float()
    image_count: Integer()

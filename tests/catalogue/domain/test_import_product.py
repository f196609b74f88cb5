"""Tests for the ImportProduct ledger aggregate."""

from catalogue.imports.events import ImportRecorded, ImportRevised
from catalogue.imports.import_product import ImportProduct


def _record(**overrides):
    defaults = {
        "category_id": "cat-001",
        "category_name": "Spices",
        "product_name": "Black Pepper 550 GL",
        "total_quantity": 12.5,
        "purchase_price": 410000.0,
        "shipping_cost": 18000.0,
        "tax_amount": 20500.0,
        "images": ["/uploads/import-products/1-a.jpg", "/uploads/import-products/2-b.jpg"],
    }
    defaults.update(overrides)
    return ImportProduct.record(**defaults)


class TestRecord:
    def test_fields_and_image_order(self):
        record = _record()
        assert record.product_name == "Black Pepper 550 GL"
        assert record.category_name == "Spices"
        assert record.image_urls == ["/uploads/import-products/1-a.jpg", "/uploads/import-products/2-b.jpg"]

    def test_images_are_optional(self):
        assert _record(images=None).image_urls == []

    def test_raises_recorded_event(self):
        record = _record()
        [event] = record._events
        assert isinstance(event, ImportRecorded)
        assert event.product_name == "Black Pepper 550 GL"


class TestRevise:
    def test_overwrites_every_field(self):
        record = _record()
        record._events.clear()

        record.revise(
            category_id="cat-002",
            category_name="Dry Fruits & Nuts",
            product_name="Cashew W320",
            total_quantity=4.0,
            purchase_price=900000.0,
            shipping_cost=0.0,
            tax_amount=45000.0,
            images=["/uploads/import-products/3-c.jpg"],
        )

        assert record.category_name == "Dry Fruits & Nuts"
        assert record.product_name == "Cashew W320"
        assert record.shipping_cost == 0.0
        assert record.image_urls == ["/uploads/import-products/3-c.jpg"]
        [event] = record._events
        assert isinstance(event, ImportRevised)
        assert event.image_count == 1

    def test_empty_image_list_clears_gallery(self):
        record = _record()
        record.revise(
            category_id="cat-001",
            category_name="Spices",
            product_name="Black Pepper 550 GL",
            total_quantity=12.5,
            purchase_price=410000.0,
            shipping_cost=18000.0,
            tax_amount=20500.0,
            images=[],
        )
        assert record.image_urls == []

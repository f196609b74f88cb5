"""ImportProduct aggregate - the back-office ledger of stock bought in for export.

Each record notes what was purchased for a category: the product name, the
quantity, and the purchase, shipping and tax amounts, with photos of the
consignment. The ledger is separate from the storefront Product; nothing on
the storefront reads it.
"""

from datetime import datetime

from protean import atomic_change
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.entity(part_of="ImportProduct")
class ImportImage:
    url: String(required=True, max_length=500)
    display_order: Integer(default=0)


@catalogue.aggregate
class ImportProduct:
    category_id: Identifier(required=True)
    category_name: String(max_length=100)
    product_name: String(required=True, max_length=255)
    total_quantity: Float(default=0.0, min_value=0.0)
    purchase_price: Float(default=0.0, min_value=0.0)
    shipping_cost: Float(default=0.0, min_value=0.0)
    tax_amount: Float(default=0.0, min_value=0.0)
    images: HasMany(ImportImage)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @property
    def image_urls(self):
        return [image.url for image in sorted(self.images, key=lambda i: i.display_order)]

    @staticmethod
    def _build_images(urls):
        urls = [url for url in (urls or []) if url]
        return [ImportImage(url=url, display_order=position) for position, url in enumerate(urls)]

    @classmethod
    def record(
        cls,
        category_id,
        category_name,
        product_name,
        total_quantity=0.0,
        purchase_price=0.0,
        shipping_cost=0.0,
        tax_amount=0.0,
        images=None,
    ):
        from catalogue.imports.events import ImportRecorded

        now = datetime.now()
        record = cls(
            category_id=category_id,
            category_name=category_name,
            product_name=product_name,
            total_quantity=total_quantity,
            purchase_price=purchase_price,
            shipping_cost=shipping_cost,
            tax_amount=tax_amount,
            images=cls._build_images(images),
            created_at=now,
            updated_at=now,
        )
        record.raise_(
            ImportRecorded(
                import_id=record.id,
                category_id=category_id,
                product_name=product_name,
                total_quantity=total_quantity,
                created_at=now,
            )
        )
        return record

    def revise(
        self,
        category_id,
        category_name,
        product_name,
        total_quantity,
        purchase_price,
        shipping_cost,
        tax_amount,
        images,
    ):
        """Overwrite every field, the image list included."""
        from catalogue.imports.events import ImportRevised

        new_images = self._build_images(images)

        with atomic_change(self):
            self.category_id = category_id
            self.category_name = category_name
            self.product_name = product_name
            self.total_quantity = total_quantity
            self.purchase_price = purchase_price
            self.shipping_cost = shipping_cost
            self.tax_amount = tax_amount
            for image in list(self.images):
                self.remove_images(image)
            for image in new_images:
                self.add_images(image)

        self.updated_at = datetime.now()

        self.raise_(
            ImportRevised(
                import_id=self.id,
                category_id=self.category_id,
                product_name=self.product_name,
                total_quantity=self.total_quantity,
                image_count=len(new_images),
            )
        )

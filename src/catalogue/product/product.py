"""Product aggregate root with Variant and ProductImage entities."""

from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from catalogue.domain import catalogue
from catalogue.shared.slug import slugify
from catalogue.shared.status import CatalogueStatus


@catalogue.entity(part_of="Product")
class Variant:
    """A purchasable configuration of a product (a grade or pack size) with its own price."""

    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)


@catalogue.entity(part_of="Product")
class ProductImage:
    """Product image entity. The lowest ``display_order`` is the primary image."""

    url: String(required=True, max_length=500)
    display_order: Integer(default=0)


@catalogue.aggregate
class Product:
    """An exportable agricultural product listed in the catalogue.

    A product belongs to exactly one Category, referenced by id only; the
    category name is joined in on the read side. Products are priced either
    per variant (when variants exist) or flat, from the selling and
    discounted prices. See ``catalogue.product.pricing``.
    """

    name: String(required=True, max_length=255)
    slug: String(max_length=300)
    description: Text()
    category_id: Identifier(required=True)
    hs_code: String(max_length=20)
    min_order_qty: String(max_length=50)
    selling_price: Float(min_value=0.0)
    discounted_price: Float(min_value=0.0)
    images: HasMany(ProductImage)
    variants: HasMany(Variant)
    featured: Boolean(default=False)
    status: String(choices=CatalogueStatus, default=CatalogueStatus.ACTIVE.value)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def variant_names_must_be_unique(self):
        if not self.variants:
            return
        names = [v.name.strip().lower() for v in self.variants]
        if len(names) != len(set(names)):
            raise ValidationError({"variants": ["Variant names must be unique within a product"]})

    @property
    def image_urls(self):
        return [image.url for image in sorted(self.images, key=lambda i: i.display_order)]

    @property
    def primary_image(self):
        urls = self.image_urls
        return urls[0] if urls else ""

    @property
    def is_active(self):
        return self.status == CatalogueStatus.ACTIVE.value

    @staticmethod
    def _build_images(urls):
        urls = [url for url in (urls or []) if url]
        if not urls:
            raise ValidationError({"images": ["At least one product image is required"]})
        return [ProductImage(url=url, display_order=position) for position, url in enumerate(urls)]

    @classmethod
    def create(
        cls,
        name,
        category_id,
        images,
        description=None,
        hs_code=None,
        min_order_qty=None,
        selling_price=None,
        discounted_price=None,
        featured=False,
        status=None,
    ):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            slug=slugify(name),
            description=description,
            category_id=category_id,
            hs_code=hs_code,
            min_order_qty=min_order_qty,
            selling_price=selling_price,
            discounted_price=discounted_price,
            images=cls._build_images(images),
            featured=bool(featured),
            status=status or CatalogueStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                slug=product.slug,
                category_id=category_id,
                primary_image=product.primary_image,
                status=product.status,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=None,
        description=None,
        category_id=None,
        hs_code=None,
        min_order_qty=None,
        selling_price=None,
        discounted_price=None,
        featured=None,
        status=None,
    ):
        """Partial update: only arguments that are not ``None`` are applied."""
        from catalogue.product.events import ProductUpdated

        if name is not None and name != self.name:
            self.name = name
            self.slug = slugify(name)
        if description is not None:
            self.description = description
        if category_id is not None:
            self.category_id = category_id
        if hs_code is not None:
            self.hs_code = hs_code
        if min_order_qty is not None:
            self.min_order_qty = min_order_qty
        if selling_price is not None:
            self.selling_price = selling_price
        if discounted_price is not None:
            self.discounted_price = discounted_price
        if featured is not None:
            self.featured = bool(featured)
        if status is not None:
            self.status = status

        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                slug=self.slug,
                category_id=self.category_id,
                status=self.status,
            )
        )

    def replace_images(self, urls):
        """Overwrite the gallery; the first URL becomes the primary image."""
        from catalogue.product.events import ProductImagesReplaced

        new_images = self._build_images(urls)

        with atomic_change(self):
            for image in list(self.images):
                self.remove_images(image)
            for image in new_images:
                self.add_images(image)

        self.updated_at = datetime.now()

        self.raise_(
            ProductImagesReplaced(
                product_id=self.id,
                primary_image=self.primary_image,
                image_count=len(new_images),
            )
        )

    def _find_variant(self, variant_id):
        variant = next((v for v in self.variants if str(v.id) == str(variant_id)), None)
        if variant is None:
            raise ValidationError({"variants": [f"Variant {variant_id} not found"]})
        return variant

    def add_variant(self, name, price):
        from catalogue.product.events import VariantAdded

        variant = Variant(name=name, price=price)
        self.add_variants(variant)
        self.updated_at = datetime.now()

        self.raise_(
            VariantAdded(
                product_id=self.id,
                variant_id=variant.id,
                name=name,
                price=price,
            )
        )
        return variant

    def update_variant_price(self, variant_id, new_price):
        from catalogue.product.events import VariantPriceChanged

        variant = self._find_variant(variant_id)
        previous_price = variant.price
        variant.price = new_price
        self.updated_at = datetime.now()

        self.raise_(
            VariantPriceChanged(
                product_id=self.id,
                variant_id=variant.id,
                previous_price=previous_price,
                new_price=new_price,
            )
        )

    def remove_variant(self, variant_id):
        from catalogue.product.events import VariantRemoved

        variant = self._find_variant(variant_id)
        self.remove_variants(variant)
        self.updated_at = datetime.now()

        self.raise_(
            VariantRemoved(
                product_id=self.id,
                variant_id=variant.id,
            )
        )

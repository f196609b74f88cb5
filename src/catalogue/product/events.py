"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String()
    category_id: Identifier(required=True)
    primary_image: String()
    status: String(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    """One or more of a product's details changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String()
    category_id: Identifier()
    status: String(required=True)


@catalogue.event(part_of="Product")
class ProductImagesReplaced:
    """The product's image gallery was overwritten."""

    __version__ = 1

    product_id: Identifier(required=True)
    primary_image: String(required=True)
    image_count: Integer(required=True)


@catalogue.event(part_of="Product")
class VariantAdded:
    """A new purchasable variant was added to a product."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)


@catalogue.event(part_of="Product")
class VariantPriceChanged:
    """A variant's price was updated."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)


@catalogue.event(part_of="Product")
class VariantRemoved:
    """A variant was withdrawn from sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)

"""Read side of the catalogue: products joined with their category names."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.api.schemas import PriceOptionSchema, PricingSchema, ProductResponse, VariantSchema
from catalogue.category.category import Category
from catalogue.product.pricing import pricing_for
from catalogue.product.product import Product


def _pricing_schema(product) -> PricingSchema:
    pricing = pricing_for(product)
    shown = pricing.display()
    return PricingSchema(
        kind=pricing.kind,
        price=shown.price,
        strike_through=shown.strike_through,
        options=[
            PriceOptionSchema(
                variant_id=option.variant_id,
                name=option.name,
                price=option.price,
                original_price=option.original_price,
            )
            for option in pricing.options()
        ],
    )


def product_view(product, category_names: dict[str, str]) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        slug=product.slug,
        description=product.description,
        category=str(product.category_id),
        category_name=category_names.get(str(product.category_id)),
        hs_code=product.hs_code,
        images=product.image_urls,
        primary_image=product.primary_image,
        min_order_qty=product.min_order_qty,
        selling_price=product.selling_price,
        discounted_price=product.discounted_price,
        variants=[VariantSchema(id=str(v.id), name=v.name, price=v.price) for v in product.variants],
        pricing=_pricing_schema(product),
        featured=bool(product.featured),
        status=product.status,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def list_products(category_id: str | None = None) -> list[ProductResponse]:
    if category_id:
        try:
            current_domain.repository_for(Category).get(category_id)
        except ObjectNotFoundError:
            return []

    names = current_domain.repository_for(Category).names_by_id()
    products = current_domain.repository_for(Product).list_all(category_id=category_id)
    return [product_view(product, names) for product in products]


def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return product_view(product, current_domain.repository_for(Category).names_by_id())


def get_product_by_slug(slug: str) -> ProductResponse | None:
    product = current_domain.repository_for(Product).find_by_slug(slug)
    if product is None:
        return None
    return product_view(product, current_domain.repository_for(Category).names_by_id())

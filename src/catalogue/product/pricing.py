"""Product pricing, resolved once at the data-access boundary.

Two pricing models coexist in the catalogue:

* **PerVariant** - the product carries a list of variants, each with its own
  price. Every variant is a purchasable option.
* **Flat** - the product has no variants and is priced from its selling and
  discounted prices. It exposes exactly one purchasable option whose variant
  id is the product id.

Callers ask ``pricing_for(product)`` for the model and work with
``PriceOption`` values; nothing outside this module should branch on whether
a product has variants.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError

FLAT_OPTION_NAME = "Standard"


@dataclass(frozen=True)
class PriceOption:
    """One purchasable configuration of a product."""

    variant_id: str
    name: str
    price: float
    original_price: float | None = None


@dataclass(frozen=True)
class DisplayPrice:
    """What the storefront shows: the price, plus a struck-through original when discounted."""

    price: float
    strike_through: float | None = None

    @property
    def is_discounted(self) -> bool:
        return self.strike_through is not None


def display_price(reference: float | None, discounted: float | None) -> DisplayPrice:
    """Apply the discount display rule.

    A struck-through original is shown only when a discount is present and
    lower than the reference price; otherwise a single price is shown.
    """
    if discounted and reference is not None and discounted < reference:
        return DisplayPrice(price=discounted, strike_through=reference)
    if discounted and reference is None:
        return DisplayPrice(price=discounted)
    return DisplayPrice(price=reference or 0.0)


@dataclass(frozen=True)
class FlatPricing:
    product_id: str
    selling_price: float | None
    discounted_price: float | None

    kind = "flat"

    @property
    def unit_price(self) -> float:
        # A discount of zero or an empty field means "no discount".
        if self.discounted_price:
            return self.discounted_price
        return self.selling_price or 0.0

    def options(self) -> list[PriceOption]:
        shown = display_price(self.selling_price, self.discounted_price)
        return [
            PriceOption(
                variant_id=self.product_id,
                name=FLAT_OPTION_NAME,
                price=self.unit_price,
                original_price=shown.strike_through,
            )
        ]

    def display(self) -> DisplayPrice:
        return display_price(self.selling_price, self.discounted_price)


@dataclass(frozen=True)
class PerVariantPricing:
    variants: tuple[PriceOption, ...]

    kind = "per_variant"

    def options(self) -> list[PriceOption]:
        return list(self.variants)

    def display(self) -> DisplayPrice:
        """Storefront cards show the cheapest variant ("from" price)."""
        return display_price(min(v.price for v in self.variants), None)


Pricing = FlatPricing | PerVariantPricing


def pricing_for(product) -> Pricing:
    """Resolve the pricing model of a Product aggregate."""
    if product.variants:
        return PerVariantPricing(
            variants=tuple(
                PriceOption(variant_id=str(variant.id), name=variant.name, price=variant.price)
                for variant in product.variants
            )
        )
    return FlatPricing(
        product_id=str(product.id),
        selling_price=product.selling_price,
        discounted_price=product.discounted_price,
    )


def option_for(product, variant_id: str | None = None) -> PriceOption:
    """Pick the purchasable option for ``variant_id``.

    Flat-priced products accept a missing variant id (or the product id
    itself). Variant-priced products require one of their variant ids.
    """
    options = pricing_for(product).options()

    if variant_id is None and len(options) == 1:
        return options[0]

    option = next((o for o in options if o.variant_id == str(variant_id)), None)
    if option is None:
        raise ValidationError({"variant_id": [f"Variant {variant_id} is not available for this product"]})
    return option

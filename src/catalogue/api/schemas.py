"""Pydantic response schemas for the Catalogue API.

Mutations arrive as multipart forms (fields plus image files), so only the
responses and the JSON-bodied variant endpoints have schemas here. Field
names are camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------
class CategoryResponse(CamelModel):
    id: str
    name: str
    slug: str | None = None
    image: str | None = None
    featured: bool = False
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_aggregate(cls, category) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            image=category.image,
            featured=bool(category.featured),
            status=category.status,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------
class VariantSchema(CamelModel):
    id: str
    name: str
    price: float


class PriceOptionSchema(CamelModel):
    variant_id: str
    name: str
    price: float
    original_price: float | None = None


class PricingSchema(CamelModel):
    kind: str
    price: float
    strike_through: float | None = None
    options: list[PriceOptionSchema]


class ProductResponse(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "0b7c...",
                    "name": "Premium Cashew W240",
                    "slug": "premium-cashew-w240",
                    "category": "5f1e...",
                    "categoryName": "Dry Fruits & Nuts",
                    "hsCode": "080132",
                    "images": ["/uploads/1718000000000-cashew.jpg"],
                    "primaryImage": "/uploads/1718000000000-cashew.jpg",
                    "minOrderQty": "1 Ton",
                    "sellingPrice": 950.0,
                    "discountedPrice": 899.0,
                    "featured": True,
                    "status": "active",
                }
            ]
        },
    )

    id: str
    name: str
    slug: str | None = None
    description: str | None = None
    category: str
    category_name: str | None = None
    hs_code: str | None = None
    images: list[str] = Field(default_factory=list)
    primary_image: str | None = None
    min_order_qty: str | None = None
    selling_price: float | None = None
    discounted_price: float | None = None
    variants: list[VariantSchema] = Field(default_factory=list)
    pricing: PricingSchema
    featured: bool = False
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Variant requests
# ---------------------------------------------------------------------------
class AddVariantRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"name": "Grade A - 10kg", "price": 1200.0}]},
    )

    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0)


class UpdateVariantPriceRequest(CamelModel):
    price: float = Field(..., ge=0)


class VariantIdResponse(CamelModel):
    variant_id: str


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Import ledger
# ---------------------------------------------------------------------------
class ImportProductResponse(CamelModel):
    id: str
    category_id: str
    category_name: str | None = None
    product_name: str
    total_quantity: float = 0.0
    purchase_price: float = 0.0
    shipping_cost: float = 0.0
    tax_amount: float = 0.0
    images: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_aggregate(cls, record) -> ImportProductResponse:
        return cls(
            id=str(record.id),
            category_id=str(record.category_id),
            category_name=record.category_name,
            product_name=record.product_name,
            total_quantity=record.total_quantity or 0.0,
            purchase_price=record.purchase_price or 0.0,
            shipping_cost=record.shipping_cost or 0.0,
            tax_amount=record.tax_amount or 0.0,
            images=record.image_urls,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

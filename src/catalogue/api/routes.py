"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    AddVariantRequest,
    CategoryResponse,
    ImportProductResponse,
    MessageResponse,
    ProductResponse,
    UpdateVariantPriceRequest,
    VariantIdResponse,
)
from catalogue.api.views import get_product, get_product_by_slug, list_products
from catalogue.category.category import Category
from catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from catalogue.imports.import_product import ImportProduct
from catalogue.imports.management import DeleteImport, RecordImport, ReviseImport
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.removal import DeleteProduct
from catalogue.product.variants import AddVariant, RemoveVariant, UpdateVariantPrice
from catalogue.shared.status import CatalogueStatus
from identity.auth.dependencies import require_admin
from shared.uploads import get_image_store

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
import_router = APIRouter(prefix="/import-products", tags=["import-products"], dependencies=[Depends(require_admin)])

IMPORT_UPLOAD_DIR = "import-products"


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _flag(value: str | None) -> bool | None:
    if value is None or value == "":
        return None
    return value.strip().lower() in ("true", "1", "on", "yes")


def _price(value: str | None, field: str) -> float | None:
    value = _clean(value)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"{field} must be a number") from None


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories(include_inactive: bool = False) -> list[CategoryResponse]:
    repo = current_domain.repository_for(Category)
    categories = repo.list_all() if include_inactive else repo.list_active()
    return [CategoryResponse.from_aggregate(c) for c in categories]


@category_router.get("/by-slug/{slug}", response_model=CategoryResponse)
async def get_category_by_slug(slug: str) -> CategoryResponse:
    category = current_domain.repository_for(Category).find_by_slug(slug)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryResponse.from_aggregate(category)


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    category = current_domain.repository_for(Category).get(category_id)
    return CategoryResponse.from_aggregate(category)


@category_router.post(
    "", status_code=201, response_model=CategoryResponse, dependencies=[Depends(require_admin)]
)
async def create_category(
    name: str | None = Form(None),
    featured: str | None = Form(None),
    status: str | None = Form(None),
    image: UploadFile | None = File(None),
) -> CategoryResponse:
    name = _clean(name)
    if not name:
        raise HTTPException(status_code=400, detail="Category name is required")

    image_url = await get_image_store().save(image)
    if not image_url:
        raise HTTPException(status_code=400, detail="Category image is required")

    command = CreateCategory(
        name=name,
        image=image_url,
        featured=bool(_flag(featured)),
        status=CatalogueStatus.parse(status, default=CatalogueStatus.ACTIVE.value),
    )
    category_id = current_domain.process(command, asynchronous=False)
    return CategoryResponse.from_aggregate(current_domain.repository_for(Category).get(category_id))


@category_router.put("/{category_id}", response_model=CategoryResponse, dependencies=[Depends(require_admin)])
async def update_category(
    category_id: str,
    name: str | None = Form(None),
    featured: str | None = Form(None),
    status: str | None = Form(None),
    image: UploadFile | None = File(None),
) -> CategoryResponse:
    # Fail fast on unknown ids before writing any upload to disk
    current_domain.repository_for(Category).get(category_id)

    command = UpdateCategory(
        category_id=category_id,
        name=_clean(name),
        image=await get_image_store().save(image),
        featured=_flag(featured),
        status=CatalogueStatus.parse(status),
    )
    current_domain.process(command, asynchronous=False)
    return CategoryResponse.from_aggregate(current_domain.repository_for(Category).get(category_id))


@category_router.delete("/{category_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_category(category_id: str) -> MessageResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return MessageResponse(message="Category deleted successfully")


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def get_products(category_id: str | None = Query(None, alias="categoryId")) -> list[ProductResponse]:
    return list_products(category_id=category_id)


@product_router.get("/by-slug/{slug}", response_model=ProductResponse)
async def get_product_with_slug(slug: str) -> ProductResponse:
    product = get_product_by_slug(slug)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_single_product(product_id: str) -> ProductResponse:
    return get_product(product_id)


@product_router.post("", status_code=201, response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def create_product(
    name: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    hs_code: str | None = Form(None, alias="hsCode"),
    min_order_qty: str | None = Form(None, alias="minOrderQty"),
    selling_price: str | None = Form(None, alias="sellingPrice"),
    discounted_price: str | None = Form(None, alias="discountedPrice"),
    featured: str | None = Form(None),
    status: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
) -> ProductResponse:
    required = [name, description, category, hs_code, min_order_qty, selling_price]
    if any(_clean(value) is None for value in required) or not images:
        raise HTTPException(status_code=400, detail="Missing required fields")

    selling = _price(selling_price, "sellingPrice")
    discounted = _price(discounted_price, "discountedPrice")

    image_urls = await get_image_store().save_all(images)
    if not image_urls:
        raise HTTPException(status_code=400, detail="Image upload failed")

    command = CreateProduct(
        name=_clean(name),
        description=_clean(description),
        category_id=_clean(category),
        hs_code=_clean(hs_code),
        min_order_qty=_clean(min_order_qty),
        selling_price=selling,
        discounted_price=discounted,
        images=json.dumps(image_urls),
        featured=bool(_flag(featured)),
        status=CatalogueStatus.parse(status, default=CatalogueStatus.ACTIVE.value),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return get_product(product_id)


@product_router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def update_product(
    product_id: str,
    name: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    hs_code: str | None = Form(None, alias="hsCode"),
    min_order_qty: str | None = Form(None, alias="minOrderQty"),
    selling_price: str | None = Form(None, alias="sellingPrice"),
    discounted_price: str | None = Form(None, alias="discountedPrice"),
    featured: str | None = Form(None),
    status: str | None = Form(None),
    existing_images: str | None = Form(None, alias="existingImages"),
    images: list[UploadFile] | None = File(None),
) -> ProductResponse:
    get_product(product_id)

    gallery = None
    if existing_images is not None:
        try:
            gallery = [str(url) for url in json.loads(existing_images or "[]")]
        except (json.JSONDecodeError, TypeError):
            raise HTTPException(status_code=400, detail="existingImages must be a JSON list") from None

    new_urls = await get_image_store().save_all(images)
    if new_urls:
        gallery = (gallery or []) + new_urls

    command = UpdateProduct(
        product_id=product_id,
        name=_clean(name),
        description=_clean(description),
        category_id=_clean(category),
        hs_code=_clean(hs_code),
        min_order_qty=_clean(min_order_qty),
        selling_price=_price(selling_price, "sellingPrice"),
        discounted_price=_price(discounted_price, "discountedPrice"),
        images=json.dumps(gallery) if gallery is not None else None,
        featured=_flag(featured),
        status=CatalogueStatus.parse(status),
    )
    current_domain.process(command, asynchronous=False)
    return get_product(product_id)


@product_router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_product(product_id: str) -> MessageResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product deleted successfully")


@product_router.post(
    "/{product_id}/variants",
    status_code=201,
    response_model=VariantIdResponse,
    dependencies=[Depends(require_admin)],
)
async def add_variant(product_id: str, body: AddVariantRequest) -> VariantIdResponse:
    command = AddVariant(product_id=product_id, name=body.name, price=body.price)
    variant_id = current_domain.process(command, asynchronous=False)
    return VariantIdResponse(variant_id=variant_id)


@product_router.put(
    "/{product_id}/variants/{variant_id}/price",
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)],
)
async def update_variant_price(product_id: str, variant_id: str, body: UpdateVariantPriceRequest) -> ProductResponse:
    command = UpdateVariantPrice(product_id=product_id, variant_id=variant_id, price=body.price)
    current_domain.process(command, asynchronous=False)
    return get_product(product_id)


@product_router.delete(
    "/{product_id}/variants/{variant_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)],
)
async def remove_variant(product_id: str, variant_id: str) -> ProductResponse:
    command = RemoveVariant(product_id=product_id, variant_id=variant_id)
    current_domain.process(command, asynchronous=False)
    return get_product(product_id)


# --- Import ledger endpoints (back office) ---


def _amount(value: str | None, field: str) -> float:
    return _price(value, field) or 0.0


def _gallery(existing_images: str | None) -> list[str]:
    try:
        return [str(url) for url in json.loads(existing_images or "[]")]
    except (json.JSONDecodeError, TypeError):
        raise HTTPException(status_code=400, detail="existingImages must be a JSON list") from None


@import_router.get("", response_model=list[ImportProductResponse])
async def list_imports() -> list[ImportProductResponse]:
    return [ImportProductResponse.from_aggregate(r) for r in current_domain.repository_for(ImportProduct).list_all()]


@import_router.get("/{import_id}", response_model=ImportProductResponse)
async def get_import(import_id: str) -> ImportProductResponse:
    return ImportProductResponse.from_aggregate(current_domain.repository_for(ImportProduct).get(import_id))


@import_router.post("", status_code=201, response_model=ImportProductResponse)
async def record_import(
    category_id: str | None = Form(None, alias="categoryId"),
    product_name: str | None = Form(None, alias="productName"),
    total_quantity: str | None = Form(None, alias="totalQuantity"),
    purchase_price: str | None = Form(None, alias="purchasePrice"),
    shipping_cost: str | None = Form(None, alias="shippingCost"),
    tax_amount: str | None = Form(None, alias="taxAmount"),
    images: list[UploadFile] | None = File(None),
) -> ImportProductResponse:
    if _clean(category_id) is None or _clean(product_name) is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    command = RecordImport(
        category_id=_clean(category_id),
        product_name=_clean(product_name),
        total_quantity=_amount(total_quantity, "totalQuantity"),
        purchase_price=_amount(purchase_price, "purchasePrice"),
        shipping_cost=_amount(shipping_cost, "shippingCost"),
        tax_amount=_amount(tax_amount, "taxAmount"),
        images=json.dumps(await get_image_store().save_all(images, IMPORT_UPLOAD_DIR)),
    )
    import_id = current_domain.process(command, asynchronous=False)
    return ImportProductResponse.from_aggregate(current_domain.repository_for(ImportProduct).get(import_id))


@import_router.put("/{import_id}", response_model=ImportProductResponse)
async def revise_import(
    import_id: str,
    category_id: str | None = Form(None, alias="categoryId"),
    product_name: str | None = Form(None, alias="productName"),
    total_quantity: str | None = Form(None, alias="totalQuantity"),
    purchase_price: str | None = Form(None, alias="purchasePrice"),
    shipping_cost: str | None = Form(None, alias="shippingCost"),
    tax_amount: str | None = Form(None, alias="taxAmount"),
    existing_images: str | None = Form(None, alias="existingImages"),
    images: list[UploadFile] | None = File(None),
) -> ImportProductResponse:
    if _clean(category_id) is None or _clean(product_name) is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    # Fail fast on unknown ids before writing any upload to disk
    current_domain.repository_for(ImportProduct).get(import_id)

    # The gallery is always overwritten: kept images plus new uploads
    gallery = _gallery(existing_images) + await get_image_store().save_all(images, IMPORT_UPLOAD_DIR)

    command = ReviseImport(
        import_id=import_id,
        category_id=_clean(category_id),
        product_name=_clean(product_name),
        total_quantity=_amount(total_quantity, "totalQuantity"),
        purchase_price=_amount(purchase_price, "purchasePrice"),
        shipping_cost=_amount(shipping_cost, "shippingCost"),
        tax_amount=_amount(tax_amount, "taxAmount"),
        images=json.dumps(gallery),
    )
    current_domain.process(command, asynchronous=False)
    return ImportProductResponse.from_aggregate(current_domain.repository_for(ImportProduct).get(import_id))


@import_router.delete("/{import_id}", response_model=MessageResponse)
async def delete_import(import_id: str) -> MessageResponse:
    current_domain.process(DeleteImport(import_id=import_id), asynchronous=False)
    return MessageResponse(message="Import deleted successfully")

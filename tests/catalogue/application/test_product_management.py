"""Application tests for product commands via domain.process()."""

import json

import pytest
from catalogue.category.management import CreateCategory
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.product import Product
from catalogue.product.removal import DeleteProduct
from catalogue.product.variants import AddVariant, RemoveVariant, UpdateVariantPrice
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


@pytest.fixture()
def category_id():
    command = CreateCategory(name="Spices", image="/uploads/1-spices.jpg")
    return current_domain.process(command, asynchronous=False)


def _create_product(category_id, **overrides):
    defaults = {
        "name": "Black Pepper",
        "description": "Malabar garbled",
        "category_id": category_id,
        "hs_code": "090411",
        "min_order_qty": "1 Ton",
        "selling_price": 500.0,
        "images": json.dumps(["/uploads/1-pepper.jpg"]),
    }
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


class TestCreateProduct:
    def test_create_persists(self, category_id):
        product_id = _create_product(category_id)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Black Pepper"
        assert product.image_urls == ["/uploads/1-pepper.jpg"]

    def test_unknown_category_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _create_product("missing")
        assert "category" in exc.value.messages

    def test_list_newest_first_and_by_category(self, category_id):
        other = current_domain.process(CreateCategory(name="Coffee", image="/uploads/1-c.jpg"), asynchronous=False)
        first = _create_product(category_id, name="Black Pepper")
        second = _create_product(other, name="Robusta")

        repo = current_domain.repository_for(Product)
        assert [str(p.id) for p in repo.list_all()] == [second, first]
        assert [str(p.id) for p in repo.list_all(category_id=category_id)] == [first]

    def test_find_by_slug(self, category_id):
        product_id = _create_product(category_id, name="Premium Cashew W240")
        found = current_domain.repository_for(Product).find_by_slug("premium-cashew-w240")
        assert str(found.id) == product_id


class TestUpdateProduct:
    def test_partial_update_keeps_images(self, category_id):
        product_id = _create_product(category_id)
        current_domain.process(UpdateProduct(product_id=product_id, selling_price=550.0), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.selling_price == 550.0
        assert product.image_urls == ["/uploads/1-pepper.jpg"]

    def test_images_replace_gallery(self, category_id):
        product_id = _create_product(category_id)
        urls = ["/uploads/2-a.jpg", "/uploads/3-b.jpg"]
        current_domain.process(UpdateProduct(product_id=product_id, images=json.dumps(urls)), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.image_urls == urls

    def test_move_to_unknown_category_is_rejected(self, category_id):
        product_id = _create_product(category_id)
        with pytest.raises(ValidationError):
            current_domain.process(UpdateProduct(product_id=product_id, category_id="missing"), asynchronous=False)


class TestVariants:
    def test_variant_lifecycle(self, category_id):
        product_id = _create_product(category_id)
        variant_id = current_domain.process(
            AddVariant(product_id=product_id, name="25kg bag", price=12000.0), asynchronous=False
        )
        current_domain.process(
            UpdateVariantPrice(product_id=product_id, variant_id=variant_id, price=11500.0), asynchronous=False
        )

        product = current_domain.repository_for(Product).get(product_id)
        assert [(str(v.id), v.price) for v in product.variants] == [(variant_id, 11500.0)]

        current_domain.process(RemoveVariant(product_id=product_id, variant_id=variant_id), asynchronous=False)
        product = current_domain.repository_for(Product).get(product_id)
        assert len(product.variants) == 0


class TestDeleteProduct:
    def test_delete(self, category_id):
        product_id = _create_product(category_id)
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

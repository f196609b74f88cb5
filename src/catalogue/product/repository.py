"""Repository for the Product aggregate."""

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.repository(part_of=Product)
class ProductRepository:
    def list_all(self, category_id: str | None = None) -> list[Product]:
        """Products newest first, optionally restricted to one category."""
        query = self._dao.query
        if category_id:
            query = query.filter(category_id=category_id)
        return query.order_by("-created_at").all().items

    def find_by_slug(self, slug: str) -> Product | None:
        return self._dao.query.filter(slug=slug).all().first

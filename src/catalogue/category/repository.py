"""Repository for the Category aggregate."""

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.shared.status import CatalogueStatus


@catalogue.repository(part_of=Category)
class CategoryRepository:
    def list_all(self) -> list[Category]:
        """All categories ordered by name."""
        return self._dao.query.order_by("name").all().items

    def list_active(self) -> list[Category]:
        """Categories visible on the storefront, ordered by name."""
        return self._dao.query.filter(status=CatalogueStatus.ACTIVE.value).order_by("name").all().items

    def find_by_slug(self, slug: str) -> Category | None:
        return self._dao.query.filter(slug=slug).all().first

    def names_by_id(self) -> dict[str, str]:
        """Lookup table used to join category names onto products."""
        return {str(category.id): category.name for category in self.list_all()}

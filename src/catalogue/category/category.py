"""Category aggregate root for grouping storefront products."""

from datetime import datetime

from protean.fields import Boolean, DateTime, String

from catalogue.domain import catalogue
from catalogue.shared.slug import slugify
from catalogue.shared.status import CatalogueStatus


@catalogue.aggregate
class Category:
    """A storefront grouping of products, such as "Spices" or "Dry Fruits & Nuts".

    The slug is always derived from the name and is regenerated whenever the
    name changes. Slugs are expected to be unique for URL routing, but no
    constraint enforces it; lookups by slug return the first match.
    """

    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    image: String(required=True, max_length=500)
    featured: Boolean(default=False)
    status: String(choices=CatalogueStatus, default=CatalogueStatus.ACTIVE.value)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @property
    def is_active(self):
        return self.status == CatalogueStatus.ACTIVE.value

    @classmethod
    def create(cls, name, image, featured=False, status=None):
        from catalogue.category.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name,
            slug=slugify(name),
            image=image,
            featured=bool(featured),
            status=status or CatalogueStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                slug=category.slug,
                status=category.status,
            )
        )
        return category

    def update_details(self, name=None, image=None, featured=None, status=None):
        from catalogue.category.events import CategoryUpdated

        if name is not None and name != self.name:
            self.name = name
            self.slug = slugify(name)
        if image is not None:
            self.image = image
        if featured is not None:
            self.featured = bool(featured)
        if status is not None:
            self.status = status

        self.updated_at = datetime.now()

        self.raise_(
            CategoryUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
                featured=self.featured,
                status=self.status,
            )
        )

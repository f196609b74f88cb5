"""Domain events for the Category aggregate."""

from protean.fields import Boolean, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Category")
class CategoryCreated:
    """A new category was added to the catalogue."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String()
    status: String(required=True)


@catalogue.event(part_of="Category")
class CategoryUpdated:
    """A category's name, image, featured flag or status changed."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String()
    featured: Boolean()
    status: String(required=True)

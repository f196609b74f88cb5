"""Category management - commands and handlers."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue, logger


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    image: String(required=True, max_length=500)
    featured: Boolean(default=False)
    status: String(max_length=20)


@catalogue.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    image: String(max_length=500)
    featured: Boolean()
    status: String(max_length=20)


@catalogue.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(
            name=command.name,
            image=command.image,
            featured=command.featured,
            status=command.status,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.update_details(
            name=command.name,
            image=command.image,
            featured=command.featured,
            status=command.status,
        )
        repo.add(category)
        return str(category.id)

    @handle(DeleteCategory)
    def delete_category(self, command):
        # Products keep their category id; the read-side join reports it as missing.
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)
        logger.info("category_deleted", category_id=str(command.category_id), name=category.name)

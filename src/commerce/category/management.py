"""Category management: commands and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from commerce.category.category import Category
from commerce.domain import commerce
from shared.errors import CategoryHasChildren, CategoryHasProducts, DuplicateResource
from shared.logging import get_logger
from shared.slugs import slugify

logger = get_logger(__name__)


@commerce.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text()
    parent_id: Identifier()
    image_url: String(max_length=500)
    display_order: Integer(default=0)
    is_active: Boolean(default=True)


@commerce.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    changes: Text(required=True)  # JSON object of changed fields


@commerce.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _check_slug_free(slug, category_id=None):
    existing = current_domain.repository_for(Category).find_by_slug(slug)
    if existing is not None and str(existing.id) != str(category_id):
        raise DuplicateResource("Category slug already exists")


def _check_parent(parent_id, category_id=None):
    """The parent must exist and must not sit below the category being moved."""
    repo = current_domain.repository_for(Category)
    ancestor = repo.get_category(parent_id)
    while ancestor is not None:
        if category_id and str(ancestor.id) == str(category_id):
            raise ValidationError({"parent_id": ["A category cannot be moved under itself or its descendants"]})
        ancestor = repo.get_category(ancestor.parent_id) if ancestor.parent_id else None


@commerce.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        slug = command.slug or slugify(command.name)
        _check_slug_free(slug)
        if command.parent_id:
            _check_parent(command.parent_id)

        category = Category.create(
            name=command.name,
            slug=slug,
            description=command.description,
            parent_id=command.parent_id,
            image_url=command.image_url,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        current_domain.repository_for(Category).add(category)

        logger.info("Category created", category_id=str(category.id), slug=slug)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get_category(command.category_id)
        changes = json.loads(command.changes)

        if changes.get("slug"):
            _check_slug_free(changes["slug"], category.id)
        if changes.get("parent_id"):
            _check_parent(changes["parent_id"], category.id)

        category.update_details(**changes)
        repo.add(category)
        return str(category.id)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from commerce.product.product import Product

        repo = current_domain.repository_for(Category)
        category = repo.get_category(command.category_id)

        if repo.has_children(category.id):
            raise CategoryHasChildren()
        if current_domain.repository_for(Product).count_in_category(category.id):
            raise CategoryHasProducts()

        repo.delete_category(category)
        logger.info("Category deleted", category_id=str(category.id))

"""Repository for Category aggregates."""

from protean.exceptions import ObjectNotFoundError

from commerce.category.category import Category
from commerce.domain import commerce
from shared.errors import NotFoundError
from shared.listing import each_record


def _by_display_order(categories):
    return sorted(categories, key=lambda c: (c.display_order or 0, c.name))


@commerce.repository(part_of=Category)
class CategoryRepository:
    def get_category(self, category_id) -> Category:
        try:
            return self.get(category_id)
        except ObjectNotFoundError:
            raise NotFoundError("Category not found") from None

    def find_by_slug(self, slug: str) -> Category | None:
        return self._dao.query.filter(slug=slug).all().first

    def has_children(self, category_id) -> bool:
        return self._dao.query.filter(parent_id=str(category_id)).limit(1).all().total > 0

    def children_of(self, category_id) -> list[Category]:
        return _by_display_order(each_record(self._dao.query.filter(parent_id=str(category_id))))

    def listing_query(self, include_inactive: bool = False):
        query = self._dao.query
        if not include_inactive:
            query = query.filter(is_active=True)
        return query

    def all_categories(self, include_inactive: bool = False) -> list[Category]:
        """Every category, for building the tree."""
        return _by_display_order(each_record(self.listing_query(include_inactive)))

    def delete_category(self, category: Category) -> None:
        self._dao.delete(category)

"""Category aggregate for grouping products into a tree."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from commerce.domain import commerce
from shared.slugs import is_valid_slug, slugify


@commerce.aggregate
class Category:
    """A node in the category tree. Public reads only see active categories."""

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120, unique=True)
    description: Text()
    parent_id: Identifier()
    image_url: String(max_length=500)
    is_active: Boolean(default=True)
    display_order: Integer(default=0, min_value=0)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not is_valid_slug(self.slug):
            raise ValidationError({"slug": ["Slug may contain only lowercase letters, digits and hyphens"]})

    @invariant.post
    def cannot_be_own_parent(self):
        if self.parent_id and str(self.parent_id) == str(self.id):
            raise ValidationError({"parent_id": ["A category cannot be its own parent"]})

    @classmethod
    def create(cls, name, slug=None, description=None, parent_id=None, image_url=None, display_order=0, is_active=True):
        return cls(
            name=name,
            slug=slug or slugify(name),
            description=description,
            parent_id=parent_id,
            image_url=image_url,
            display_order=display_order,
            is_active=is_active,
        )

    def update_details(self, **changes):
        for field, value in changes.items():
            setattr(self, field, value)
        self.updated_at = datetime.now(UTC)

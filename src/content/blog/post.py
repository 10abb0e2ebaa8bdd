"""BlogPost aggregate.

Posts are written as drafts, published, and eventually archived. Only
published posts are visible on the public site.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from content.domain import content
from shared.slugs import is_valid_slug


class PostStatus(Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


@content.aggregate
class BlogPost:
    title: String(required=True, max_length=255)
    slug: String(required=True, max_length=280, unique=True)
    excerpt: String(max_length=500)
    content: Text(required=True)
    cover_image_url: String(max_length=500)
    category: String(max_length=100)
    tags: Text()  # JSON array of tags
    author_id: Identifier(required=True)
    status: String(choices=PostStatus, default=PostStatus.DRAFT.value)
    is_featured: Boolean(default=False)
    views: Integer(default=0, min_value=0)
    published_at: DateTime()
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not is_valid_slug(self.slug):
            raise ValidationError({"slug": ["Slug may contain only lowercase letters, digits and hyphens"]})

    @invariant.post
    def published_posts_have_a_publish_date(self):
        if self.status == PostStatus.PUBLISHED.value and self.published_at is None:
            raise ValidationError({"published_at": ["Published posts need a publish date"]})

    @classmethod
    def write(cls, title, slug, content, author_id, status=PostStatus.DRAFT.value, tags=None, **fields):
        post = cls(
            title=title,
            slug=slug,
            content=content,
            author_id=author_id,
            tags=json.dumps(tags or []),
            **fields,
        )
        if status != PostStatus.DRAFT.value:
            post.change_status(status)
        return post

    @property
    def tag_list(self):
        return json.loads(self.tags) if self.tags else []

    @property
    def is_published(self):
        return self.status == PostStatus.PUBLISHED.value

    def update_details(self, **changes):
        status = changes.pop("status", None)
        if "tags" in changes:
            changes["tags"] = json.dumps(changes["tags"] or [])
        for field, value in changes.items():
            setattr(self, field, value)
        if status is not None and status != self.status:
            self.change_status(status)
        self.updated_at = datetime.now(UTC)

    def change_status(self, status):
        try:
            target = PostStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown post status: {status}"]}) from None

        # First publication stamps the date; republishing keeps it
        if target == PostStatus.PUBLISHED and self.published_at is None:
            self.published_at = datetime.now(UTC)
        self.status = target.value
        self.updated_at = datetime.now(UTC)

    def record_view(self):
        self.views = (self.views or 0) + 1

"""BlogComment aggregate: a reader's comment on a published post."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from content.domain import content


@content.aggregate
class BlogComment:
    post_id: Identifier(required=True)
    user_id: Identifier(required=True)
    author_name: String(max_length=255)
    content: Text(required=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))

"""Read-side queries over blog posts."""

from collections import Counter

from protean.utils.globals import current_domain

from content.blog.post import BlogPost, PostStatus
from shared import settings
from shared.listing import Listing, each_record, fetch_page, json_list_contains, order_key, text_search

SORT_FIELDS = {
    "publishedAt": "published_at",
    "createdAt": "created_at",
    "title": "title",
    "views": "views",
}


def post_query(status=PostStatus.PUBLISHED.value, search=None, category=None, tag=None, featured=None):
    """``status`` of None matches posts in any status."""
    criteria = []
    conditions = {}
    if status is not None:
        conditions["status"] = status
    if category:
        conditions["category__iexact"] = category.strip()
    if featured is not None:
        conditions["is_featured"] = featured
    if tag:
        criteria.append(json_list_contains("tags", tag.strip()))
    matches_text = text_search(search, "title", "excerpt", "content")
    if matches_text is not None:
        criteria.append(matches_text)
    return current_domain.repository_for(BlogPost).matching(*criteria, **conditions)


def find_posts(
    query,
    sort_by: str = "publishedAt",
    sort_order: str = "desc",
    offset: int = 0,
    limit: int = settings.DEFAULT_PAGE_LIMIT,
) -> Listing:
    return fetch_page(query, order_key(SORT_FIELDS[sort_by], sort_order), offset, limit)


def category_counts():
    counts = Counter(post.category for post in each_record(post_query()) if post.category)
    return [{"name": name, "count": count} for name, count in sorted(counts.items())]


def tag_counts():
    counts = Counter(tag for post in each_record(post_query()) for tag in post.tag_list)
    return [{"name": name, "count": count} for name, count in counts.most_common()]

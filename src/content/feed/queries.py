"""Read-side queries over feed posts."""

from collections import Counter

from protean.utils.globals import current_domain

from content.feed.post import FeedPost, Platform
from shared import settings
from shared.listing import Listing, each_record, fetch_page, json_list_contains, order_key

SORT_FIELDS = {"postedAt": "posted_at", "createdAt": "created_at", "likes": "likes"}


def feed_query(platform=None, hashtag=None, include_inactive=False):
    filters = {} if include_inactive else {"is_active": True}
    if platform:
        filters["platform"] = platform
    query = current_domain.repository_for(FeedPost).matching(**filters)

    wanted = (hashtag or "").strip().lstrip("#").lower()
    if wanted:
        query = query.filter(json_list_contains("hashtags", wanted))
    return query


def find_feed_posts(
    platform=None,
    hashtag=None,
    include_inactive=False,
    sort_by="postedAt",
    sort_order="desc",
    offset: int = 0,
    limit: int = settings.DEFAULT_PAGE_LIMIT,
) -> Listing:
    query = feed_query(platform, hashtag, include_inactive)
    return fetch_page(query, order_key(SORT_FIELDS[sort_by], sort_order), offset, limit)


def popular_hashtags(limit: int):
    counts = Counter(tag for post in each_record(feed_query()) for tag in post.hashtag_list)
    return [{"hashtag": tag, "count": count} for tag, count in counts.most_common(limit)]


def platform_counts():
    return [
        {"platform": platform.value, "count": feed_query(platform=platform.value).limit(1).all().total}
        for platform in Platform
    ]

"""Social feed endpoints: public browsing and admin management, including sync."""

import json
from typing import Literal

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from content.api.presenters import present_feed_post
from content.api.schemas import FeedPostRequest, PlatformParam, SyncFeedRequest, UpdateFeedPostRequest
from content.feed.management import CreateFeedPost, DeleteFeedPost, SyncFeedPosts, UpdateFeedPost
from content.feed.post import FeedPost
from content.feed.queries import find_feed_posts, platform_counts, popular_hashtags
from shared.api.dependencies import admin_principal
from shared.api.envelope import created, ok, paginated
from shared.api.pagination import PageParams, page_params
from shared.auth import Principal

router = APIRouter(prefix="/api/feed", tags=["feed"])
admin_router = APIRouter(prefix="/admin/feed", tags=["admin: feed"])

SortOrder = Literal["asc", "desc"]
FeedSortBy = Literal["postedAt", "createdAt", "likes"]


@router.get("")
async def list_feed(
    platform: PlatformParam | None = Query(None),
    hashtag: str | None = Query(None),
    sort_by: FeedSortBy = Query("postedAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    page: PageParams = Depends(page_params),
):
    listing = find_feed_posts(
        platform=platform.value if platform else None,
        hashtag=hashtag,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=page.offset,
        limit=page.limit,
    )
    items = [present_feed_post(p) for p in listing.items]
    return paginated("posts", items, page.meta(listing.total))


@router.get("/hashtags")
async def list_hashtags(limit: int = Query(20, ge=1, le=100)):
    return ok({"hashtags": popular_hashtags(limit)})


@router.get("/platforms")
async def list_platforms():
    return ok({"platforms": platform_counts()})


@router.get("/{post_id}")
async def get_feed_post(post_id: str):
    return ok(present_feed_post(current_domain.repository_for(FeedPost).get_active_post(post_id)))


# --- Admin ---


@admin_router.get("")
async def admin_list_feed(
    platform: PlatformParam | None = Query(None),
    include_inactive: bool = Query(False, alias="includeInactive"),
    sort_by: FeedSortBy = Query("postedAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(admin_principal),
):
    listing = find_feed_posts(
        platform=platform.value if platform else None,
        include_inactive=include_inactive,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=page.offset,
        limit=page.limit,
    )
    items = [present_feed_post(p) for p in listing.items]
    return paginated("posts", items, page.meta(listing.total))


@admin_router.post("/sync")
async def sync_feed(body: SyncFeedRequest, principal: Principal = Depends(admin_principal)):
    entries = [entry.model_dump(mode="json", exclude_unset=True) for entry in body.posts]
    result = current_domain.process(SyncFeedPosts(posts=json.dumps(entries)), asynchronous=False)
    return ok(result, message="Feed synced")


@admin_router.get("/{post_id}")
async def admin_get_feed_post(post_id: str, principal: Principal = Depends(admin_principal)):
    return ok(present_feed_post(current_domain.repository_for(FeedPost).get_post(post_id)))


@admin_router.post("", status_code=201)
async def create_feed_post(body: FeedPostRequest, principal: Principal = Depends(admin_principal)):
    command = CreateFeedPost(
        title=body.title,
        content=body.content,
        platform=body.platform.value,
        platform_post_id=body.platform_post_id,
        post_url=body.post_url,
        image_url=body.image_url,
        hashtags=json.dumps(body.hashtags),
        likes=body.likes,
        posted_at=body.posted_at,
        is_active=body.is_active,
    )
    post_id = current_domain.process(command, asynchronous=False)
    post = current_domain.repository_for(FeedPost).get_post(post_id)
    return created(present_feed_post(post), message="Feed post created")


@admin_router.put("/{post_id}")
async def update_feed_post(
    post_id: str,
    body: UpdateFeedPostRequest,
    principal: Principal = Depends(admin_principal),
):
    command = UpdateFeedPost(post_id=post_id, changes=json.dumps(body.changes()))
    current_domain.process(command, asynchronous=False)
    post = current_domain.repository_for(FeedPost).get_post(post_id)
    return ok(present_feed_post(post), message="Feed post updated")


@admin_router.delete("/{post_id}")
async def delete_feed_post(post_id: str, principal: Principal = Depends(admin_principal)):
    current_domain.process(DeleteFeedPost(post_id=post_id), asynchronous=False)
    return ok(None, message="Feed post deleted")

"""Blog endpoints: the public reading surface and admin authoring."""

import json
from typing import Literal

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from content.api.presenters import present_blog_post, present_comment
from content.api.schemas import AddCommentRequest, CreateBlogPostRequest, UpdateBlogPostRequest
from content.blog.comment import BlogComment
from content.blog.management import AddComment, CreateBlogPost, DeleteBlogPost, UpdateBlogPost
from content.blog.post import BlogPost, PostStatus
from content.blog.queries import category_counts, find_posts, post_query, tag_counts
from content.blog.views import record_post_view
from shared.api.dependencies import admin_principal, current_principal
from shared.api.envelope import created, ok, paginated
from shared.api.pagination import PageParams, page_params
from shared.auth import Principal
from shared.listing import fetch_page

router = APIRouter(prefix="/api/blog", tags=["blog"])
admin_router = APIRouter(prefix="/admin/blog", tags=["admin: blog"])

SortOrder = Literal["asc", "desc"]
PostSortBy = Literal["publishedAt", "createdAt", "title", "views"]


# --- Public ---


@router.get("")
async def list_posts(
    search: str | None = Query(None),
    category: str | None = Query(None),
    tag: str | None = Query(None),
    sort_by: PostSortBy = Query("publishedAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    page: PageParams = Depends(page_params),
):
    query = post_query(search=search, category=category, tag=tag)
    listing = find_posts(query, sort_by, sort_order, page.offset, page.limit)
    items = [present_blog_post(p, include_content=False) for p in listing.items]
    return paginated("posts", items, page.meta(listing.total))


@router.get("/featured")
async def featured_posts(limit: int = Query(5, ge=1, le=50)):
    posts = find_posts(post_query(featured=True), limit=limit).items
    return ok({"posts": [present_blog_post(p, include_content=False) for p in posts]})


@router.get("/recent")
async def recent_posts(limit: int = Query(5, ge=1, le=50)):
    posts = find_posts(post_query(), limit=limit).items
    return ok({"posts": [present_blog_post(p, include_content=False) for p in posts]})


@router.get("/categories")
async def blog_categories():
    return ok({"categories": category_counts()})


@router.get("/tags")
async def blog_tags():
    return ok({"tags": tag_counts()})


@router.get("/{id_or_slug}")
async def get_post(id_or_slug: str):
    post = current_domain.repository_for(BlogPost).find_published(id_or_slug)
    record_post_view(post)
    return ok(present_blog_post(post))


@router.get("/{id_or_slug}/comments")
async def list_comments(id_or_slug: str, page: PageParams = Depends(page_params)):
    post = current_domain.repository_for(BlogPost).find_published(id_or_slug)
    query = current_domain.repository_for(BlogComment).for_post(post.id)
    listing = fetch_page(query, "created_at", page.offset, page.limit)
    items = [present_comment(c) for c in listing.items]
    return paginated("comments", items, page.meta(listing.total))


@router.post("/{id_or_slug}/comments", status_code=201)
async def add_comment(
    id_or_slug: str,
    body: AddCommentRequest,
    principal: Principal = Depends(current_principal),
):
    post = current_domain.repository_for(BlogPost).find_published(id_or_slug)
    command = AddComment(
        post_id=post.id,
        user_id=principal.user_id,
        author_name=body.author_name or principal.email,
        content=body.content,
    )
    comment_id = current_domain.process(command, asynchronous=False)
    comment = current_domain.repository_for(BlogComment).get(comment_id)
    return created(present_comment(comment), message="Comment added")


# --- Admin ---


@admin_router.get("")
async def admin_list_posts(
    status: Literal["all", "DRAFT", "PUBLISHED", "ARCHIVED"] = Query("all"),
    search: str | None = Query(None),
    sort_by: PostSortBy = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(admin_principal),
):
    query = post_query(status=None if status == "all" else PostStatus(status).value, search=search)
    listing = find_posts(query, sort_by, sort_order, page.offset, page.limit)
    items = [present_blog_post(p, include_content=False) for p in listing.items]
    return paginated("posts", items, page.meta(listing.total))


@admin_router.get("/{post_id}")
async def admin_get_post(post_id: str, principal: Principal = Depends(admin_principal)):
    return ok(present_blog_post(current_domain.repository_for(BlogPost).get_post(post_id)))


@admin_router.post("", status_code=201)
async def create_post(body: CreateBlogPostRequest, principal: Principal = Depends(admin_principal)):
    command = CreateBlogPost(
        title=body.title,
        slug=body.slug,
        excerpt=body.excerpt,
        content=body.content,
        cover_image_url=body.cover_image_url,
        category=body.category,
        tags=json.dumps(body.tags),
        author_id=principal.user_id,
        status=body.status.value,
        is_featured=body.is_featured,
    )
    post_id = current_domain.process(command, asynchronous=False)
    post = current_domain.repository_for(BlogPost).get_post(post_id)
    return created(present_blog_post(post), message="Blog post created")


@admin_router.put("/{post_id}")
async def update_post(post_id: str, body: UpdateBlogPostRequest, principal: Principal = Depends(admin_principal)):
    command = UpdateBlogPost(post_id=post_id, changes=json.dumps(body.changes()))
    current_domain.process(command, asynchronous=False)
    post = current_domain.repository_for(BlogPost).get_post(post_id)
    return ok(present_blog_post(post), message="Blog post updated")


@admin_router.delete("/{post_id}")
async def delete_post(post_id: str, principal: Principal = Depends(admin_principal)):
    current_domain.process(DeleteBlogPost(post_id=post_id), asynchronous=False)
    return ok(None, message="Blog post deleted")

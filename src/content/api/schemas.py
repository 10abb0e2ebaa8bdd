"""Pydantic request schemas for the Content API."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from shared.api.schemas import CamelModel

# --- Blog ---


class PostStatusParam(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class CreateBlogPostRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Spring lookbook",
                    "content": "Ten outfits for the new season...",
                    "category": "Style",
                    "tags": ["spring", "lookbook"],
                    "status": "PUBLISHED",
                }
            ]
        }
    }

    title: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=280)
    excerpt: str | None = Field(None, max_length=500)
    content: str = Field(..., min_length=1)
    cover_image_url: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    status: PostStatusParam = PostStatusParam.DRAFT
    is_featured: bool = False


class UpdateBlogPostRequest(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=280)
    excerpt: str | None = Field(None, max_length=500)
    content: str | None = Field(None, min_length=1)
    cover_image_url: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=100)
    tags: list[str] | None = None
    status: PostStatusParam | None = None
    is_featured: bool | None = None


class AddCommentRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)
    author_name: str | None = Field(None, max_length=255)


# --- Feed ---


class PlatformParam(str, Enum):
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"


class FeedPostRequest(CamelModel):
    title: str | None = Field(None, max_length=255)
    content: str | None = None
    platform: PlatformParam
    platform_post_id: str = Field(..., min_length=1, max_length=255)
    post_url: str | None = Field(None, max_length=500)
    image_url: str | None = Field(None, max_length=500)
    hashtags: list[str] = Field(default_factory=list)
    likes: int = Field(0, ge=0)
    posted_at: datetime | None = None
    is_active: bool = True


class UpdateFeedPostRequest(CamelModel):
    title: str | None = Field(None, max_length=255)
    content: str | None = None
    platform: PlatformParam | None = None
    platform_post_id: str | None = Field(None, min_length=1, max_length=255)
    post_url: str | None = Field(None, max_length=500)
    image_url: str | None = Field(None, max_length=500)
    hashtags: list[str] | None = None
    likes: int | None = Field(None, ge=0)
    posted_at: datetime | None = None
    is_active: bool | None = None


class SyncFeedRequest(CamelModel):
    posts: list[FeedPostRequest] = Field(..., min_length=1)

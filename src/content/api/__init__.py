"""Content domain API package."""

from content.api.blog import admin_router as admin_blog_router
from content.api.blog import router as blog_router
from content.api.feed import admin_router as admin_feed_router
from content.api.feed import router as feed_router

routers = [
    blog_router,
    feed_router,
    admin_blog_router,
    admin_feed_router,
]

__all__ = ["routers"]

"""Feed management: commands and handler, including bulk sync from a platform export."""

import json
from datetime import datetime

from protean import handle
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from content.domain import content
from content.feed.post import FeedPost
from shared.errors import DuplicateResource
from shared.logging import get_logger

logger = get_logger(__name__)


@content.command(part_of="FeedPost")
class CreateFeedPost:
    title = String(max_length=255)
    content = Text()
    platform = String(required=True, max_length=20)
    platform_post_id = String(required=True, max_length=255)
    post_url = String(max_length=500)
    image_url = String(max_length=500)
    hashtags = Text()  # JSON array
    likes = Integer(default=0)
    posted_at = DateTime()
    is_active = Boolean(default=True)


@content.command(part_of="FeedPost")
class UpdateFeedPost:
    post_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object; posted_at as ISO-8601


@content.command(part_of="FeedPost")
class DeleteFeedPost:
    post_id = Identifier(required=True)


@content.command(part_of="FeedPost")
class SyncFeedPosts:
    posts = Text(required=True)  # JSON array of feed post objects


def _check_platform_id_free(platform_post_id, post_id=None):
    existing = current_domain.repository_for(FeedPost).find_by_platform_post_id(platform_post_id)
    if existing is not None and str(existing.id) != str(post_id):
        raise DuplicateResource(f"Feed post with platform post id {platform_post_id} already exists")


def _parse_dates(data):
    if data.get("posted_at"):
        data["posted_at"] = datetime.fromisoformat(data["posted_at"])
    return data


@content.command_handler(part_of=FeedPost)
class ManageFeedHandler:
    @handle(CreateFeedPost)
    def create_post(self, command):
        _check_platform_id_free(command.platform_post_id)

        post = FeedPost.mirror(
            platform=command.platform,
            platform_post_id=command.platform_post_id,
            hashtags=json.loads(command.hashtags) if command.hashtags else None,
            title=command.title,
            content=command.content,
            post_url=command.post_url,
            image_url=command.image_url,
            likes=command.likes,
            posted_at=command.posted_at,
            is_active=command.is_active,
        )
        current_domain.repository_for(FeedPost).add(post)

        logger.info("Feed post created", post_id=str(post.id), platform=post.platform)
        return str(post.id)

    @handle(UpdateFeedPost)
    def update_post(self, command):
        repo = current_domain.repository_for(FeedPost)
        post = repo.get_post(command.post_id)
        changes = _parse_dates(json.loads(command.changes))

        if changes.get("platform_post_id"):
            _check_platform_id_free(changes["platform_post_id"], post.id)

        post.update_details(**changes)
        repo.add(post)
        return str(post.id)

    @handle(DeleteFeedPost)
    def delete_post(self, command):
        repo = current_domain.repository_for(FeedPost)
        repo.delete_post(repo.get_post(command.post_id))

    @handle(SyncFeedPosts)
    def sync_posts(self, command):
        """Upsert by platform post id. Returns ``{"created": n, "updated": m}``."""
        repo = current_domain.repository_for(FeedPost)
        created = updated = 0

        for entry in json.loads(command.posts):
            data = _parse_dates(dict(entry))
            existing = repo.find_by_platform_post_id(data["platform_post_id"])
            if existing is None:
                repo.add(FeedPost.mirror(**data))
                created += 1
            else:
                data.pop("platform_post_id")
                existing.update_details(**data)
                repo.add(existing)
                updated += 1

        logger.info("Feed synced", created=created, updated=updated)
        return {"created": created, "updated": updated}

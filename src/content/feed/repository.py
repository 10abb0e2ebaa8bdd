"""Repository for FeedPost aggregates."""

from protean.exceptions import ObjectNotFoundError

from content.domain import content
from content.feed.post import FeedPost
from shared.errors import NotFoundError


@content.repository(part_of=FeedPost)
class FeedPostRepository:
    def get_post(self, post_id) -> FeedPost:
        try:
            return self.get(post_id)
        except ObjectNotFoundError:
            raise NotFoundError("Feed post not found") from None

    def get_active_post(self, post_id) -> FeedPost:
        post = self.get_post(post_id)
        if not post.is_active:
            raise NotFoundError("Feed post not found")
        return post

    def find_by_platform_post_id(self, platform_post_id: str) -> FeedPost | None:
        return self._dao.query.filter(platform_post_id=platform_post_id).all().first

    def matching(self, *criteria, **filters):
        return self._dao.query.filter(*criteria, **filters)

    def delete_post(self, post: FeedPost) -> None:
        self._dao.delete(post)

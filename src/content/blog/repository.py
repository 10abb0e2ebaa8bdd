"""Repositories for blog posts and their comments."""

from protean.exceptions import ObjectNotFoundError

from content.blog.comment import BlogComment
from content.blog.post import BlogPost
from content.domain import content
from shared.errors import NotFoundError
from shared.listing import each_record


@content.repository(part_of=BlogPost)
class BlogPostRepository:
    def get_post(self, post_id) -> BlogPost:
        try:
            return self.get(post_id)
        except ObjectNotFoundError:
            raise NotFoundError("Blog post not found") from None

    def find_by_slug(self, slug: str) -> BlogPost | None:
        return self._dao.query.filter(slug=slug).all().first

    def find_published(self, id_or_slug: str) -> BlogPost:
        """Look a post up by id, then by slug. Unpublished posts read as missing."""
        post = self.find_by_slug(id_or_slug)
        if post is None:
            try:
                post = self.get(id_or_slug)
            except ObjectNotFoundError:
                post = None
        if post is None or not post.is_published:
            raise NotFoundError("Blog post not found")
        return post

    def matching(self, *criteria, **filters):
        return self._dao.query.filter(*criteria, **filters)

    def delete_post(self, post: BlogPost) -> None:
        self._dao.delete(post)


@content.repository(part_of=BlogComment)
class BlogCommentRepository:
    def for_post(self, post_id):
        return self._dao.query.filter(post_id=str(post_id))

    def delete_for_post(self, post_id) -> int:
        comments = list(each_record(self.for_post(post_id)))
        for comment in comments:
            self._dao.delete(comment)
        return len(comments)

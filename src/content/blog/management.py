"""Blog management: commands and handlers for posts and comments."""

import json

from protean import handle
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from content.blog.comment import BlogComment
from content.blog.post import BlogPost
from content.domain import content
from shared.errors import DuplicateResource, NotFoundError
from shared.logging import get_logger
from shared.slugs import slugify

logger = get_logger(__name__)


@content.command(part_of="BlogPost")
class CreateBlogPost:
    title = String(required=True, max_length=255)
    slug = String(max_length=280)
    excerpt = String(max_length=500)
    content = Text(required=True)
    cover_image_url = String(max_length=500)
    category = String(max_length=100)
    tags = Text()  # JSON array
    author_id = Identifier(required=True)
    status = String(max_length=20, default="DRAFT")
    is_featured = Boolean(default=False)


@content.command(part_of="BlogPost")
class UpdateBlogPost:
    post_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object of changed fields


@content.command(part_of="BlogPost")
class DeleteBlogPost:
    post_id = Identifier(required=True)


@content.command(part_of="BlogComment")
class AddComment:
    post_id = Identifier(required=True)
    user_id = Identifier(required=True)
    author_name = String(max_length=255)
    content = Text(required=True)


def _check_slug_free(slug, post_id=None):
    existing = current_domain.repository_for(BlogPost).find_by_slug(slug)
    if existing is not None and str(existing.id) != str(post_id):
        raise DuplicateResource("Blog post slug already exists")


@content.command_handler(part_of=BlogPost)
class ManageBlogPostsHandler:
    @handle(CreateBlogPost)
    def create_post(self, command):
        slug = command.slug or slugify(command.title)
        _check_slug_free(slug)

        post = BlogPost.write(
            title=command.title,
            slug=slug,
            content=command.content,
            author_id=command.author_id,
            status=command.status,
            tags=json.loads(command.tags) if command.tags else None,
            excerpt=command.excerpt,
            cover_image_url=command.cover_image_url,
            category=command.category,
            is_featured=command.is_featured,
        )
        current_domain.repository_for(BlogPost).add(post)

        logger.info("Blog post created", post_id=str(post.id), slug=slug, status=post.status)
        return str(post.id)

    @handle(UpdateBlogPost)
    def update_post(self, command):
        repo = current_domain.repository_for(BlogPost)
        post = repo.get_post(command.post_id)
        changes = json.loads(command.changes)

        if changes.get("slug") and changes["slug"] != post.slug:
            _check_slug_free(changes["slug"], post.id)

        post.update_details(**changes)
        repo.add(post)
        return str(post.id)

    @handle(DeleteBlogPost)
    def delete_post(self, command):
        repo = current_domain.repository_for(BlogPost)
        post = repo.get_post(command.post_id)

        removed = current_domain.repository_for(BlogComment).delete_for_post(post.id)
        repo.delete_post(post)

        logger.info("Blog post deleted", post_id=str(post.id), comments_removed=removed)


@content.command_handler(part_of=BlogComment)
class CommentsHandler:
    @handle(AddComment)
    def add_comment(self, command):
        post = current_domain.repository_for(BlogPost).get_post(command.post_id)
        if not post.is_published:
            raise NotFoundError("Blog post not found")

        comment = BlogComment(
            post_id=post.id,
            user_id=command.user_id,
            author_name=command.author_name,
            content=command.content,
        )
        current_domain.repository_for(BlogComment).add(comment)
        return str(comment.id)

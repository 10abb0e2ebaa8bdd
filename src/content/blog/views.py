"""View counting on the public blog read path."""

from protean.exceptions import ExpectedVersionError, InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from content.blog.post import BlogPost
from shared.logging import get_logger

logger = get_logger(__name__)


def record_post_view(post: BlogPost) -> None:
    # Counted on a fresh copy; a lost race drops the view
    repo = current_domain.repository_for(BlogPost)
    try:
        fresh = repo.get(post.id)
        fresh.record_view()
        repo.add(fresh)
    except ExpectedVersionError:
        logger.info("Post view dropped after a concurrent update", post_id=str(post.id))
        return
    except (ObjectNotFoundError, ValidationError, InvalidOperationError) as exc:
        logger.warning("Could not record post view", post_id=str(post.id), error=str(exc))
        return

    post.views = fresh.views

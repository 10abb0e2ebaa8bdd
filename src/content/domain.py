"""Content bounded context: blog posts with comments, and the social media feed."""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

content = Domain(name="content")

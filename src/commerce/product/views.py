"""View counting on the public product read path."""

from protean.exceptions import ExpectedVersionError, InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from commerce.product.product import Product
from shared.logging import get_logger

logger = get_logger(__name__)


def record_product_view(product: Product) -> None:
    """Bump the product's view count. A failure is logged and ignored.

    The count is applied to a freshly loaded copy, so a read copy that went
    stale under a concurrent write does not clash with it. If the fresh copy
    loses a race as well, the view is dropped.
    """
    repo = current_domain.repository_for(Product)
    try:
        fresh = repo.get(product.id)
        fresh.record_view()
        repo.add(fresh)
    except ExpectedVersionError:
        logger.info("Product view dropped after a concurrent update", product_id=str(product.id))
        return
    except (ObjectNotFoundError, ValidationError, InvalidOperationError) as exc:
        logger.warning("Could not record product view", product_id=str(product.id), error=str(exc))
        return

    product.view_count = fresh.view_count

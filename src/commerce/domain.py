"""Commerce bounded context: accounts, addresses, catalog, cart, discounts and orders.

Everything checkout touches lives in this one domain so that placing an
order (cart, product stock, discount usage, the order itself) commits or
rolls back as a single unit of work.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

commerce = Domain(name="commerce")

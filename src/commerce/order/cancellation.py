"""Order cancellation: command, handler and stock restoration."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.order.order import Order
from commerce.product.product import Product
from shared.errors import NotFoundError
from shared.logging import get_logger

logger = get_logger(__name__)


@commerce.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(max_length=500)
    user_id = Identifier()  # Empty when an admin cancels


def restore_stock(order):
    """Put every line's quantity back on its product or variant."""
    repo = current_domain.repository_for(Product)
    products = {}

    for item in order.items:
        key = str(item.product_id)
        if key not in products:
            try:
                products[key] = repo.get_product(item.product_id)
            except NotFoundError:
                logger.warning("Product gone, stock not restored", order_id=str(order.id), product_id=key)
                products[key] = None
        product = products[key]
        if product is None:
            continue

        if item.variant_id and product.find_variant(item.variant_id) is None:
            logger.warning("Variant gone, stock not restored", order_id=str(order.id), variant_id=str(item.variant_id))
            continue
        product.restock(item.quantity, item.variant_id)

    for product in products.values():
        if product is not None:
            repo.add(product)


def cancel_order(order, reason):
    order.cancel(reason)
    restore_stock(order)
    current_domain.repository_for(Order).add(order)

    logger.info("Order cancelled", order_id=str(order.id), order_number=order.order_number, reason=reason)


@commerce.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel(self, command):
        order = current_domain.repository_for(Order).get_visible_order(command.order_id, command.user_id)
        cancel_order(order, command.reason)
        return str(order.id)

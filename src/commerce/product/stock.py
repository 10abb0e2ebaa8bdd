"""Manual stock corrections for a product or one of its variants."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.product.product import Product
from shared.logging import get_logger

logger = get_logger(__name__)


@commerce.command(part_of="Product")
class AdjustStock:
    product_id: Identifier(required=True)
    variant_id: Identifier()
    quantity_change: Integer(required=True)
    reason: String(max_length=255)


@commerce.command_handler(part_of=Product)
class AdjustStockHandler:
    @handle(AdjustStock)
    def adjust_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        new_stock = product.adjust_stock(command.quantity_change, command.variant_id)
        repo.add(product)

        logger.info(
            "Stock adjusted",
            product_id=str(product.id),
            variant_id=str(command.variant_id) if command.variant_id else None,
            change=command.quantity_change,
            stock=new_stock,
            reason=command.reason,
        )
        return new_stock

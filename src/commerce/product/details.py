"""Product detail changes and soft deletion."""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.product.creation import ensure_category_exists, ensure_sku_available, ensure_slug_available
from commerce.product.product import Product
from commerce.shared.sku import normalize_sku
from shared.logging import get_logger

logger = get_logger(__name__)


@commerce.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    changes: Text(required=True)  # JSON object of changed fields


@commerce.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@commerce.command_handler(part_of=Product)
class ProductDetailsHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        changes = json.loads(command.changes)

        if changes.get("sku"):
            changes["sku"] = normalize_sku(changes["sku"])
            if changes["sku"] != product.sku:
                ensure_sku_available(changes["sku"], product_id=product.id)
        if changes.get("slug") and changes["slug"] != product.slug:
            ensure_slug_available(changes["slug"], product.id)
        if changes.get("category_id"):
            ensure_category_exists(changes["category_id"])

        product.update_details(**changes)
        repo.add(product)
        return str(product.id)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        product.deactivate()
        repo.add(product)

        logger.info("Product deactivated", product_id=str(product.id))

"""Wholesale cart replacement, e.g. from a client-side cart after sign-in."""

import json
from collections import OrderedDict

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from commerce.cart.cart import Cart
from commerce.cart.items import purchasable_product
from commerce.domain import commerce
from shared.logging import get_logger

logger = get_logger(__name__)


@commerce.command(part_of="Cart")
class SyncCart:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, variant_id, quantity}


def _merged_lines(items):
    lines = OrderedDict()
    for index, entry in enumerate(items):
        quantity = entry.get("quantity")
        if not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({f"items.{index}.quantity": ["Quantity must be at least 1"]})

        key = (str(entry["product_id"]), str(entry.get("variant_id") or "") or None)
        lines[key] = lines.get(key, 0) + quantity
    return lines


@commerce.command_handler(part_of=Cart)
class SyncCartHandler:
    @handle(SyncCart)
    def sync_cart(self, command):
        lines = _merged_lines(json.loads(command.items))

        # Every line is checked before the cart changes
        for (product_id, variant_id), quantity in lines.items():
            product = purchasable_product(product_id, variant_id)
            product.ensure_stock(quantity, variant_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.for_user_or_new(command.user_id)
        cart.replace_items([(product_id, variant_id, quantity) for (product_id, variant_id), quantity in lines.items()])
        repo.add(cart)

        logger.info("Cart synced", user_id=str(command.user_id), lines=len(lines))
        return len(lines)

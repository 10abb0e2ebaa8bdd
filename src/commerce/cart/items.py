"""Cart line management: commands and handler.

Stock is checked against the merged quantity of a line, so two separate
adds cannot together exceed what is on hand.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from commerce.cart.cart import Cart
from commerce.domain import commerce
from commerce.product.product import Product
from shared.errors import NotFoundError
from shared.logging import get_logger

logger = get_logger(__name__)


@commerce.command(part_of="Cart")
class AddCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True, min_value=1)


@commerce.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@commerce.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@commerce.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def purchasable_product(product_id, variant_id=None) -> Product:
    """Load an active product, and check the variant when one is named."""
    product = current_domain.repository_for(Product).get_active_product(product_id)
    if variant_id and not product.is_purchasable(variant_id):
        raise NotFoundError("Variant not found")
    return product


@commerce.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddCartItem)
    def add_item(self, command):
        product = purchasable_product(command.product_id, command.variant_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.for_user_or_new(command.user_id)

        existing = cart.find_line(command.product_id, command.variant_id)
        requested = command.quantity + (existing.quantity if existing else 0)
        product.ensure_stock(requested, command.variant_id)

        item, merged = cart.add_item(command.product_id, command.variant_id, command.quantity)
        repo.add(cart)

        logger.debug("Cart item added", user_id=str(command.user_id), item_id=str(item.id), merged=merged)
        return {"item_id": str(item.id), "merged": merged}

    @handle(UpdateCartItem)
    def update_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            raise NotFoundError("Cart item not found")

        item = cart.get_item(command.item_id)
        product = purchasable_product(item.product_id, item.variant_id)
        product.ensure_stock(command.quantity, item.variant_id)

        cart.update_item_quantity(command.item_id, command.quantity)
        repo.add(cart)
        return str(item.id)

    @handle(RemoveCartItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is not None and cart.remove_item(command.item_id):
            repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is not None and not cart.is_empty:
            cart.clear()
            repo.add(cart)

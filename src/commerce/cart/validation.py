"""Read-only cart checks and summaries."""

from enum import Enum

from protean.utils.globals import current_domain

from commerce.cart.cart import Cart
from commerce.product.product import Product
from shared.errors import NotFoundError


class CartIssue(Enum):
    PRODUCT_UNAVAILABLE = "PRODUCT_UNAVAILABLE"
    VARIANT_UNAVAILABLE = "VARIANT_UNAVAILABLE"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"


def _load_product(product_id):
    try:
        return current_domain.repository_for(Product).get_product(product_id)
    except NotFoundError:
        return None


def cart_lines(user_id):
    """Each cart line with its current product, or ``None`` where the product is gone."""
    cart = current_domain.repository_for(Cart).for_user(user_id)
    if cart is None:
        return []
    return [(item, _load_product(item.product_id)) for item in cart.items]


def line_issue(item, product):
    """The first problem with a cart line as ``(code, message)``, or None."""
    if product is None or not product.is_active:
        return CartIssue.PRODUCT_UNAVAILABLE, "Product is no longer available"

    if item.variant_id and not product.is_purchasable(item.variant_id):
        return CartIssue.VARIANT_UNAVAILABLE, "Variant is no longer available"

    available = product.available_stock(item.variant_id)
    if item.quantity > available:
        return (
            CartIssue.INSUFFICIENT_STOCK,
            f"Insufficient stock for {product.item_name(item.variant_id)}: "
            f"requested {item.quantity}, available {available}",
        )
    return None


def validate_cart(user_id) -> dict:
    issues = []
    for item, product in cart_lines(user_id):
        problem = line_issue(item, product)
        if problem is not None:
            code, message = problem
            issues.append({"item_id": str(item.id), "code": code.value, "message": message})
    return {"valid": not issues, "issues": issues}


def cart_summary(lines) -> dict:
    total_items = 0
    total_amount = 0.0
    for item, product in lines:
        total_items += item.quantity
        if product is not None and product.is_purchasable(item.variant_id):
            total_amount += product.unit_price(item.variant_id) * item.quantity
    return {"total_items": total_items, "total_amount": round(total_amount, 2)}


def cart_count(user_id) -> int:
    cart = current_domain.repository_for(Cart).for_user(user_id)
    return cart.total_quantity if cart else 0

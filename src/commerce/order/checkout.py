"""Checkout: turn a user's cart into an order.

Everything is read and checked first; stock, the discount, the order and
the cart are written only after every check has passed. The handler runs
in one unit of work, so a failure in any write rolls all of them back.
"""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from commerce.address.address import AddressBook
from commerce.cart.cart import Cart
from commerce.discount.discount import Discount
from commerce.domain import commerce
from commerce.order.numbering import next_order_number
from commerce.order.order import Order, OrderAddress
from commerce.product.product import Product
from shared.errors import EmptyCart, NotFoundError
from shared.logging import get_logger

logger = get_logger(__name__)


@commerce.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address_id = Identifier(required=True)
    billing_address_id = Identifier(required=True)
    payment_method = String(required=True, max_length=30)
    discount_code = String(max_length=50)
    notes = Text()


def _resolve_address(book, address_id):
    address = book.find(address_id) if book is not None else None
    if address is None:
        raise NotFoundError("Address not found")
    return address


def _price_lines(cart):
    """Load each product once, check availability and stock, and price every line."""
    product_repo = current_domain.repository_for(Product)
    products = {}
    lines = []

    for item in cart.items:
        key = str(item.product_id)
        if key not in products:
            products[key] = product_repo.get_active_product(item.product_id)
        product = products[key]

        if item.variant_id and not product.is_purchasable(item.variant_id):
            raise NotFoundError("Variant not found")
        product.ensure_stock(item.quantity, item.variant_id)

        variant = product.get_variant(item.variant_id) if item.variant_id else None
        lines.append(
            {
                "product_id": str(product.id),
                "variant_id": str(variant.id) if variant else None,
                "sku": variant.sku if variant else product.sku,
                "name": product.item_name(item.variant_id),
                "unit_price": product.unit_price(item.variant_id),
                "quantity": item.quantity,
            }
        )

    return products, lines


@commerce.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(command.user_id)
        if cart is None or cart.is_empty:
            raise EmptyCart()

        book = current_domain.repository_for(AddressBook).for_user(command.user_id)
        shipping = _resolve_address(book, command.shipping_address_id)
        billing = _resolve_address(book, command.billing_address_id)

        products, lines = _price_lines(cart)

        discount = None
        discount_amount = 0.0
        if command.discount_code:
            subtotal = sum(line["unit_price"] * line["quantity"] for line in lines)
            discount, discount_amount = current_domain.repository_for(Discount).redeemable(
                command.discount_code, round(subtotal, 2)
            )

        order_repo = current_domain.repository_for(Order)
        order = Order.place(
            order_number=next_order_number(order_repo),
            user_id=command.user_id,
            lines=lines,
            payment_method=command.payment_method,
            shipping_address_id=shipping.id,
            billing_address_id=billing.id,
            shipping_address=OrderAddress.from_address(shipping),
            billing_address=OrderAddress.from_address(billing),
            discount_code=discount.code if discount else None,
            discount_amount=discount_amount,
            notes=command.notes,
        )

        # Writes start here
        product_repo = current_domain.repository_for(Product)
        for item in cart.items:
            products[str(item.product_id)].reserve_stock(item.quantity, item.variant_id)
        for product in products.values():
            product_repo.add(product)

        if discount is not None:
            discount.record_use()
            current_domain.repository_for(Discount).add(discount)

        order_repo.add(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(command.user_id),
            total=order.total,
        )
        return str(order.id)

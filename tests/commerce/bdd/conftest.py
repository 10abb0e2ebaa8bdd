"""Shared BDD fixtures and step definitions for the commerce domain."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when

from commerce.cart.cart import Cart
from commerce.order.cancellation import CancelOrder
from commerce.order.order import Order
from commerce.product.product import Product
from shared.errors import DomainError


@pytest.fixture()
def catalog():
    """Products created by the scenario, by name."""
    return {}


@pytest.fixture()
def outcome():
    return {"order_id": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def a_product(make_product, catalog, name, price, stock):
    catalog[name] = make_product(name=name, price=price, stock=stock)


@given("the shopper has a shipping address")
def shipping_address(shopper, add_address):
    add_address(shopper)


@given(parsers.cfparse('the shopper adds {quantity:d} of "{name}" to the cart'))
@when(parsers.cfparse('the shopper adds {quantity:d} of "{name}" to the cart'))
def add_to_cart_step(shopper, add_to_cart, catalog, quantity, name):
    add_to_cart(shopper, catalog[name], quantity)


@given("the shopper checks out")
@when("the shopper checks out")
def check_out(shopper, checkout, outcome):
    try:
        outcome["order_id"] = checkout(shopper)
    except DomainError as exc:
        outcome["error"] = exc


@when("the shopper cancels the order")
def cancel(shopper, outcome):
    current_domain.process(CancelOrder(order_id=outcome["order_id"], user_id=shopper.id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {lines:d} line with quantity {quantity:d}"))
def cart_line(shopper, lines, quantity):
    cart = current_domain.repository_for(Cart).for_user(shopper.id)
    assert len(cart.items) == lines
    assert cart.items[0].quantity == quantity


@then(parsers.cfparse("the order total is {total:f}"))
def order_total(outcome, total):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).total == pytest.approx(total)


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock(catalog, name, stock):
    assert current_domain.repository_for(Product).get(catalog[name].id).stock == stock


@then("the cart is empty")
def cart_is_empty(shopper):
    assert current_domain.repository_for(Cart).for_user(shopper.id).is_empty


@then(parsers.cfparse('the checkout fails with "{message}"'))
def checkout_fails(outcome, message):
    assert outcome["error"] is not None
    assert outcome["error"].message == message


@then("no order exists")
def no_order():
    assert current_domain.repository_for(Order).matching().all().total == 0


@then(parsers.cfparse('the order is "{status}"'))
def order_status(outcome, status):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).status == status

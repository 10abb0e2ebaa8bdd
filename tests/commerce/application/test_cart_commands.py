"""Application tests for cart commands via domain.process()."""

import json

import pytest
from protean import current_domain

from commerce.cart.cart import Cart
from commerce.cart.items import ClearCart, RemoveCartItem, UpdateCartItem
from commerce.cart.sync import SyncCart
from commerce.cart.validation import cart_count, validate_cart
from commerce.product.stock import AdjustStock
from shared.errors import InsufficientStock, NotFoundError


def _cart(user):
    return current_domain.repository_for(Cart).for_user(user.id)


class TestAddCartItem:
    def test_first_add_creates_cart(self, shopper, make_product, add_to_cart):
        product = make_product()
        result = add_to_cart(shopper, product, 2)

        assert result["merged"] is False
        assert _cart(shopper).total_quantity == 2

    def test_adding_again_merges_quantities(self, shopper, make_product, add_to_cart):
        product = make_product()
        add_to_cart(shopper, product, 2)
        result = add_to_cart(shopper, product, 1)

        cart = _cart(shopper)
        assert result["merged"] is True
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_merged_quantity_is_checked_against_stock(self, shopper, make_product, add_to_cart):
        product = make_product(stock=3)
        add_to_cart(shopper, product, 2)

        with pytest.raises(InsufficientStock):
            add_to_cart(shopper, product, 2)
        assert _cart(shopper).items[0].quantity == 2

    def test_inactive_product_cannot_be_added(self, shopper, make_product, add_to_cart):
        product = make_product(is_active=False)
        with pytest.raises(NotFoundError):
            add_to_cart(shopper, product, 1)

    def test_variant_line(self, shopper, make_product, add_to_cart):
        product = make_product(variants=[{"sku": "VAR-0001", "name": "Large", "stock": 4}])
        variant = product.variants[0]

        add_to_cart(shopper, product, 1, variant_id=variant.id)
        add_to_cart(shopper, product, 1)

        assert len(_cart(shopper).items) == 2
        assert cart_count(shopper.id) == 2


class TestUpdateRemoveClear:
    def test_update_quantity(self, shopper, make_product, add_to_cart):
        product = make_product()
        item_id = add_to_cart(shopper, product, 1)["item_id"]

        current_domain.process(UpdateCartItem(user_id=shopper.id, item_id=item_id, quantity=5), asynchronous=False)

        assert _cart(shopper).items[0].quantity == 5

    def test_update_over_stock(self, shopper, make_product, add_to_cart):
        product = make_product(stock=2)
        item_id = add_to_cart(shopper, product, 1)["item_id"]

        with pytest.raises(InsufficientStock):
            current_domain.process(UpdateCartItem(user_id=shopper.id, item_id=item_id, quantity=3), asynchronous=False)

    def test_remove_and_clear(self, shopper, make_product, add_to_cart):
        first = add_to_cart(shopper, make_product(), 1)["item_id"]
        add_to_cart(shopper, make_product(), 1)

        current_domain.process(RemoveCartItem(user_id=shopper.id, item_id=first), asynchronous=False)
        assert len(_cart(shopper).items) == 1

        current_domain.process(ClearCart(user_id=shopper.id), asynchronous=False)
        assert _cart(shopper).is_empty


class TestSyncCart:
    def test_sync_replaces_and_merges_duplicates(self, shopper, make_product, add_to_cart):
        old = make_product()
        new = make_product()
        add_to_cart(shopper, old, 1)

        items = [
            {"product_id": str(new.id), "quantity": 1},
            {"product_id": str(new.id), "quantity": 2},
        ]
        current_domain.process(SyncCart(user_id=shopper.id, items=json.dumps(items)), asynchronous=False)

        cart = _cart(shopper)
        assert len(cart.items) == 1
        assert str(cart.items[0].product_id) == str(new.id)
        assert cart.items[0].quantity == 3

    def test_sync_is_all_or_nothing(self, shopper, make_product, add_to_cart):
        kept = make_product()
        scarce = make_product(stock=1)
        add_to_cart(shopper, kept, 1)

        items = [{"product_id": str(scarce.id), "quantity": 5}]
        with pytest.raises(InsufficientStock):
            current_domain.process(SyncCart(user_id=shopper.id, items=json.dumps(items)), asynchronous=False)

        cart = _cart(shopper)
        assert str(cart.items[0].product_id) == str(kept.id)


class TestValidateCart:
    def test_valid_cart(self, shopper, make_product, add_to_cart):
        add_to_cart(shopper, make_product(), 1)
        assert validate_cart(shopper.id) == {"valid": True, "issues": []}

    def test_reports_stock_that_ran_out(self, shopper, make_product, add_to_cart):
        product = make_product(stock=3)
        add_to_cart(shopper, product, 3)
        current_domain.process(AdjustStock(product_id=product.id, quantity_change=-2), asynchronous=False)

        result = validate_cart(shopper.id)
        assert result["valid"] is False
        assert result["issues"][0]["code"] == "INSUFFICIENT_STOCK"

"""Application tests for cancellation, status changes, shipping and payment."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from commerce.gateway import FakeGateway, reset_gateway, set_gateway
from commerce.order.cancellation import CancelOrder
from commerce.order.order import Order
from commerce.order.payment import ProcessPayment
from commerce.order.status import UpdateOrderStatus, UpdateShipping
from commerce.product.product import Product
from shared.errors import InvalidTransition, NotFoundError


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture()
def placed(shopper, make_product, add_to_cart, checkout):
    product = make_product(price=20.0, stock=5)
    add_to_cart(shopper, product, 2)
    order_id = checkout(shopper)
    return current_domain.repository_for(Order).get(order_id), product


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _advance(order_id, status):
    return current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


class TestCancellation:
    def test_cancel_restores_stock(self, shopper, placed):
        order, product = placed
        assert current_domain.repository_for(Product).get(product.id).stock == 3

        current_domain.process(
            CancelOrder(order_id=order.id, user_id=shopper.id, reason="Ordered by mistake"), asynchronous=False
        )

        assert _order(order.id).status == "CANCELLED"
        assert _order(order.id).cancellation_reason == "Ordered by mistake"
        assert current_domain.repository_for(Product).get(product.id).stock == 5

    def test_cannot_cancel_processing_order(self, shopper, placed):
        order, product = placed
        _advance(order.id, "PROCESSING")

        with pytest.raises(InvalidTransition):
            current_domain.process(CancelOrder(order_id=order.id, user_id=shopper.id), asynchronous=False)

        assert _order(order.id).status == "PROCESSING"
        assert current_domain.repository_for(Product).get(product.id).stock == 3

    def test_other_users_cannot_cancel(self, register, placed):
        order, _ = placed
        stranger = register(email="stranger@example.com")

        with pytest.raises(NotFoundError, match="Order not found"):
            current_domain.process(CancelOrder(order_id=order.id, user_id=stranger.id), asynchronous=False)

    def test_admin_cancels_through_status_update(self, placed):
        order, product = placed
        _advance(order.id, "CANCELLED")

        assert _order(order.id).cancellation_reason == "Cancelled by admin"
        assert current_domain.repository_for(Product).get(product.id).stock == 5


class TestStatusAndShipping:
    def test_walk_the_happy_path(self, placed):
        order, _ = placed
        for status in ("PROCESSING", "SHIPPED", "DELIVERED"):
            assert _advance(order.id, status) == status

        assert [entry.status for entry in sorted(_order(order.id).status_history, key=lambda e: e.changed_at)] == [
            "PENDING",
            "PROCESSING",
            "SHIPPED",
            "DELIVERED",
        ]

    def test_skipping_is_rejected(self, placed):
        order, _ = placed
        with pytest.raises(InvalidTransition):
            _advance(order.id, "DELIVERED")

    def test_update_shipping(self, placed):
        order, _ = placed
        current_domain.process(
            UpdateShipping(order_id=order.id, carrier="UPS", tracking_number="1Z999"), asynchronous=False
        )
        assert _order(order.id).tracking_number == "1Z999"


class TestPayment:
    def test_successful_payment(self, shopper, placed, gateway):
        order, _ = placed
        result = current_domain.process(
            ProcessPayment(order_id=order.id, user_id=shopper.id, payment_method="CARD", amount=40.0),
            asynchronous=False,
        )

        assert result["payment_status"] == "PAID"
        assert result["reference"].startswith("fake_txn_")
        assert _order(order.id).payment_status == "PAID"
        assert gateway.calls[0]["amount"] == 40.0

    def test_declined_card(self, shopper, placed, gateway):
        order, _ = placed
        result = current_domain.process(
            ProcessPayment(
                order_id=order.id,
                user_id=shopper.id,
                payment_method="CARD",
                amount=40.0,
                card_token="tok_decline_insufficient",
            ),
            asynchronous=False,
        )

        assert result["payment_status"] == "FAILED"
        assert result["failure_reason"] == "Card declined"
        assert _order(order.id).status == "PENDING"

    def test_amount_must_match_total(self, shopper, placed, gateway):
        order, _ = placed
        with pytest.raises(ValidationError):
            current_domain.process(
                ProcessPayment(order_id=order.id, user_id=shopper.id, payment_method="CARD", amount=39.99),
                asynchronous=False,
            )
        assert gateway.calls == []

    def test_cannot_pay_twice(self, shopper, placed, gateway):
        order, _ = placed
        command = ProcessPayment(order_id=order.id, user_id=shopper.id, payment_method="CARD", amount=40.0)
        current_domain.process(command, asynchronous=False)

        with pytest.raises(InvalidTransition):
            current_domain.process(command, asynchronous=False)

"""Domain tests for the Order aggregate: placement, status machine, payment."""

import re

import pytest

from commerce.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged, PaymentProcessed
from commerce.order.numbering import candidate_order_number
from commerce.order.order import Order, OrderAddress, OrderStatus, PaymentStatus
from shared.errors import InvalidTransition

ADDRESS = OrderAddress(
    first_name="Sam",
    last_name="Shopper",
    address_line1="1 Main Street",
    city="Springfield",
    postal_code="12345",
    country="US",
)


def _lines():
    return [
        {"product_id": "prod-001", "sku": "SKU-001", "name": "Widget", "unit_price": 99.99, "quantity": 2},
        {
            "product_id": "prod-002",
            "variant_id": "var-001",
            "sku": "SKU-002-M",
            "name": "Shirt (M)",
            "unit_price": 99.99,
            "quantity": 1,
        },
    ]


@pytest.fixture()
def order():
    placed = Order.place(
        order_number="ORD-20260101-ABC123",
        user_id="user-001",
        lines=_lines(),
        payment_method="CARD",
        shipping_address_id="addr-001",
        billing_address_id="addr-001",
        shipping_address=ADDRESS,
        billing_address=ADDRESS,
    )
    placed._events.clear()
    return placed


class TestOrderNumber:
    def test_format(self):
        assert re.match(r"^ORD-\d{8}-[A-Z0-9]{6}$", candidate_order_number())


class TestPlacement:
    def test_totals(self):
        placed = Order.place(
            order_number="ORD-20260101-ABC124",
            user_id="user-001",
            lines=_lines(),
            payment_method="CARD",
            shipping_address_id="addr-001",
            billing_address_id="addr-001",
            shipping_address=ADDRESS,
            billing_address=ADDRESS,
        )
        assert placed.subtotal == 299.97
        assert placed.total == 299.97
        assert placed.status == OrderStatus.PENDING.value
        assert placed.payment_status == PaymentStatus.PENDING.value
        assert len(placed.items) == 2
        assert len(placed.status_history) == 1
        assert isinstance(placed._events[-1], OrderPlaced)

    def test_discount_reduces_total(self):
        placed = Order.place(
            order_number="ORD-20260101-ABC125",
            user_id="user-001",
            lines=_lines(),
            payment_method="CARD",
            shipping_address_id="addr-001",
            billing_address_id="addr-001",
            shipping_address=ADDRESS,
            billing_address=ADDRESS,
            discount_code="SAVE10",
            discount_amount=29.997,
        )
        assert placed.discount_amount == 30.0
        assert placed.total == 269.97

    def test_line_totals_are_copied(self, order):
        widget = next(i for i in order.items if i.sku == "SKU-001")
        assert widget.line_total == 199.98


class TestStatusMachine:
    def test_forward_one_step(self, order):
        order.advance_to("PROCESSING", note="Picked")

        assert order.status == "PROCESSING"
        assert len(order.status_history) == 2
        assert isinstance(order._events[0], OrderStatusChanged)

    def test_cannot_skip_states(self, order):
        with pytest.raises(InvalidTransition):
            order.advance_to("SHIPPED")

    def test_cannot_go_backwards(self, order):
        order.advance_to("PROCESSING")
        order.advance_to("SHIPPED")
        with pytest.raises(InvalidTransition):
            order.advance_to("PROCESSING")

    def test_cancel_pending(self, order):
        order.cancel("Changed my mind")

        assert order.is_cancelled
        assert order.cancellation_reason == "Changed my mind"
        assert isinstance(order._events[0], OrderCancelled)

    def test_cannot_cancel_after_pending(self, order):
        order.advance_to("PROCESSING")
        with pytest.raises(InvalidTransition, match="Cannot cancel order in PROCESSING state"):
            order.cancel()

    def test_cancelled_is_terminal(self, order):
        order.cancel()
        with pytest.raises(InvalidTransition):
            order.advance_to("PROCESSING")


class TestPayment:
    def test_successful_payment(self, order):
        order.record_payment("CARD", succeeded=True, reference="txn_1")

        assert order.payment_status == "PAID"
        assert order.payment_reference == "txn_1"
        assert order.paid_at is not None
        assert order.status == "PENDING"
        assert isinstance(order._events[0], PaymentProcessed)

    def test_failed_payment_can_be_retried(self, order):
        order.record_payment("CARD", succeeded=False, failure_reason="Card declined")
        assert order.payment_status == "FAILED"

        order.record_payment("CARD", succeeded=True, reference="txn_2")
        assert order.payment_status == "PAID"

    def test_cannot_pay_twice(self, order):
        order.record_payment("CARD", succeeded=True, reference="txn_1")
        with pytest.raises(InvalidTransition, match="already paid"):
            order.record_payment("CARD", succeeded=True)

    def test_cannot_pay_cancelled(self, order):
        order.cancel()
        with pytest.raises(InvalidTransition):
            order.ensure_payable()


class TestShipping:
    def test_update_shipping(self, order):
        order.update_shipping(carrier="DHL", tracking_number="TRK-1")
        assert order.carrier == "DHL"
        assert order.tracking_number == "TRK-1"

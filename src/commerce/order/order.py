"""Order aggregate (CQRS): the record of a checkout and its fulfilment.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING → CANCELLED (terminal)

Payment is tracked separately (PENDING → PAID | FAILED) and never moves
the fulfilment status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from commerce.domain import commerce
from commerce.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentProcessed,
    ShippingUpdated,
)
from shared.errors import InvalidTransition


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


class PaymentMethod(Enum):
    CARD = "CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"


# Forward-only, one step at a time
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@commerce.value_object(part_of="Order")
class OrderAddress:
    """An address as it was when the order was placed.

    Later edits in the address book do not change where an order went.
    """

    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    company = String(max_length=100)
    address_line1 = String(required=True, max_length=255)
    address_line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)

    @classmethod
    def from_address(cls, address):
        return cls(
            first_name=address.first_name,
            last_name=address.last_name,
            company=address.company,
            address_line1=address.address_line1,
            address_line2=address.address_line2,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            phone=address.phone,
        )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@commerce.entity(part_of="Order")
class OrderItem:
    """A purchased line. Prices are copied at checkout and never recomputed."""

    product_id = Identifier(required=True)
    variant_id = Identifier()
    sku = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    line_total = Float(required=True, min_value=0.0)


@commerce.entity(part_of="Order")
class StatusEntry:
    status = String(required=True, choices=OrderStatus)
    note = String(max_length=500)
    changed_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@commerce.aggregate
class Order:
    order_number = String(required=True, max_length=30, unique=True)
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_method = String(required=True, choices=PaymentMethod)
    items = HasMany(OrderItem)
    status_history = HasMany(StatusEntry)
    subtotal = Float(required=True, min_value=0.0)
    discount_amount = Float(default=0.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    discount_code = String(max_length=50)
    shipping_address_id = Identifier(required=True)
    billing_address_id = Identifier(required=True)
    shipping_address = ValueObject(OrderAddress)
    billing_address = ValueObject(OrderAddress)
    notes = Text()
    carrier = String(max_length=100)
    tracking_number = String(max_length=255)
    estimated_delivery = DateTime()
    cancellation_reason = String(max_length=500)
    payment_reference = String(max_length=255)
    paid_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        user_id,
        lines,
        payment_method,
        shipping_address_id,
        billing_address_id,
        shipping_address,
        billing_address,
        discount_code=None,
        discount_amount=0.0,
        notes=None,
    ):
        """Create a PENDING order from priced lines.

        ``lines`` are dicts with product_id, variant_id, sku, name,
        unit_price and quantity.
        """
        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=line["product_id"],
                variant_id=line.get("variant_id"),
                sku=line["sku"],
                name=line["name"],
                unit_price=line["unit_price"],
                quantity=line["quantity"],
                line_total=round(line["unit_price"] * line["quantity"], 2),
            )
            for line in lines
        ]
        if not items:
            raise ValidationError({"items": ["An order needs at least one item"]})

        subtotal = round(sum(line["unit_price"] * line["quantity"] for line in lines), 2)
        discount_amount = round(min(discount_amount or 0.0, subtotal), 2)
        total = round(max(0.0, subtotal - discount_amount), 2)

        order = cls(
            order_number=order_number,
            user_id=user_id,
            payment_method=payment_method,
            subtotal=subtotal,
            discount_amount=discount_amount,
            total=total,
            discount_code=discount_code,
            shipping_address_id=shipping_address_id,
            billing_address_id=billing_address_id,
            shipping_address=shipping_address,
            billing_address=billing_address,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(item)
        order.add_status_history(StatusEntry(status=OrderStatus.PENDING.value, note="Order placed", changed_at=now))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id),
                item_count=sum(item.quantity for item in items),
                subtotal=subtotal,
                discount_amount=discount_amount,
                total=total,
                discount_code=discount_code,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id):
        return str(self.user_id) == str(user_id)

    @property
    def is_cancelled(self):
        return self.status == OrderStatus.CANCELLED.value

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(f"Cannot transition order from {current.value} to {target_status.value}")

    def _record_status(self, target_status, note):
        now = datetime.now(UTC)
        previous = self.status
        self.status = target_status.value
        self.add_status_history(StatusEntry(status=target_status.value, note=note, changed_at=now))
        self.updated_at = now
        return previous, now

    def advance_to(self, status, note=None):
        """Move to the next fulfilment status. Cancellation goes through ``cancel``."""
        target = OrderStatus(status)
        if target == OrderStatus.CANCELLED:
            raise InvalidTransition("Use cancellation to cancel an order")
        self._assert_can_transition(target)

        previous, now = self._record_status(target, note)
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                from_status=previous,
                to_status=target.value,
                note=note,
                changed_at=now,
            )
        )

    def cancel(self, reason=None):
        current = OrderStatus(self.status)
        if OrderStatus.CANCELLED not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(f"Cannot cancel order in {current.value} state")

        _, now = self._record_status(OrderStatus.CANCELLED, reason)
        self.cancellation_reason = reason
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_number=self.order_number,
                reason=reason,
                cancelled_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def ensure_payable(self):
        if self.is_cancelled:
            raise InvalidTransition("Cannot pay for a cancelled order")
        if self.payment_status == PaymentStatus.PAID.value:
            raise InvalidTransition("Order is already paid")

    def record_payment(self, payment_method, succeeded, reference=None, failure_reason=None):
        self.ensure_payable()
        now = datetime.now(UTC)

        self.payment_method = payment_method
        if succeeded:
            self.payment_status = PaymentStatus.PAID.value
            self.payment_reference = reference
            self.paid_at = now
        else:
            self.payment_status = PaymentStatus.FAILED.value
        self.updated_at = now

        self.raise_(
            PaymentProcessed(
                order_id=str(self.id),
                order_number=self.order_number,
                payment_method=payment_method,
                payment_status=self.payment_status,
                amount=self.total,
                reference=reference,
                failure_reason=failure_reason,
                processed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Shipping
    # -------------------------------------------------------------------
    def update_shipping(self, carrier=None, tracking_number=None, estimated_delivery=None):
        if self.is_cancelled:
            raise InvalidTransition("Cannot update shipping for a cancelled order")

        if carrier is not None:
            self.carrier = carrier
        if tracking_number is not None:
            self.tracking_number = tracking_number
        if estimated_delivery is not None:
            self.estimated_delivery = estimated_delivery
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ShippingUpdated(
                order_id=str(self.id),
                order_number=self.order_number,
                carrier=self.carrier,
                tracking_number=self.tracking_number,
                estimated_delivery=self.estimated_delivery,
            )
        )

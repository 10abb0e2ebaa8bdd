"""Domain events for the Order aggregate.

Raised by the aggregate and dispatched when the unit of work commits;
the audit handler records each of them.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from commerce.domain import commerce


@commerce.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    discount_amount = Float()
    total = Float(required=True)
    discount_code = String()
    placed_at = DateTime(required=True)


@commerce.event(part_of="Order")
class OrderStatusChanged:
    """The order moved one step along its fulfilment path."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    note = String()
    changed_at = DateTime(required=True)


@commerce.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    reason = String()
    cancelled_at = DateTime(required=True)


@commerce.event(part_of="Order")
class PaymentProcessed:
    """A charge was attempted; ``payment_status`` tells whether it went through."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    payment_method = String(required=True)
    payment_status = String(required=True)
    amount = Float(required=True)
    reference = String()
    failure_reason = String()
    processed_at = DateTime(required=True)


@commerce.event(part_of="Order")
class ShippingUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    carrier = String()
    tracking_number = String()
    estimated_delivery = DateTime()

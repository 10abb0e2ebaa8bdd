"""Audit trail: one structured log line per order event."""

import structlog
from protean.utils.mixins import handle

from commerce.domain import commerce
from commerce.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentProcessed,
    ShippingUpdated,
)
from commerce.order.order import Order

logger = structlog.get_logger("storefront.audit")


@commerce.event_handler(part_of=Order)
class OrderAuditHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        logger.info(
            "ORDER_PLACED",
            order_id=str(event.order_id),
            order_number=event.order_number,
            user_id=str(event.user_id),
            total=event.total,
            discount_code=event.discount_code,
        )

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        logger.info(
            "ORDER_STATUS_CHANGED",
            order_id=str(event.order_id),
            from_status=event.from_status,
            to_status=event.to_status,
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        logger.info("ORDER_CANCELLED", order_id=str(event.order_id), reason=event.reason)

    @handle(PaymentProcessed)
    def on_payment_processed(self, event: PaymentProcessed) -> None:
        logger.info(
            "PAYMENT_PROCESSED",
            order_id=str(event.order_id),
            payment_status=event.payment_status,
            amount=event.amount,
            reference=event.reference,
        )

    @handle(ShippingUpdated)
    def on_shipping_updated(self, event: ShippingUpdated) -> None:
        logger.info(
            "SHIPPING_UPDATED",
            order_id=str(event.order_id),
            carrier=event.carrier,
            tracking_number=event.tracking_number,
        )

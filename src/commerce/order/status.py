"""Admin order handling: status changes and shipping details."""

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.order.cancellation import cancel_order
from commerce.order.order import Order, OrderStatus
from shared.logging import get_logger

logger = get_logger(__name__)


@commerce.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)
    note = String(max_length=500)


@commerce.command(part_of="Order")
class UpdateShipping:
    order_id = Identifier(required=True)
    carrier = String(max_length=100)
    tracking_number = String(max_length=255)
    estimated_delivery = DateTime()


@commerce.command_handler(part_of=Order)
class ManageOrderHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)

        if command.status == OrderStatus.CANCELLED.value:
            cancel_order(order, command.note or "Cancelled by admin")
            return order.status

        order.advance_to(command.status, command.note)
        repo.add(order)

        logger.info("Order status changed", order_id=str(order.id), status=order.status)
        return order.status

    @handle(UpdateShipping)
    def update_shipping(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        order.update_shipping(
            carrier=command.carrier,
            tracking_number=command.tracking_number,
            estimated_delivery=command.estimated_delivery,
        )
        repo.add(order)
        return str(order.id)

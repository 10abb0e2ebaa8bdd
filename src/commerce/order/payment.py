"""Order payment through the payment gateway port.

A declined charge is an outcome, not an error: the order records FAILED
and the caller may retry with another card.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.gateway import get_gateway
from commerce.order.order import Order, PaymentMethod
from shared.logging import get_logger

logger = get_logger(__name__)

CURRENCY = "USD"


@commerce.command(part_of="Order")
class ProcessPayment:
    order_id = Identifier(required=True)
    user_id = Identifier()  # Empty when an admin pays on the user's behalf
    payment_method = String(required=True, choices=PaymentMethod)
    amount = Float(required=True)
    card_token = String(max_length=255)


@commerce.command_handler(part_of=Order)
class ProcessPaymentHandler:
    @handle(ProcessPayment)
    def process_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_visible_order(command.order_id, command.user_id)
        order.ensure_payable()

        if command.amount <= 0:
            raise ValidationError({"amount": ["Amount must be greater than zero"]})
        if round(command.amount, 2) != round(order.total, 2):
            raise ValidationError({"amount": [f"Amount must equal the order total of {order.total:.2f}"]})

        result = get_gateway().charge(
            amount=order.total,
            currency=CURRENCY,
            payment_method=command.payment_method,
            card_token=command.card_token,
            idempotency_key=f"{order.id}:{len(order.status_history)}:{order.payment_status}",
        )

        order.record_payment(
            payment_method=command.payment_method,
            succeeded=result.success,
            reference=result.transaction_id,
            failure_reason=result.failure_reason,
        )
        repo.add(order)

        logger.info(
            "Payment processed",
            order_id=str(order.id),
            payment_status=order.payment_status,
            reference=result.transaction_id,
        )
        return {
            "payment_status": order.payment_status,
            "reference": result.transaction_id,
            "failure_reason": result.failure_reason,
        }

"""Payment gateway port.

Order payment talks to this interface only, so the charging backend can be
swapped without touching the order workflow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeResult:
    """Result of a payment charge attempt."""

    success: bool
    transaction_id: str | None = None
    status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    @abstractmethod
    def charge(
        self,
        amount: float,
        currency: str,
        payment_method: str,
        card_token: str | None,
        idempotency_key: str,
    ) -> ChargeResult:
        """Charge ``amount`` and report the outcome. Declines are results, not exceptions."""
        ...

"""Fake payment gateway for development and tests.

Charges succeed unless the gateway was configured to fail, or the card
token starts with ``tok_decline`` (mirroring test-card numbers of real
gateways).
"""

from uuid import uuid4

from commerce.gateway.port import ChargeResult, PaymentGateway

DECLINE_TOKEN_PREFIX = "tok_decline"


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def charge(
        self,
        amount: float,
        currency: str,
        payment_method: str,
        card_token: str | None,
        idempotency_key: str,
    ) -> ChargeResult:
        self.calls.append(
            {
                "amount": amount,
                "currency": currency,
                "payment_method": payment_method,
                "card_token": card_token,
                "idempotency_key": idempotency_key,
            }
        )

        declined = card_token is not None and card_token.startswith(DECLINE_TOKEN_PREFIX)
        if self.should_succeed and not declined:
            return ChargeResult(
                success=True,
                transaction_id=f"fake_txn_{uuid4().hex[:12]}",
                status="succeeded",
            )
        return ChargeResult(success=False, status="failed", failure_reason=self.failure_reason)

"""Payment gateway factory.

``get_gateway()`` returns the adapter named by ``PAYMENT_GATEWAY``;
``set_gateway()`` / ``reset_gateway()`` swap it, mainly for tests.
"""

from commerce.gateway.fake_adapter import FakeGateway
from commerce.gateway.port import ChargeResult, PaymentGateway
from shared import settings

__all__ = ["ChargeResult", "FakeGateway", "PaymentGateway", "get_gateway", "reset_gateway", "set_gateway"]

_ADAPTERS = {"fake": FakeGateway}

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        try:
            adapter = _ADAPTERS[settings.PAYMENT_GATEWAY]
        except KeyError:
            raise ValueError(f"Unknown payment gateway: {settings.PAYMENT_GATEWAY}") from None
        _current_gateway = adapter()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None

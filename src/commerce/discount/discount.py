"""Discount aggregate: a code that takes money off an order."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from commerce.domain import commerce


class DiscountType(Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


def _aware(moment):
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


@commerce.aggregate
class Discount:
    code = String(required=True, min_length=3, max_length=50, unique=True)
    description = String(max_length=255)
    type = String(required=True, choices=DiscountType)
    value = Float(required=True, min_value=0.0)
    min_order_amount = Float(min_value=0.0)
    max_discount_amount = Float(min_value=0.0)
    usage_limit = Integer(min_value=1)
    used_count = Integer(default=0, min_value=0)
    valid_from = DateTime()
    valid_to = DateTime()
    is_active = Boolean(default=True)
    created_at = DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def percentage_cannot_exceed_hundred(self):
        if self.type == DiscountType.PERCENTAGE.value and self.value and self.value > 100:
            raise ValidationError({"value": ["Percentage discount cannot exceed 100"]})

    @invariant.post
    def validity_window_must_be_ordered(self):
        if self.valid_from and self.valid_to and _aware(self.valid_from) > _aware(self.valid_to):
            raise ValidationError({"valid_to": ["Discount must end after it starts"]})

    @classmethod
    def create(cls, code, type, value, **fields):  # noqa: A002
        return cls(code=code.strip().upper(), type=type, value=value, **fields)

    def update_details(self, **changes):
        if changes.get("code"):
            changes["code"] = changes["code"].strip().upper()
        for field, value in changes.items():
            setattr(self, field, value)

    def check_redeemable(self, now=None):
        """Raise ``ValidationError`` naming why this code cannot be used now."""
        now = now or datetime.now(UTC)
        if not self.is_active:
            raise ValidationError({"discount_code": ["Invalid discount code"]})
        if self.valid_from and now < _aware(self.valid_from):
            raise ValidationError({"discount_code": ["Discount code is not yet valid"]})
        if self.valid_to and now > _aware(self.valid_to):
            raise ValidationError({"discount_code": ["Discount code has expired"]})
        if self.usage_limit and (self.used_count or 0) >= self.usage_limit:
            raise ValidationError({"discount_code": ["Discount code usage limit exceeded"]})

    def amount_for(self, order_amount):
        """The discount on ``order_amount``, never more than the amount itself."""
        if self.min_order_amount and order_amount < self.min_order_amount:
            raise ValidationError(
                {"discount_code": [f"Minimum order amount of {self.min_order_amount:.2f} required for this discount"]}
            )

        if self.type == DiscountType.PERCENTAGE.value:
            amount = order_amount * self.value / 100
        else:
            amount = self.value

        if self.max_discount_amount and amount > self.max_discount_amount:
            amount = self.max_discount_amount

        return round(min(amount, order_amount), 2)

    def record_use(self):
        self.used_count = (self.used_count or 0) + 1

"""Repository for Discount aggregates."""

from protean.exceptions import ObjectNotFoundError, ValidationError

from commerce.discount.discount import Discount
from commerce.domain import commerce
from shared.errors import NotFoundError


@commerce.repository(part_of=Discount)
class DiscountRepository:
    def get_discount(self, discount_id) -> Discount:
        try:
            return self.get(discount_id)
        except ObjectNotFoundError:
            raise NotFoundError("Discount not found") from None

    def find_by_code(self, code: str) -> Discount | None:
        return self._dao.query.filter(code=code.strip().upper()).all().first

    def redeemable(self, code: str, order_amount: float):
        """Return ``(discount, amount)`` for a code applied to ``order_amount``."""
        discount = self.find_by_code(code)
        if discount is None:
            raise ValidationError({"discount_code": ["Invalid discount code"]})
        discount.check_redeemable()
        return discount, discount.amount_for(order_amount)

    def matching(self, **filters):
        return self._dao.query.filter(**filters)

    def delete_discount(self, discount: Discount) -> None:
        self._dao.delete(discount)

"""Repository for Cart aggregates, one per user."""

from commerce.cart.cart import Cart
from commerce.domain import commerce


@commerce.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def for_user_or_new(self, user_id) -> Cart:
        return self.for_user(user_id) or Cart.create(user_id=str(user_id))

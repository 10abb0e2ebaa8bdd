"""Repository for Order aggregates."""

from protean.exceptions import ObjectNotFoundError

from commerce.domain import commerce
from commerce.order.order import Order
from shared.errors import NotFoundError


@commerce.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id) -> Order:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise NotFoundError("Order not found") from None

    def get_visible_order(self, order_id, user_id=None) -> Order:
        """Load an order the caller may see; other users' orders read as missing.

        ``user_id`` of None means the caller is an admin.
        """
        order = self.get_order(order_id)
        if user_id is not None and not order.is_owned_by(user_id):
            raise NotFoundError("Order not found")
        return order

    def find_by_number(self, order_number: str) -> Order | None:
        return self._dao.query.filter(order_number=order_number).all().first

    def matching(self, *criteria, **filters):
        return self._dao.query.filter(*criteria, **filters)

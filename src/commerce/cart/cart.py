"""Cart aggregate: the items a user intends to buy.

One cart per user. A product/variant pair appears on at most one line;
adding it again merges the quantities.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from commerce.domain import commerce
from shared.errors import NotFoundError


def _same_line(item, product_id, variant_id):
    return str(item.product_id) == str(product_id) and str(item.variant_id or "") == str(variant_id or "")


@commerce.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@commerce.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def lines_must_be_unique(self):
        keys = [(str(i.product_id), str(i.variant_id or "")) for i in self.items]
        if len(keys) != len(set(keys)):
            raise ValidationError({"items": ["Each product and variant may appear only once in a cart"]})

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    @property
    def is_empty(self):
        return not self.items

    @property
    def total_quantity(self):
        return sum(item.quantity for item in self.items)

    def find_line(self, product_id, variant_id=None):
        return next((i for i in self.items if _same_line(i, product_id, variant_id)), None)

    def find_item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def get_item(self, item_id):
        item = self.find_item(item_id)
        if item is None:
            raise NotFoundError("Cart item not found")
        return item

    def add_item(self, product_id, variant_id, quantity):
        """Add a line, or merge into the existing one. Returns ``(item, merged)``."""
        now = datetime.now(UTC)
        existing = self.find_line(product_id, variant_id)

        if existing:
            existing.quantity += quantity
            item, merged = existing, True
        else:
            item = CartItem(
                product_id=product_id,
                variant_id=variant_id,
                quantity=quantity,
                added_at=now,
            )
            self.add_items(item)
            merged = False

        self.updated_at = now
        return item, merged

    def update_item_quantity(self, item_id, quantity):
        item = self.get_item(item_id)
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        return item

    def remove_item(self, item_id):
        """Remove a line. Removing a line that is not there changes nothing."""
        item = self.find_item(item_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        return True

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

    def replace_items(self, lines):
        """Replace every line. ``lines`` are ``(product_id, variant_id, quantity)`` with no duplicates."""
        self.clear()
        now = datetime.now(UTC)
        for product_id, variant_id, quantity in lines:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    variant_id=variant_id,
                    quantity=quantity,
                    added_at=now,
                )
            )

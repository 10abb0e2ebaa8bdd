"""Product aggregate root with its Variant entities.

Stock lives on the product, or on a variant when the item is sold by
variant. SKUs are unique across products and variants together.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from commerce.domain import commerce
from commerce.shared.sku import check_sku
from shared.errors import InsufficientStock, NotFoundError
from shared.slugs import is_valid_slug


@commerce.entity(part_of="Product")
class Variant:
    """A purchasable option of a product, e.g. a size and colour."""

    sku: String(required=True, max_length=50)
    name: String(required=True, max_length=100)
    size: String(max_length=50)
    color: String(max_length=50)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)

    @invariant.post
    def sku_must_be_valid(self):
        if self.sku:
            check_sku(self.sku)


@commerce.aggregate
class Product:
    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=280, unique=True)
    sku: String(required=True, max_length=50, unique=True)
    description: Text()
    price: Float(required=True, min_value=0.0)
    compare_at_price: Float(min_value=0.0)
    stock: Integer(default=0, min_value=0)
    category_id: Identifier()
    tags: Text()  # JSON array of tags
    image_url: String(max_length=500)
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    view_count: Integer(default=0, min_value=0)
    variants: HasMany(Variant)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def sku_must_be_valid(self):
        if self.sku:
            check_sku(self.sku)

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not is_valid_slug(self.slug):
            raise ValidationError({"slug": ["Slug may contain only lowercase letters, digits and hyphens"]})

    @invariant.post
    def variant_skus_must_be_distinct(self):
        skus = [v.sku for v in self.variants] + [self.sku]
        if len(skus) != len(set(skus)):
            raise ValidationError({"variants": ["Variant SKUs must be unique within a product"]})

    # -------------------------------------------------------------------
    # Factory and details
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, slug, sku, price, tags=None, **fields):
        return cls(
            name=name,
            slug=slug,
            sku=sku,
            price=price,
            tags=json.dumps(tags or []),
            **fields,
        )

    @property
    def tag_list(self):
        return json.loads(self.tags) if self.tags else []

    def update_details(self, **changes):
        if "tags" in changes:
            changes["tags"] = json.dumps(changes["tags"] or [])
        for field, value in changes.items():
            setattr(self, field, value)
        self.updated_at = datetime.now(UTC)

    def deactivate(self):
        self.is_active = False
        self.updated_at = datetime.now(UTC)

    def record_view(self):
        self.view_count = (self.view_count or 0) + 1

    # -------------------------------------------------------------------
    # Variants
    # -------------------------------------------------------------------
    def find_variant(self, variant_id):
        return next((v for v in self.variants if str(v.id) == str(variant_id)), None)

    def get_variant(self, variant_id):
        variant = self.find_variant(variant_id)
        if variant is None:
            raise NotFoundError("Variant not found")
        return variant

    def add_variant(self, sku, name, price=None, stock=0, size=None, color=None, is_active=True):
        variant = Variant(
            sku=sku,
            name=name,
            size=size,
            color=color,
            price=self.price if price is None else price,
            stock=stock,
            is_active=is_active,
        )
        with atomic_change(self):
            self.add_variants(variant)
        self.updated_at = datetime.now(UTC)
        return variant

    def update_variant(self, variant_id, **changes):
        variant = self.get_variant(variant_id)
        with atomic_change(self):
            for field, value in changes.items():
                setattr(variant, field, value)
        self.updated_at = datetime.now(UTC)
        return variant

    def remove_variant(self, variant_id):
        variant = self.get_variant(variant_id)
        self.remove_variants(variant)
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Pricing and stock
    # -------------------------------------------------------------------
    def unit_price(self, variant_id=None):
        if variant_id:
            return self.get_variant(variant_id).price
        return self.price

    def item_name(self, variant_id=None):
        if variant_id:
            return f"{self.name} ({self.get_variant(variant_id).name})"
        return self.name

    def available_stock(self, variant_id=None):
        if variant_id:
            return self.get_variant(variant_id).stock
        return self.stock

    def is_purchasable(self, variant_id=None):
        if not self.is_active:
            return False
        if variant_id:
            variant = self.find_variant(variant_id)
            return variant is not None and variant.is_active
        return True

    def ensure_stock(self, quantity, variant_id=None):
        available = self.available_stock(variant_id)
        if quantity > available:
            raise InsufficientStock(self.item_name(variant_id), quantity, available)

    def reserve_stock(self, quantity, variant_id=None):
        """Decrement stock, refusing to go below zero."""
        self.ensure_stock(quantity, variant_id)
        self._set_stock(self.available_stock(variant_id) - quantity, variant_id)

    def restock(self, quantity, variant_id=None):
        self._set_stock(self.available_stock(variant_id) + quantity, variant_id)

    def adjust_stock(self, delta, variant_id=None):
        """Apply a signed stock correction. The result cannot be negative."""
        new_stock = self.available_stock(variant_id) + delta
        if new_stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})
        self._set_stock(new_stock, variant_id)
        return new_stock

    def _set_stock(self, value, variant_id=None):
        if variant_id:
            self.get_variant(variant_id).stock = value
        else:
            self.stock = value
        self.updated_at = datetime.now(UTC)

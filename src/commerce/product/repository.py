"""Repository for Product aggregates."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.product.product import Product, Variant
from shared.errors import NotFoundError


@commerce.repository(part_of=Product)
class ProductRepository:
    def get_product(self, product_id) -> Product:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            raise NotFoundError("Product not found") from None

    def get_active_product(self, product_id) -> Product:
        """Products hidden from the storefront read as missing."""
        product = self.get_product(product_id)
        if not product.is_active:
            raise NotFoundError("Product not found")
        return product

    def find_by_slug(self, slug: str) -> Product | None:
        return self._dao.query.filter(slug=slug).all().first

    def find_by_sku(self, sku: str) -> Product | None:
        return self._dao.query.filter(sku=sku).all().first

    def sku_owner(self, sku: str):
        """Return ``(product, variant)`` holding ``sku``; variant is None for a product SKU."""
        product = self.find_by_sku(sku)
        if product is not None:
            return product, None

        stored = current_domain.repository_for(Variant)._dao.query.filter(sku=sku).all().first
        if stored is None:
            return None, None

        owner = self.get(stored.product_id)
        return owner, owner.find_variant(stored.id)

    def count_in_category(self, category_id) -> int:
        return self._dao.query.filter(category_id=str(category_id)).all().total

    def matching(self, *criteria, **filters):
        return self._dao.query.filter(*criteria, **filters)

"""Product creation: command, handler and the catalog uniqueness checks."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.product.product import Product
from commerce.shared.sku import normalize_sku
from shared.errors import DuplicateResource
from shared.logging import get_logger
from shared.slugs import slugify

logger = get_logger(__name__)


@commerce.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    slug: String(max_length=280)
    sku: String(required=True, max_length=50)
    description: Text()
    price: Float(required=True, min_value=0.0)
    compare_at_price: Float()
    stock: Integer(default=0)
    category_id: Identifier()
    tags: Text()  # JSON array
    image_url: String(max_length=500)
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    variants: Text()  # JSON array of {sku, name, size, color, price, stock, is_active}


def ensure_sku_available(sku, product_id=None, variant_id=None):
    """Products and variants share one SKU space."""
    product, variant = current_domain.repository_for(Product).sku_owner(sku)
    if product is None:
        return
    if variant is None and product_id and str(product.id) == str(product_id) and not variant_id:
        return
    if variant is not None and variant_id and str(variant.id) == str(variant_id):
        return
    raise DuplicateResource(f"SKU {sku} already exists")


def ensure_slug_available(slug, product_id=None):
    existing = current_domain.repository_for(Product).find_by_slug(slug)
    if existing is not None and str(existing.id) != str(product_id):
        raise DuplicateResource("Product slug already exists")


def ensure_category_exists(category_id):
    from commerce.category.category import Category

    current_domain.repository_for(Category).get_category(category_id)


@commerce.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        sku = normalize_sku(command.sku)
        slug = command.slug or slugify(command.name)
        variants = json.loads(command.variants) if command.variants else []

        ensure_sku_available(sku)
        for variant in variants:
            variant["sku"] = normalize_sku(variant["sku"])
            ensure_sku_available(variant["sku"])
        ensure_slug_available(slug)
        if command.category_id:
            ensure_category_exists(command.category_id)

        product = Product.create(
            name=command.name,
            slug=slug,
            sku=sku,
            price=command.price,
            tags=json.loads(command.tags) if command.tags else None,
            description=command.description,
            compare_at_price=command.compare_at_price,
            stock=command.stock,
            category_id=command.category_id,
            image_url=command.image_url,
            is_active=command.is_active,
            is_featured=command.is_featured,
        )
        for variant in variants:
            product.add_variant(**variant)

        current_domain.repository_for(Product).add(product)

        logger.info(
            "Product created",
            product_id=str(product.id),
            sku=sku,
            variant_count=len(variants),
        )
        return str(product.id)

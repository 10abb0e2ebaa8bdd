"""Variant management: commands and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.product.creation import ensure_sku_available
from commerce.product.product import Product
from commerce.shared.sku import normalize_sku


@commerce.command(part_of="Product")
class AddVariant:
    product_id: Identifier(required=True)
    sku: String(required=True, max_length=50)
    name: String(required=True, max_length=100)
    size: String(max_length=50)
    color: String(max_length=50)
    price: Float()
    stock: Integer(default=0)
    is_active: Boolean(default=True)


@commerce.command(part_of="Product")
class UpdateVariant:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    changes: Text(required=True)


@commerce.command(part_of="Product")
class RemoveVariant:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)


@commerce.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)

        sku = normalize_sku(command.sku)
        ensure_sku_available(sku)

        variant = product.add_variant(
            sku=sku,
            name=command.name,
            size=command.size,
            color=command.color,
            price=command.price,
            stock=command.stock,
            is_active=command.is_active,
        )
        repo.add(product)
        return str(variant.id)

    @handle(UpdateVariant)
    def update_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        changes = json.loads(command.changes)

        if changes.get("sku"):
            changes["sku"] = normalize_sku(changes["sku"])
            ensure_sku_available(changes["sku"], product_id=product.id, variant_id=command.variant_id)

        product.update_variant(command.variant_id, **changes)
        repo.add(product)
        return str(command.variant_id)

    @handle(RemoveVariant)
    def remove_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        product.remove_variant(command.variant_id)
        repo.add(product)

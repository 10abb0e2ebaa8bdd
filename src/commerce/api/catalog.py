"""Catalog endpoints: public browsing and admin management of categories and products."""

import json
from typing import Literal

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from commerce.api.presenters import present_category, present_product, present_variant
from commerce.api.schemas import (
    AdjustStockRequest,
    CreateCategoryRequest,
    CreateProductRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
    UpdateVariantRequest,
    VariantRequest,
)
from commerce.category.category import Category
from commerce.category.management import CreateCategory, DeleteCategory, UpdateCategory
from commerce.product.creation import CreateProduct
from commerce.product.details import DeactivateProduct, UpdateProduct
from commerce.product.listing import ProductFilters, featured_products, find_products
from commerce.product.product import Product
from commerce.product.stock import AdjustStock
from commerce.product.variants import AddVariant, RemoveVariant, UpdateVariant
from commerce.product.views import record_product_view
from shared.api.dependencies import admin_principal
from shared.api.envelope import created, ok, paginated
from shared.api.pagination import PageParams, page_params
from shared.auth import Principal
from shared.errors import NotFoundError
from shared.listing import fetch_page

category_router = APIRouter(prefix="/api/categories", tags=["categories"])
product_router = APIRouter(prefix="/api/products", tags=["products"])
admin_category_router = APIRouter(prefix="/admin/categories", tags=["admin: categories"])
admin_product_router = APIRouter(prefix="/admin/products", tags=["admin: products"])

SortOrder = Literal["asc", "desc"]
ProductSortBy = Literal["createdAt", "price", "name", "viewCount"]


def _category_tree(categories):
    by_parent = {}
    for category in categories:
        by_parent.setdefault(str(category.parent_id) if category.parent_id else None, []).append(category)

    def build(parent_id):
        return [present_category(c, children=build(str(c.id))) for c in by_parent.get(parent_id, [])]

    return build(None)


def _active_category(category_id):
    category = current_domain.repository_for(Category).get_category(category_id)
    if not category.is_active:
        raise NotFoundError("Category not found")
    return category


# --- Public categories ---


@category_router.get("")
async def list_categories(page: PageParams = Depends(page_params)):
    query = current_domain.repository_for(Category).listing_query()
    listing = fetch_page(query, "display_order", page.offset, page.limit)
    items = [present_category(c) for c in listing.items]
    return paginated("categories", items, page.meta(listing.total))


@category_router.get("/tree")
async def category_tree():
    categories = current_domain.repository_for(Category).all_categories()
    return ok({"categories": _category_tree(categories)})


@category_router.get("/slug/{slug}")
async def get_category_by_slug(slug: str):
    category = current_domain.repository_for(Category).find_by_slug(slug)
    if category is None or not category.is_active:
        raise NotFoundError("Category not found")
    return ok(present_category(category))


@category_router.get("/{category_id}")
async def get_category(category_id: str):
    category = _active_category(category_id)
    children = [
        present_category(c) for c in current_domain.repository_for(Category).children_of(category.id) if c.is_active
    ]
    return ok(present_category(category, children=children))


# --- Public products ---


@product_router.get("")
async def list_products(
    category_id: str | None = Query(None, alias="categoryId"),
    search: str | None = Query(None),
    tag: str | None = Query(None),
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    featured: bool | None = Query(None),
    sort_by: ProductSortBy = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    page: PageParams = Depends(page_params),
):
    filters = ProductFilters(
        category_id=category_id,
        search=search,
        tag=tag,
        min_price=min_price,
        max_price=max_price,
        featured=featured,
    )
    listing = find_products(filters, sort_by, sort_order, page.offset, page.limit)
    items = [present_product(p) for p in listing.items]
    return paginated("products", items, page.meta(listing.total))


@product_router.get("/featured")
async def list_featured_products(limit: int = Query(8, ge=1, le=50)):
    return ok({"products": [present_product(p) for p in featured_products(limit)]})


@product_router.get("/slug/{slug}")
async def get_product_by_slug(slug: str):
    product = current_domain.repository_for(Product).find_by_slug(slug)
    if product is None or not product.is_active:
        raise NotFoundError("Product not found")
    record_product_view(product)
    return ok(present_product(product))


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    product = current_domain.repository_for(Product).get_active_product(product_id)
    record_product_view(product)
    return ok(present_product(product))


# --- Admin categories ---


@admin_category_router.get("")
async def admin_list_categories(
    include_inactive: bool = Query(True, alias="includeInactive"),
    principal: Principal = Depends(admin_principal),
):
    repo = current_domain.repository_for(Category)
    categories = repo.all_categories(include_inactive=include_inactive)
    return ok({"categories": _category_tree(categories)})


@admin_category_router.post("", status_code=201)
async def create_category(body: CreateCategoryRequest, principal: Principal = Depends(admin_principal)):
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        description=body.description,
        parent_id=body.parent_id,
        image_url=body.image_url,
        display_order=body.display_order,
        is_active=body.is_active,
    )
    category_id = current_domain.process(command, asynchronous=False)
    category = current_domain.repository_for(Category).get_category(category_id)
    return created(present_category(category), message="Category created")


@admin_category_router.put("/{category_id}")
async def update_category(
    category_id: str,
    body: UpdateCategoryRequest,
    principal: Principal = Depends(admin_principal),
):
    command = UpdateCategory(category_id=category_id, changes=json.dumps(body.changes()))
    current_domain.process(command, asynchronous=False)
    category = current_domain.repository_for(Category).get_category(category_id)
    return ok(present_category(category), message="Category updated")


@admin_category_router.delete("/{category_id}")
async def delete_category(category_id: str, principal: Principal = Depends(admin_principal)):
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return ok(None, message="Category deleted")


# --- Admin products ---


@admin_product_router.get("")
async def admin_list_products(
    category_id: str | None = Query(None, alias="categoryId"),
    search: str | None = Query(None),
    is_active: bool | None = Query(None, alias="isActive"),
    sort_by: ProductSortBy = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(admin_principal),
):
    filters = ProductFilters(category_id=category_id, search=search, is_active=is_active)
    listing = find_products(filters, sort_by, sort_order, page.offset, page.limit)
    items = [present_product(p, include_inactive_variants=True) for p in listing.items]
    return paginated("products", items, page.meta(listing.total))


@admin_product_router.get("/{product_id}")
async def admin_get_product(product_id: str, principal: Principal = Depends(admin_principal)):
    product = current_domain.repository_for(Product).get_product(product_id)
    return ok(present_product(product, include_inactive_variants=True))


@admin_product_router.post("", status_code=201)
async def create_product(body: CreateProductRequest, principal: Principal = Depends(admin_principal)):
    command = CreateProduct(
        name=body.name,
        slug=body.slug,
        sku=body.sku,
        description=body.description,
        price=body.price,
        compare_at_price=body.compare_at_price,
        stock=body.stock,
        category_id=body.category_id,
        tags=json.dumps(body.tags),
        image_url=body.image_url,
        is_active=body.is_active,
        is_featured=body.is_featured,
        variants=json.dumps([v.model_dump() for v in body.variants]),
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get_product(product_id)
    return created(present_product(product, include_inactive_variants=True), message="Product created")


@admin_product_router.put("/{product_id}")
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    principal: Principal = Depends(admin_principal),
):
    command = UpdateProduct(product_id=product_id, changes=json.dumps(body.changes()))
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get_product(product_id)
    return ok(present_product(product, include_inactive_variants=True), message="Product updated")


@admin_product_router.delete("/{product_id}")
async def delete_product(product_id: str, principal: Principal = Depends(admin_principal)):
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return ok(None, message="Product deactivated")


@admin_product_router.patch("/{product_id}/stock")
async def adjust_stock(
    product_id: str,
    body: AdjustStockRequest,
    principal: Principal = Depends(admin_principal),
):
    command = AdjustStock(
        product_id=product_id,
        variant_id=body.variant_id,
        quantity_change=body.quantity_change,
        reason=body.reason,
    )
    stock = current_domain.process(command, asynchronous=False)
    return ok({"productId": product_id, "variantId": body.variant_id, "stock": stock}, message="Stock updated")


@admin_product_router.post("/{product_id}/variants", status_code=201)
async def add_variant(product_id: str, body: VariantRequest, principal: Principal = Depends(admin_principal)):
    command = AddVariant(product_id=product_id, **body.model_dump())
    variant_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get_product(product_id)
    return created(present_variant(product.get_variant(variant_id)), message="Variant created")


@admin_product_router.put("/{product_id}/variants/{variant_id}")
async def update_variant(
    product_id: str,
    variant_id: str,
    body: UpdateVariantRequest,
    principal: Principal = Depends(admin_principal),
):
    command = UpdateVariant(product_id=product_id, variant_id=variant_id, changes=json.dumps(body.changes()))
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get_product(product_id)
    return ok(present_variant(product.get_variant(variant_id)), message="Variant updated")


@admin_product_router.delete("/{product_id}/variants/{variant_id}")
async def delete_variant(product_id: str, variant_id: str, principal: Principal = Depends(admin_principal)):
    current_domain.process(RemoveVariant(product_id=product_id, variant_id=variant_id), asynchronous=False)
    return ok(None, message="Variant deleted")

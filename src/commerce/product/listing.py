"""Storefront product queries: filters, sorting and featured picks."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from commerce.product.product import Product
from shared import settings
from shared.listing import Listing, fetch_page, json_list_contains, order_key, text_search

SORT_FIELDS = {
    "createdAt": "created_at",
    "price": "price",
    "name": "name",
    "viewCount": "view_count",
}


@dataclass
class ProductFilters:
    category_id: str | None = None
    search: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    featured: bool | None = None
    tag: str | None = None
    is_active: bool | None = True  # None means any


def product_query(filters: ProductFilters):
    criteria = []
    conditions = {}
    if filters.is_active is not None:
        conditions["is_active"] = filters.is_active
    if filters.category_id:
        conditions["category_id"] = str(filters.category_id)
    if filters.featured is not None:
        conditions["is_featured"] = filters.featured
    if filters.min_price is not None:
        conditions["price__gte"] = filters.min_price
    if filters.max_price is not None:
        conditions["price__lte"] = filters.max_price
    if filters.tag:
        criteria.append(json_list_contains("tags", filters.tag.strip()))
    search = text_search(filters.search, "name", "description", "sku", "tags")
    if search is not None:
        criteria.append(search)
    return current_domain.repository_for(Product).matching(*criteria, **conditions)


def find_products(
    filters: ProductFilters,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
    offset: int = 0,
    limit: int = settings.DEFAULT_PAGE_LIMIT,
) -> Listing:
    return fetch_page(product_query(filters), order_key(SORT_FIELDS[sort_by], sort_order), offset, limit)


def featured_products(limit: int):
    return find_products(ProductFilters(featured=True), limit=limit).items

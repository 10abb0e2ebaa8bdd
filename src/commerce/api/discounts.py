"""Discount code endpoints: public validation and admin management."""

import json
from typing import Literal

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from commerce.api.presenters import present_discount
from commerce.api.schemas import (
    CreateDiscountRequest,
    DiscountTypeParam,
    UpdateDiscountRequest,
    ValidateDiscountRequest,
)
from commerce.discount.discount import Discount
from commerce.discount.management import CreateDiscount, DeleteDiscount, UpdateDiscount
from shared.api.dependencies import admin_principal
from shared.api.envelope import created, ok, paginated
from shared.api.pagination import PageParams, page_params
from shared.auth import Principal
from shared.listing import fetch_page, order_key

router = APIRouter(prefix="/api/discounts", tags=["discounts"])
admin_router = APIRouter(prefix="/admin/discounts", tags=["admin: discounts"])

_SORT_FIELDS = {"createdAt": "created_at", "code": "code", "value": "value"}


@router.post("/validate")
async def validate_discount(body: ValidateDiscountRequest):
    discount, amount = current_domain.repository_for(Discount).redeemable(body.code, body.order_amount)
    return ok(
        {
            "code": discount.code,
            "type": discount.type,
            "value": discount.value,
            "discountAmount": amount,
            "finalAmount": round(max(0.0, body.order_amount - amount), 2),
        },
        message="Discount code is valid",
    )


@admin_router.get("")
async def list_discounts(
    is_active: bool | None = Query(None, alias="isActive"),
    type: DiscountTypeParam | None = Query(None),  # noqa: A002
    sort_by: Literal["createdAt", "code", "value"] = Query("createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(admin_principal),
):
    filters = {}
    if is_active is not None:
        filters["is_active"] = is_active
    if type is not None:
        filters["type"] = type.value

    query = current_domain.repository_for(Discount).matching(**filters)
    listing = fetch_page(query, order_key(_SORT_FIELDS[sort_by], sort_order), page.offset, page.limit)
    items = [present_discount(d) for d in listing.items]
    return paginated("discounts", items, page.meta(listing.total))


@admin_router.post("", status_code=201)
async def create_discount(body: CreateDiscountRequest, principal: Principal = Depends(admin_principal)):
    command = CreateDiscount(
        code=body.code,
        description=body.description,
        type=body.type.value,
        value=body.value,
        min_order_amount=body.min_order_amount,
        max_discount_amount=body.max_discount_amount,
        usage_limit=body.usage_limit,
        valid_from=body.valid_from,
        valid_to=body.valid_to,
        is_active=body.is_active,
    )
    discount_id = current_domain.process(command, asynchronous=False)
    discount = current_domain.repository_for(Discount).get_discount(discount_id)
    return created(present_discount(discount), message="Discount created")


@admin_router.get("/{discount_id}")
async def get_discount(discount_id: str, principal: Principal = Depends(admin_principal)):
    return ok(present_discount(current_domain.repository_for(Discount).get_discount(discount_id)))


@admin_router.put("/{discount_id}")
async def update_discount(
    discount_id: str,
    body: UpdateDiscountRequest,
    principal: Principal = Depends(admin_principal),
):
    command = UpdateDiscount(discount_id=discount_id, changes=json.dumps(body.changes()))
    current_domain.process(command, asynchronous=False)
    discount = current_domain.repository_for(Discount).get_discount(discount_id)
    return ok(present_discount(discount), message="Discount updated")


@admin_router.delete("/{discount_id}")
async def delete_discount(discount_id: str, principal: Principal = Depends(admin_principal)):
    current_domain.process(DeleteDiscount(discount_id=discount_id), asynchronous=False)
    return ok(None, message="Discount deleted")

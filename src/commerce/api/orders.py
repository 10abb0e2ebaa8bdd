"""Order endpoints: checkout, the user's order history, payment and admin handling."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from commerce.api.presenters import present_order, present_order_summary
from commerce.api.schemas import (
    CancelOrderRequest,
    CreateOrderRequest,
    OrderStatusParam,
    ProcessPaymentRequest,
    UpdateOrderStatusRequest,
    UpdateShippingRequest,
)
from commerce.order.cancellation import CancelOrder
from commerce.order.checkout import PlaceOrder
from commerce.order.order import Order
from commerce.order.payment import ProcessPayment
from commerce.order.status import UpdateOrderStatus, UpdateShipping
from shared.api.dependencies import admin_principal, current_principal
from shared.api.envelope import created, ok, paginated
from shared.api.pagination import PageParams, page_params
from shared.auth import Principal
from shared.listing import fetch_page, text_search

router = APIRouter(prefix="/api/orders", tags=["orders"])
admin_router = APIRouter(prefix="/admin/orders", tags=["admin: orders"])


def _visible_order(order_id, principal: Principal):
    owner = None if principal.is_admin else principal.user_id
    return current_domain.repository_for(Order).get_visible_order(order_id, owner)


def _order_page(query, page: PageParams):
    listing = fetch_page(query, "-created_at", page.offset, page.limit)
    items = [present_order_summary(o) for o in listing.items]
    return paginated("orders", items, page.meta(listing.total))


@router.post("", status_code=201)
async def create_order(body: CreateOrderRequest, principal: Principal = Depends(current_principal)):
    command = PlaceOrder(
        user_id=principal.user_id,
        shipping_address_id=body.shipping_address_id,
        billing_address_id=body.billing_address_id,
        payment_method=body.payment_method.value,
        discount_code=body.discount_code,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get_order(order_id)
    return created(present_order(order), message="Order created successfully")


@router.get("")
async def list_my_orders(
    status: OrderStatusParam | None = Query(None),
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(current_principal),
):
    filters = {"user_id": principal.user_id}
    if status is not None:
        filters["status"] = status.value
    return _order_page(current_domain.repository_for(Order).matching(**filters), page)


@router.get("/{order_id}")
async def get_my_order(order_id: str, principal: Principal = Depends(current_principal)):
    return ok(present_order(_visible_order(order_id, principal)))


@router.post("/{order_id}/cancel")
async def cancel_my_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    principal: Principal = Depends(current_principal),
):
    command = CancelOrder(
        order_id=order_id,
        reason=body.reason if body else None,
        user_id=None if principal.is_admin else principal.user_id,
    )
    current_domain.process(command, asynchronous=False)
    return ok(present_order(_visible_order(order_id, principal)), message="Order cancelled")


@router.post("/{order_id}/payment")
async def pay_for_order(
    order_id: str,
    body: ProcessPaymentRequest,
    principal: Principal = Depends(current_principal),
):
    command = ProcessPayment(
        order_id=order_id,
        user_id=None if principal.is_admin else principal.user_id,
        payment_method=body.payment_method.value,
        amount=body.amount,
        card_token=body.card_token,
    )
    result = current_domain.process(command, asynchronous=False)
    order = _visible_order(order_id, principal)

    message = "Payment processed successfully" if result["payment_status"] == "PAID" else "Payment failed"
    return ok(
        {
            "order": present_order(order),
            "paymentStatus": result["payment_status"],
            "paymentReference": result["reference"],
            "failureReason": result["failure_reason"],
        },
        message=message,
    )


# --- Admin ---


@admin_router.get("")
async def admin_list_orders(
    status: OrderStatusParam | None = Query(None),
    user_id: str | None = Query(None, alias="userId"),
    search: str | None = Query(None, description="Order number contains"),
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(admin_principal),
):
    filters = {}
    if status is not None:
        filters["status"] = status.value
    if user_id:
        filters["user_id"] = user_id
    query = current_domain.repository_for(Order).matching(**filters)
    matches_number = text_search(search, "order_number")
    if matches_number is not None:
        query = query.filter(matches_number)
    return _order_page(query, page)


@admin_router.get("/{order_id}")
async def admin_get_order(order_id: str, principal: Principal = Depends(admin_principal)):
    return ok(present_order(current_domain.repository_for(Order).get_order(order_id)))


@admin_router.patch("/{order_id}/status")
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(admin_principal),
):
    command = UpdateOrderStatus(order_id=order_id, status=body.status.value, note=body.note)
    current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get_order(order_id)
    return ok(present_order(order), message="Order status updated")


@admin_router.patch("/{order_id}/shipping")
async def update_order_shipping(
    order_id: str,
    body: UpdateShippingRequest,
    principal: Principal = Depends(admin_principal),
):
    command = UpdateShipping(
        order_id=order_id,
        carrier=body.carrier,
        tracking_number=body.tracking_number,
        estimated_delivery=body.estimated_delivery,
    )
    current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get_order(order_id)
    return ok(present_order(order), message="Shipping details updated")


@admin_router.post("/{order_id}/cancel")
async def admin_cancel_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    principal: Principal = Depends(admin_principal),
):
    command = CancelOrder(order_id=order_id, reason=(body.reason if body else None) or "Cancelled by admin")
    current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get_order(order_id)
    return ok(present_order(order), message="Order cancelled")

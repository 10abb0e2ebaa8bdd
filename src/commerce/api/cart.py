"""Cart endpoints. Every route acts on the caller's own cart."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from commerce.api.presenters import present_cart, present_cart_item
from commerce.api.schemas import AddCartItemRequest, SyncCartRequest, UpdateCartItemRequest
from commerce.cart.items import AddCartItem, ClearCart, RemoveCartItem, UpdateCartItem
from commerce.cart.sync import SyncCart
from commerce.cart.validation import cart_count, cart_lines, cart_summary, validate_cart
from shared.api.dependencies import current_principal
from shared.api.envelope import ok
from shared.auth import Principal

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart_payload(user_id):
    lines = cart_lines(user_id)
    return present_cart(lines, cart_summary(lines))


@router.get("")
async def get_cart(principal: Principal = Depends(current_principal)):
    return ok(_cart_payload(principal.user_id))


@router.get("/count")
async def get_cart_count(principal: Principal = Depends(current_principal)):
    return ok({"count": cart_count(principal.user_id)})


@router.get("/validate")
async def validate(principal: Principal = Depends(current_principal)):
    return ok(validate_cart(principal.user_id))


@router.post("/items", status_code=201)
async def add_item(body: AddCartItemRequest, principal: Principal = Depends(current_principal)):
    command = AddCartItem(
        user_id=principal.user_id,
        product_id=body.product_id,
        variant_id=body.variant_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)

    lines = {str(item.id): (item, product) for item, product in cart_lines(principal.user_id)}
    item = present_cart_item(*lines[result["item_id"]])
    if result["merged"]:
        return ok(item, message="Cart item quantity updated")
    return ok(item, message="Item added to cart", status_code=201)


@router.put("/items/{item_id}")
async def update_item(item_id: str, body: UpdateCartItemRequest, principal: Principal = Depends(current_principal)):
    command = UpdateCartItem(user_id=principal.user_id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return ok(_cart_payload(principal.user_id), message="Cart item updated")


@router.delete("/items/{item_id}")
async def remove_item(item_id: str, principal: Principal = Depends(current_principal)):
    current_domain.process(RemoveCartItem(user_id=principal.user_id, item_id=item_id), asynchronous=False)
    return ok(_cart_payload(principal.user_id), message="Item removed from cart")


@router.delete("")
async def clear_cart(principal: Principal = Depends(current_principal)):
    current_domain.process(ClearCart(user_id=principal.user_id), asynchronous=False)
    return ok(_cart_payload(principal.user_id), message="Cart cleared")


@router.post("/sync")
async def sync_cart(body: SyncCartRequest, principal: Principal = Depends(current_principal)):
    items = [item.model_dump() for item in body.items]
    command = SyncCart(user_id=principal.user_id, items=json.dumps(items))
    current_domain.process(command, asynchronous=False)
    return ok(_cart_payload(principal.user_id), message="Cart synced")

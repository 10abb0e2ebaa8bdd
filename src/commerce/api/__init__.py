"""Commerce domain API package."""

from commerce.api.account import router as auth_router
from commerce.api.addresses import admin_router as admin_address_router
from commerce.api.addresses import router as address_router
from commerce.api.cart import router as cart_router
from commerce.api.catalog import (
    admin_category_router,
    admin_product_router,
    category_router,
    product_router,
)
from commerce.api.discounts import admin_router as admin_discount_router
from commerce.api.discounts import router as discount_router
from commerce.api.orders import admin_router as admin_order_router
from commerce.api.orders import router as order_router
from commerce.api.users import admin_router as admin_user_router
from commerce.api.users import profile_router

routers = [
    auth_router,
    profile_router,
    address_router,
    category_router,
    product_router,
    cart_router,
    order_router,
    discount_router,
    admin_address_router,
    admin_category_router,
    admin_product_router,
    admin_order_router,
    admin_discount_router,
    admin_user_router,
]

__all__ = ["routers"]

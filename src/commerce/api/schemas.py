"""Pydantic request schemas for the Commerce API.

Bodies accept camelCase keys (and snake_case ones); handlers read the
snake_case attributes.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from shared.api.schemas import CamelModel

# --- Account ---


class RegisterRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane@example.com",
                    "password": "correct-horse-battery",
                    "firstName": "Jane",
                    "lastName": "Doe",
                }
            ]
        }
    }

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1)


class RoleParam(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class UpdateProfileRequest(CamelModel):
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, min_length=3, max_length=254)


class UpdateUserRequest(UpdateProfileRequest):
    role: RoleParam | None = None
    is_active: bool | None = None


# --- Addresses ---


class AddressTypeParam(str, Enum):
    SHIPPING = "SHIPPING"
    BILLING = "BILLING"


class AddressFields(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    company: str | None = Field(None, max_length=100)
    address_line1: str = Field(..., min_length=1, max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=30)


class CreateAddressRequest(AddressFields):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "type": "SHIPPING",
                    "firstName": "Jane",
                    "lastName": "Doe",
                    "addressLine1": "1 Main Street",
                    "city": "Springfield",
                    "postalCode": "12345",
                    "country": "US",
                    "isDefault": True,
                }
            ]
        }
    }

    type: AddressTypeParam
    is_default: bool = False


class UpdateAddressRequest(CamelModel):
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    company: str | None = Field(None, max_length=100)
    address_line1: str | None = Field(None, min_length=1, max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, min_length=1, max_length=20)
    country: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=30)
    is_default: bool | None = None


class ValidateAddressRequest(CamelModel):
    """Loose on purpose: the validate endpoint reports problems instead of rejecting."""

    type: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    address_line1: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None


# --- Catalog ---


class CreateCategoryRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    parent_id: str | None = None
    image_url: str | None = Field(None, max_length=500)
    display_order: int = Field(0, ge=0)
    is_active: bool = True


class UpdateCategoryRequest(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    parent_id: str | None = None
    image_url: str | None = Field(None, max_length=500)
    display_order: int | None = Field(None, ge=0)
    is_active: bool | None = None


class VariantRequest(CamelModel):
    sku: str = Field(..., min_length=3, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    size: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=50)
    price: float | None = Field(None, ge=0)
    stock: int = Field(0, ge=0)
    is_active: bool = True


class UpdateVariantRequest(CamelModel):
    sku: str | None = Field(None, min_length=3, max_length=50)
    name: str | None = Field(None, min_length=1, max_length=100)
    size: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=50)
    price: float | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    is_active: bool | None = None


class CreateProductRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Trail Runner",
                    "sku": "SHOE-TRL-001",
                    "price": 99.99,
                    "stock": 25,
                    "tags": ["running", "outdoor"],
                    "variants": [{"sku": "SHOE-TRL-001-42", "name": "EU 42", "size": "42", "stock": 5}],
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=280)
    sku: str = Field(..., min_length=3, max_length=50)
    description: str | None = None
    price: float = Field(..., ge=0)
    compare_at_price: float | None = Field(None, ge=0)
    stock: int = Field(0, ge=0)
    category_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    image_url: str | None = Field(None, max_length=500)
    is_active: bool = True
    is_featured: bool = False
    variants: list[VariantRequest] = Field(default_factory=list)


class UpdateProductRequest(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=280)
    sku: str | None = Field(None, min_length=3, max_length=50)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    compare_at_price: float | None = Field(None, ge=0)
    category_id: str | None = None
    tags: list[str] | None = None
    image_url: str | None = Field(None, max_length=500)
    is_active: bool | None = None
    is_featured: bool | None = None


class AdjustStockRequest(CamelModel):
    quantity_change: int
    variant_id: str | None = None
    reason: str | None = Field(None, max_length=255)


# --- Cart ---


class AddCartItemRequest(CamelModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(CamelModel):
    quantity: int = Field(..., ge=1)


class SyncCartItem(CamelModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(..., ge=1)


class SyncCartRequest(CamelModel):
    items: list[SyncCartItem]


# --- Orders ---


class PaymentMethodParam(str, Enum):
    CARD = "CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"


class OrderStatusParam(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class CreateOrderRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shippingAddressId": "0f8b3c1e-...",
                    "billingAddressId": "0f8b3c1e-...",
                    "paymentMethod": "CARD",
                    "discountCode": "WELCOME10",
                }
            ]
        }
    }

    shipping_address_id: str
    billing_address_id: str
    payment_method: PaymentMethodParam
    discount_code: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=1000)


class CancelOrderRequest(CamelModel):
    reason: str | None = Field(None, max_length=500)


class ProcessPaymentRequest(CamelModel):
    payment_method: PaymentMethodParam
    amount: float = Field(..., gt=0)
    card_token: str | None = Field(None, max_length=255)


class UpdateOrderStatusRequest(CamelModel):
    status: OrderStatusParam
    note: str | None = Field(None, max_length=500)


class UpdateShippingRequest(CamelModel):
    carrier: str | None = Field(None, max_length=100)
    tracking_number: str | None = Field(None, max_length=255)
    estimated_delivery: datetime | None = None


# --- Discounts ---


class DiscountTypeParam(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class CreateDiscountRequest(CamelModel):
    code: str = Field(..., min_length=3, max_length=50)
    description: str | None = Field(None, max_length=255)
    type: DiscountTypeParam
    value: float = Field(..., gt=0)
    min_order_amount: float | None = Field(None, gt=0)
    max_discount_amount: float | None = Field(None, gt=0)
    usage_limit: int | None = Field(None, gt=0)
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    is_active: bool = True


class UpdateDiscountRequest(CamelModel):
    code: str | None = Field(None, min_length=3, max_length=50)
    description: str | None = Field(None, max_length=255)
    type: DiscountTypeParam | None = None
    value: float | None = Field(None, gt=0)
    min_order_amount: float | None = Field(None, gt=0)
    max_discount_amount: float | None = Field(None, gt=0)
    usage_limit: int | None = Field(None, gt=0)
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    is_active: bool | None = None


class ValidateDiscountRequest(CamelModel):
    code: str = Field(..., min_length=1)
    order_amount: float = Field(..., ge=0)

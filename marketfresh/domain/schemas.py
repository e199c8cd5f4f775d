# marketfresh/domain/schemas.py
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class ProductType(str, Enum):
    VEG = "veg"
    MEAT = "meat"


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# =====================================================
# PRODUCTS
# =====================================================
class ColdChainSpecOut(ApiModel):
    required: bool
    storage_min_c: float
    storage_max_c: float
    max_hours_outside: int


class ProductOut(ApiModel):
    """Schema for a catalog product (response)."""

    id: UUID
    type: ProductType
    name: str
    description: Optional[str] = None
    price_cents: int
    unit: str
    origin: str
    freshness_date: date
    freshness_days: int
    stock_qty: int
    is_active: bool
    cold_chain: Optional[ColdChainSpecOut] = None


class ProductListEnvelope(ApiModel):
    products: List[ProductOut]


class ProductEnvelope(ApiModel):
    product: ProductOut


# =====================================================
# CARTS
# =====================================================
class ItemIn(ApiModel):
    """Schema for setting a product quantity in a cart."""

    product_id: UUID
    quantity: int = Field(..., gt=0, description="Quantity (must be > 0)")


class CartProductOut(ApiModel):
    id: UUID
    type: ProductType
    name: str
    price_cents: int
    unit: str
    origin: str
    freshness_date: date
    freshness_days: int


class CartItemOut(ApiModel):
    product_id: UUID
    quantity: int
    product: CartProductOut
    line_total_cents: int


class CartOut(ApiModel):
    """Schema for a cart (response), priced from live product data."""

    id: UUID
    status: str
    created_at: datetime
    items: List[CartItemOut]
    total_cents: int


class CartCreatedOut(ApiModel):
    cart_id: UUID


class CartEnvelope(ApiModel):
    cart: CartOut


# =====================================================
# COLD CHAIN
# =====================================================
class ColdChainRequirementsOut(ApiModel):
    storage_min_c: float
    storage_max_c: float
    max_hours_outside: int
    consistent: bool
    note: str


class ColdChainOut(ApiModel):
    has_meat: bool
    requirements: Optional[ColdChainRequirementsOut] = None


# =====================================================
# ORDERS
# =====================================================
class CustomerIn(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    delivery_address: str = Field(..., min_length=5)


class CustomerOut(ApiModel):
    name: str
    email: str
    phone: Optional[str] = None
    delivery_address: str


class OrderCreate(ApiModel):
    """Schema for checking out a cart."""

    cart_id: UUID
    customer: CustomerIn


class OrderProductOut(ApiModel):
    id: UUID
    type: ProductType
    name: str
    unit: str
    origin: str
    freshness_date: date
    freshness_days: int


class OrderItemOut(ApiModel):
    product_id: UUID
    quantity: int
    unit_price_cents: int
    product: OrderProductOut
    line_total_cents: int


class OrderOut(ApiModel):
    """Schema for an order (response)."""

    id: UUID
    cart_id: UUID
    status: str
    total_cents: int
    customer: CustomerOut
    items: List[OrderItemOut]
    created_at: datetime


class OrderEnvelope(ApiModel):
    order: OrderOut


# =====================================================
# PAYMENTS
# =====================================================
class PaymentIntentCreate(ApiModel):
    order_id: UUID


class PaymentIntentOut(ApiModel):
    provider: str
    payment_intent_id: UUID
    order_id: UUID
    status: str
    client_secret: str


class PaymentConfirm(ApiModel):
    payment_intent_id: UUID


# =====================================================
# MISC
# =====================================================
class HealthOut(ApiModel):
    ok: bool

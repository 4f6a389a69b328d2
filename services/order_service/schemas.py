from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, model_validator

from shared.schemas import CamelModel, Money, NonEmptyStr


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit-card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank-transfer"
    CASH = "cash"


# --- Requests ---

class OrderItemCreate(CamelModel):
    artwork: int = Field(gt=0)
    quantity: int = Field(ge=1)


class ShippingAddress(CamelModel):
    name: NonEmptyStr
    street: NonEmptyStr
    city: NonEmptyStr
    state: NonEmptyStr
    zip_code: NonEmptyStr
    country: NonEmptyStr


class OrderQuoteRequest(CamelModel):
    items: List[OrderItemCreate] = Field(min_length=1)


class OrderCreate(OrderQuoteRequest):
    shipping_address: ShippingAddress
    notes: Optional[str] = Field(default=None, max_length=500)
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD


class OrderStatusUpdate(CamelModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None

    @model_validator(mode="after")
    def require_a_change(self):
        if self.status is None and self.payment_status is None:
            raise ValueError("status or paymentStatus is required")
        return self


# --- Responses ---

class ArtistDisplay(CamelModel):
    id: int
    name: str


class ArtworkDisplay(CamelModel):
    id: int
    title: str
    image_url: str = ""
    artist: Optional[ArtistDisplay] = None


class OrderItemResponse(CamelModel):
    id: int
    artwork_id: int
    quantity: int
    price: Money
    artwork: Optional[ArtworkDisplay] = None  # None once the artwork is gone


class OrderResponse(CamelModel):
    id: int
    order_number: str
    user_id: str
    items: List[OrderItemResponse]
    item_count: int
    subtotal: Money
    tax: Money
    shipping: Money
    total: Money
    shipping_address: ShippingAddress
    notes: Optional[str] = None
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    created_at: datetime
    updated_at: datetime


class OrderEnvelope(CamelModel):
    order: OrderResponse
    message: str


class OrderDetailResponse(CamelModel):
    order: OrderResponse


class OrderListResponse(CamelModel):
    orders: List[OrderResponse]
    count: int


class OrderQuoteResponse(CamelModel):
    item_count: int
    subtotal: Money
    tax: Money
    shipping: Money
    total: Money


class OrderStats(CamelModel):
    total_orders: int
    pending_orders: int
    processing_orders: int
    shipped_orders: int
    delivered_orders: int
    cancelled_orders: int
    total_revenue: Money
    average_order_value: Money
    recent_orders: int

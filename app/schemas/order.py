# app/schemas/order.py
from datetime import datetime
from pydantic import EmailStr, Field, model_validator
from typing import List, Literal, Optional

from app.core.config import settings
from app.schemas.common import ApiModel, PaginatedResponse

PaymentMethod = Literal[
    "momo-mtn", "momo-vodafone", "momo-airteltigo", "bank-transfer", "card", "cash-on-delivery"
]

# Схема для одной позиции в заказе
class OrderLineItem(ApiModel):
    id: int
    product_id: Optional[int] = None
    product_name: str
    product_price: float
    quantity: int
    total: float


# Схема для ответа с деталями созданного заказа
class Order(ApiModel):
    id: int
    order_number: str
    status: str
    payment_status: str
    payment_method: str
    subtotal: float
    shipping_fee: float
    discount: float
    total: float
    coupon_code: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: str
    shipping_city: str
    shipping_region: str
    notes: Optional[str] = None
    created_at: datetime
    items: List[OrderLineItem]


class OrderItemInput(ApiModel):
    product_id: int
    quantity: int = Field(..., ge=1, le=settings.MAX_CART_ITEM_QUANTITY)


# Схема для запроса на создание заказа
class OrderCreate(ApiModel):
    customer_name: str = Field(..., min_length=2)
    customer_email: EmailStr
    customer_phone: str = Field(..., min_length=10)
    shipping_address: str = Field(..., min_length=5)
    shipping_city: str = Field(..., min_length=2)
    shipping_region: str = Field(..., min_length=2)
    payment_method: PaymentMethod
    notes: Optional[str] = None
    coupon_code: Optional[str] = None

    # Источник позиций: либо корзина сессии на сервере, либо явный список (гостевая локальная корзина)
    session_id: Optional[str] = None
    items: Optional[List[OrderItemInput]] = None

    @model_validator(mode='after')
    def check_items_source(self):
        if self.session_id is None and self.items is None:
            raise ValueError("Either sessionId or items must be provided")
        if self.session_id is not None and self.items is not None:
            raise ValueError("Provide either sessionId or items, not both")
        return self


class PaginatedOrders(PaginatedResponse[Order]):
    pass

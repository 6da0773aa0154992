# app/schemas/cart.py
from datetime import datetime
from pydantic import Field
from typing import List, Optional

from app.core.config import settings
from app.schemas.common import ApiModel
from .product import Product  # Импортируем схему Product для детального ответа

# Схема для добавления товара в корзину сессии
class CartItemAdd(ApiModel):
    session_id: str = Field(..., min_length=1)
    product_id: int
    quantity: int = Field(1, ge=1, le=settings.MAX_CART_ITEM_QUANTITY)

# Схема для изменения количества (только положительное значение)
class CartItemUpdate(ApiModel):
    quantity: int = Field(..., ge=1, le=settings.MAX_CART_ITEM_QUANTITY)

# Схема для одного элемента в ответе о содержимом корзины
class CartItemResponse(ApiModel):
    id: int
    product_id: int
    quantity: int
    product: Product  # Полная информация о товаре
    line_total: float

class SavedItemResponse(ApiModel):
    id: int
    product_id: int
    saved_at: datetime
    product: Product

class CartStatusNotification(ApiModel):
    level: str  # e.g., "warning", "error"
    message: str

class CartTotals(ApiModel):
    subtotal: float
    item_count: int
    discount: float = 0.0
    shipping_fee: float
    total: float

class CartResponse(CartTotals):
    id: int
    session_id: str
    items: List[CartItemResponse]
    saved_items: List[SavedItemResponse]

    # --- Информация для пользователя ---
    notifications: List[CartStatusNotification] = []
    free_shipping_threshold: float
    applied_coupon_code: Optional[str] = None

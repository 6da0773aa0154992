# app/services/order.py

import logging
import math
import random
import time
from typing import Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core import locales
from app.crud import cart as crud_cart
from app.crud import catalog as crud_catalog
from app.crud import order as crud_order
from app.schemas.order import Order, OrderCreate, PaginatedOrders
from app.services import cart as cart_service

logger = logging.getLogger(__name__)


def generate_order_number() -> str:
    """Номер заказа вида ORD-<миллисекунды эпохи>-<4 случайные цифры>."""
    return f"ORD-{int(time.time() * 1000)}-{random.randint(0, 9999):04d}"


def _collect_quantities(db: Session, order_data: OrderCreate) -> tuple[Dict[int, int], Optional[int]]:
    """
    Возвращает {product_id: quantity} и ID корзины, которую нужно очистить.
    Повторяющиеся товары из явного списка склеиваются в одну позицию.
    """
    if order_data.session_id is not None:
        cart = crud_cart.get_cart_by_session_id(db, order_data.session_id)
        if not cart or not cart.items:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=locales.ERROR_CART_EMPTY)
        return {item.product_id: item.quantity for item in cart.items}, cart.id

    if not order_data.items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=locales.ERROR_CART_EMPTY)

    quantities: Dict[int, int] = {}
    for line in order_data.items:
        quantities[line.product_id] = quantities.get(line.product_id, 0) + line.quantity
    return quantities, None


def create_order(db: Session, order_data: OrderCreate, user_id: int | None = None) -> Order:
    """
    Оформляет заказ из корзины сессии или из явного списка позиций.
    Цена и название товара фиксируются в позиции заказа на момент оформления.
    Заказ, позиции и очистка корзины - одна транзакция.
    """
    quantities, cart_id = _collect_quantities(db, order_data)

    items_data: List[dict] = []
    for product_id, quantity in quantities.items():
        product = crud_catalog.get_product(db, product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_PRODUCT_NOT_FOUND)
        items_data.append({
            "product_id": product.id,
            "product_name": product.name,
            "product_price": product.price,
            "quantity": quantity,
            "total": round(product.price * quantity, 2),
        })

    lines = [(item["product_price"], item["quantity"]) for item in items_data]
    discount = 0.0
    coupon_code = None
    if order_data.coupon_code:
        # При оформлении неверный промокод - ошибка запроса, а не подсказка
        subtotal = sum(price * quantity for price, quantity in lines)
        discount = cart_service.get_coupon_discount(order_data.coupon_code, subtotal)
        coupon_code = order_data.coupon_code.strip().upper()
    totals = cart_service.calculate_totals(lines, discount)

    order_number = generate_order_number()
    while crud_order.order_number_exists(db, order_number):
        order_number = generate_order_number()

    order_fields = order_data.model_dump(exclude={"session_id", "items", "coupon_code"})
    order = crud_order.create_order(
        db,
        order_data={
            **order_fields,
            "order_number": order_number,
            "user_id": user_id,
            "status": "pending",
            "payment_status": "pending",
            "subtotal": totals.subtotal,
            "shipping_fee": totals.shipping_fee,
            "discount": totals.discount,
            "total": totals.total,
            "coupon_code": coupon_code,
        },
        items_data=items_data,
        clear_cart_id=cart_id,
    )
    logger.info(
        f"Order {order.order_number} created: {len(items_data)} lines, total {order.total:.2f} "
        f"(user_id={user_id}, cart_id={cart_id})."
    )
    return Order.model_validate(order)


def get_order_by_number(db: Session, order_number: str) -> Optional[Order]:
    order = crud_order.get_order_by_number(db, order_number)
    return Order.model_validate(order) if order else None


def list_orders(db: Session, page: int, size: int) -> PaginatedOrders:
    total = crud_order.count_orders(db)
    orders = crud_order.get_orders(db, skip=(page - 1) * size, limit=size)
    return PaginatedOrders(
        items=[Order.model_validate(o) for o in orders],
        total=total,
        page=page,
        limit=size,
        total_pages=math.ceil(total / size),
    )

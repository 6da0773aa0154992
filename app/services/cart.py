# app/services/cart.py

import logging
from typing import List, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core import locales
from app.core.config import settings
from app.crud import cart as crud_cart
from app.crud import catalog as crud_catalog
from app.models.cart import Cart
from app.schemas.cart import (
    CartItemResponse, CartResponse, CartStatusNotification, CartTotals, SavedItemResponse
)
from app.schemas.product import Product

logger = logging.getLogger(__name__)


# --- Расчеты ---

def get_coupon_discount(coupon_code: str, subtotal: float) -> float:
    """
    Возвращает сумму скидки по промокоду.
    Неизвестный код -> 400.
    """
    rule = settings.COUPONS.get(coupon_code.strip().upper())
    if not rule:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=locales.ERROR_INVALID_COUPON.format(code=coupon_code)
        )
    if "percent" in rule:
        return round(subtotal * float(rule["percent"]) / 100, 2)
    return round(min(float(rule.get("amount", 0)), subtotal), 2)


def calculate_totals(lines: List[Tuple[float, int]], discount: float = 0.0) -> CartTotals:
    """
    Считает итоги по списку (цена, количество).
    Доставка бесплатна от порога FREE_SHIPPING_THRESHOLD; пустую корзину не доставляем.
    Итог = подытог + доставка - скидка, но не меньше нуля.
    """
    subtotal = round(sum(price * quantity for price, quantity in lines), 2)
    item_count = sum(quantity for _, quantity in lines)

    if item_count == 0 or subtotal >= settings.FREE_SHIPPING_THRESHOLD:
        shipping_fee = 0.0
    else:
        shipping_fee = settings.SHIPPING_FEE

    total = max(round(subtotal + shipping_fee - discount, 2), 0.0)
    return CartTotals(
        subtotal=subtotal,
        item_count=item_count,
        discount=round(discount, 2),
        shipping_fee=shipping_fee,
        total=total,
    )


# --- Корзина сессии ---

def _build_cart_response(cart: Cart, coupon_code: str | None = None) -> CartResponse:
    """Собирает корзину с подробностями товаров и итоговыми суммами."""
    items = [
        CartItemResponse(
            id=item.id,
            product_id=item.product_id,
            quantity=item.quantity,
            product=Product.model_validate(item.product),
            line_total=round(item.product.price * item.quantity, 2),
        )
        for item in cart.items
    ]
    saved_items = [SavedItemResponse.model_validate(saved) for saved in cart.saved_items]
    lines = [(item.product.price, item.quantity) for item in cart.items]

    notifications = []
    discount = 0.0
    applied_coupon_code = None
    if coupon_code and lines:
        subtotal = sum(price * quantity for price, quantity in lines)
        try:
            discount = get_coupon_discount(coupon_code, subtotal)
            applied_coupon_code = coupon_code.strip().upper()
            notifications.append(CartStatusNotification(
                level="success",
                message=f"Coupon '{applied_coupon_code}' applied. You save {discount:.2f}."
            ))
        except HTTPException as e:
            # В корзине неверный промокод - не ошибка запроса, а подсказка пользователю
            notifications.append(CartStatusNotification(level="error", message=e.detail))

    totals = calculate_totals(lines, discount)
    return CartResponse(
        id=cart.id,
        session_id=cart.session_id,
        items=items,
        saved_items=saved_items,
        notifications=notifications,
        free_shipping_threshold=settings.FREE_SHIPPING_THRESHOLD,
        applied_coupon_code=applied_coupon_code,
        **totals.model_dump(),
    )


def get_cart_summary(
    db: Session,
    session_id: str,
    coupon_code: str | None = None,
    user_id: int | None = None
) -> CartResponse:
    """Получает (или создает) корзину сессии вместе с позициями и итогами."""
    cart = crud_cart.get_or_create_cart(db, session_id, user_id=user_id)
    return _build_cart_response(cart, coupon_code)


def add_item(db: Session, session_id: str, product_id: int, quantity: int, user_id: int | None = None) -> CartItemResponse:
    """
    Добавляет товар в корзину. Если товар уже в корзине - увеличивает количество.
    Итоговое количество ограничено MAX_CART_ITEM_QUANTITY.
    """
    product = crud_catalog.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_PRODUCT_NOT_FOUND)

    cart = crud_cart.get_or_create_cart(db, session_id, user_id=user_id)
    item = crud_cart.add_or_increment_cart_item(
        db, cart, product_id, quantity, max_quantity=settings.MAX_CART_ITEM_QUANTITY
    )
    logger.info(f"Cart {cart.id}: product {product_id} quantity is now {item.quantity}.")
    return CartItemResponse(
        id=item.id,
        product_id=item.product_id,
        quantity=item.quantity,
        product=Product.model_validate(item.product),
        line_total=round(item.product.price * item.quantity, 2),
    )


def update_item_quantity(db: Session, item_id: int, quantity: int) -> CartItemResponse:
    """Устанавливает количество позиции. Границы quantity проверяет схема запроса."""
    item = crud_cart.get_cart_item(db, item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_ITEM_NOT_IN_CART)

    item = crud_cart.update_cart_item_quantity(db, item, quantity)
    return CartItemResponse(
        id=item.id,
        product_id=item.product_id,
        quantity=item.quantity,
        product=Product.model_validate(item.product),
        line_total=round(item.product.price * item.quantity, 2),
    )


def remove_item(db: Session, item_id: int) -> None:
    """Удаляет позицию. Удаление отсутствующей позиции - не ошибка."""
    if crud_cart.remove_cart_item(db, item_id):
        logger.info(f"Cart item {item_id} removed.")


def clear_cart(db: Session, session_id: str) -> None:
    """Явно удаляет все позиции корзины сессии, не создавая новую сессию."""
    cart = crud_cart.get_cart_by_session_id(db, session_id)
    if not cart:
        return
    deleted = crud_cart.clear_cart(db, cart.id)
    logger.info(f"Cart {cart.id} cleared ({deleted} items removed).")


def _get_owned_cart(db: Session, session_id: str) -> Cart:
    cart = crud_cart.get_cart_by_session_id(db, session_id)
    if not cart:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_ITEM_NOT_IN_CART)
    return cart


def save_for_later(db: Session, session_id: str, item_id: int) -> CartResponse:
    """Переносит позицию из корзины в отложенные."""
    cart = _get_owned_cart(db, session_id)
    item = crud_cart.get_cart_item(db, item_id)
    if not item or item.cart_id != cart.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_ITEM_NOT_IN_CART)

    crud_cart.move_item_to_saved(db, item)
    return _build_cart_response(cart)


def move_to_cart(db: Session, session_id: str, saved_item_id: int) -> CartResponse:
    """Возвращает отложенный товар в корзину с количеством 1."""
    cart = _get_owned_cart(db, session_id)
    saved = crud_cart.get_saved_item(db, saved_item_id)
    if not saved or saved.cart_id != cart.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_ITEM_NOT_SAVED)

    crud_cart.move_saved_to_cart(db, saved, max_quantity=settings.MAX_CART_ITEM_QUANTITY)
    return _build_cart_response(cart)


def remove_saved_item(db: Session, session_id: str, saved_item_id: int) -> None:
    cart = crud_cart.get_cart_by_session_id(db, session_id)
    saved = crud_cart.get_saved_item(db, saved_item_id)
    if cart and saved and saved.cart_id == cart.id:
        crud_cart.remove_saved_item(db, saved_item_id)

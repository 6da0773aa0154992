# app/routers/cart.py

import logging
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from app.dependencies import get_db, get_optional_current_user
from app.models.user import User
from app.schemas.cart import CartItemAdd, CartItemResponse, CartItemUpdate, CartResponse
from app.services import cart as cart_service

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Эндпоинты для Корзины ---

@router.get("/cart", response_model=CartResponse)
def get_cart(
    session_id: str = Query(..., alias="sessionId", min_length=1),
    coupon_code: Optional[str] = Query(None, alias="couponCode"),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_current_user)
):
    """Получение (или создание) корзины сессии с позициями и итогами."""
    user_id = current_user.id if current_user else None
    return cart_service.get_cart_summary(db, session_id, coupon_code=coupon_code, user_id=user_id)


@router.delete("/cart", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(session_id: str = Query(..., alias="sessionId", min_length=1), db: Session = Depends(get_db)):
    """Полная очистка корзины. Сессия и отложенные товары сохраняются."""
    cart_service.clear_cart(db, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/cart/items", response_model=CartItemResponse, status_code=status.HTTP_201_CREATED)
def add_cart_item(
    item_data: CartItemAdd,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_current_user)
):
    """
    Добавление товара в корзину. Повторное добавление увеличивает количество.
    """
    user_id = current_user.id if current_user else None
    return cart_service.add_item(
        db, item_data.session_id, item_data.product_id, item_data.quantity, user_id=user_id
    )


@router.patch("/cart/items/{item_id}", response_model=CartItemResponse)
def update_cart_item(item_id: int, item_data: CartItemUpdate, db: Session = Depends(get_db)):
    return cart_service.update_item_quantity(db, item_id, item_data.quantity)


@router.delete("/cart/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cart_item(item_id: int, db: Session = Depends(get_db)):
    """Удаление позиции из корзины."""
    cart_service.remove_item(db, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Эндпоинты для Отложенных товаров ---

@router.post("/cart/items/{item_id}/save-for-later", response_model=CartResponse)
def save_item_for_later(item_id: int, session_id: str = Query(..., alias="sessionId", min_length=1), db: Session = Depends(get_db)):
    return cart_service.save_for_later(db, session_id, item_id)


@router.post("/cart/saved/{saved_item_id}/move-to-cart", response_model=CartResponse)
def move_saved_item_to_cart(saved_item_id: int, session_id: str = Query(..., alias="sessionId", min_length=1), db: Session = Depends(get_db)):
    return cart_service.move_to_cart(db, session_id, saved_item_id)


@router.delete("/cart/saved/{saved_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_saved_item(saved_item_id: int, session_id: str = Query(..., alias="sessionId", min_length=1), db: Session = Depends(get_db)):
    cart_service.remove_saved_item(db, session_id, saved_item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

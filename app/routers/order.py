# app/routers/order.py
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import Optional

from app.core import locales
from app.core.limiter import limiter
from app.dependencies import get_db, get_optional_current_user
from app.models.user import User
from app.schemas.order import Order, OrderCreate
from app.services import order as order_service

router = APIRouter()


@router.post("/orders", response_model=Order, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
def create_new_order(
    request: Request,
    order_data: OrderCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_current_user)
):
    """
    Оформление заказа. Позиции берутся из корзины сессии (sessionId)
    или из явного списка items (гостевая локальная корзина).
    """
    user_id = current_user.id if current_user else None
    return order_service.create_order(db, order_data, user_id=user_id)


@router.get("/orders/{order_number}", response_model=Order)
def get_order(order_number: str, db: Session = Depends(get_db)):
    """Отслеживание заказа по его номеру."""
    order = order_service.get_order_by_number(db, order_number)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_ORDER_NOT_FOUND)
    return order

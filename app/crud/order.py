# app/crud/order.py
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.cart import CartItem
from app.models.order import Order, OrderItem


def create_order(
    db: Session,
    order_data: dict,
    items_data: List[dict],
    clear_cart_id: int | None = None
) -> Order:
    """
    Создает заказ и все его позиции одной транзакцией.
    Если передан clear_cart_id - корзина очищается в той же транзакции.
    """
    try:
        order = Order(**order_data)
        order.items = [OrderItem(**item) for item in items_data]
        db.add(order)
        if clear_cart_id is not None:
            db.query(CartItem).filter_by(cart_id=clear_cart_id).delete()
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(order)
    return order

def get_order_by_number(db: Session, order_number: str) -> Order | None:
    return db.query(Order).filter(Order.order_number == order_number).first()

def order_number_exists(db: Session, order_number: str) -> bool:
    return db.query(Order.id).filter(Order.order_number == order_number).first() is not None

def get_orders(db: Session, skip: int = 0, limit: int = 20) -> List[Order]:
    return db.query(Order).order_by(Order.id.desc()).offset(skip).limit(limit).all()

def count_orders(db: Session, status: str | None = None) -> int:
    query = db.query(func.count(Order.id))
    if status:
        query = query.filter(Order.status == status)
    return query.scalar()

def sum_order_totals(db: Session) -> float:
    return float(db.query(func.coalesce(func.sum(Order.total), 0.0)).scalar())

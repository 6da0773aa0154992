# app/crud/cart.py
from datetime import datetime

from sqlalchemy.orm import Session

from app.db.session import utcnow
from app.models.cart import Cart, CartItem, SavedItem

# --- CRUD для Корзины ---

def get_cart_by_session_id(db: Session, session_id: str) -> Cart | None:
    return db.query(Cart).filter(Cart.session_id == session_id).first()

def get_or_create_cart(db: Session, session_id: str, user_id: int | None = None) -> Cart:
    """Одна корзина на сессию: создается лениво при первом обращении."""
    cart = get_cart_by_session_id(db, session_id)
    if cart:
        if user_id and cart.user_id is None:
            cart.user_id = user_id
            db.commit()
        return cart

    cart = Cart(session_id=session_id, user_id=user_id)
    db.add(cart)
    db.commit()
    db.refresh(cart)
    return cart

def get_cart_item(db: Session, item_id: int) -> CartItem | None:
    return db.get(CartItem, item_id)

def get_cart_item_by_product(db: Session, cart_id: int, product_id: int) -> CartItem | None:
    return db.query(CartItem).filter_by(cart_id=cart_id, product_id=product_id).first()

def get_saved_item(db: Session, saved_item_id: int) -> SavedItem | None:
    return db.get(SavedItem, saved_item_id)

def _increment_item(db: Session, cart: Cart, product_id: int, quantity: int, max_quantity: int) -> CartItem:
    """
    Увеличивает количество существующей позиции или создает новую.
    Итоговое количество ограничено max_quantity. Без коммита.
    """
    item = get_cart_item_by_product(db, cart.id, product_id)
    if item:
        item.quantity = min(item.quantity + quantity, max_quantity)
    else:
        item = CartItem(cart_id=cart.id, product_id=product_id, quantity=min(quantity, max_quantity))
        db.add(item)

    # Товар не может одновременно лежать в корзине и в отложенных
    db.query(SavedItem).filter_by(cart_id=cart.id, product_id=product_id).delete()
    cart.updated_at = utcnow()
    return item

def add_or_increment_cart_item(
    db: Session, cart: Cart, product_id: int, quantity: int, max_quantity: int
) -> CartItem:
    """Добавляет товар в корзину или увеличивает количество уже лежащей позиции."""
    try:
        item = _increment_item(db, cart, product_id, quantity, max_quantity)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(item)
    return item

def update_cart_item_quantity(db: Session, item: CartItem, quantity: int) -> CartItem:
    item.quantity = quantity
    item.cart.updated_at = utcnow()
    db.commit()
    db.refresh(item)
    return item

def remove_cart_item(db: Session, item_id: int) -> bool:
    item = get_cart_item(db, item_id)
    if item:
        item.cart.updated_at = utcnow()
        db.delete(item)
        db.commit()
        return True
    return False

def clear_cart(db: Session, cart_id: int, commit: bool = True) -> int:
    """Полностью очищает корзину (отложенные товары не трогает)."""
    deleted = db.query(CartItem).filter_by(cart_id=cart_id).delete()
    if commit:
        db.commit()
    return deleted

# --- CRUD для Отложенных товаров ---

def move_item_to_saved(db: Session, item: CartItem) -> SavedItem:
    """Переносит позицию корзины в отложенные одним коммитом. Дубли не создаются."""
    cart = item.cart
    try:
        saved = db.query(SavedItem).filter_by(cart_id=cart.id, product_id=item.product_id).first()
        if not saved:
            saved = SavedItem(cart_id=cart.id, product_id=item.product_id)
            db.add(saved)
        db.delete(item)
        cart.updated_at = utcnow()
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(saved)
    return saved

def move_saved_to_cart(db: Session, saved: SavedItem, max_quantity: int) -> CartItem:
    """Возвращает отложенный товар в корзину с количеством 1."""
    cart, product_id = saved.cart, saved.product_id
    try:
        db.delete(saved)
        db.flush()
        item = _increment_item(db, cart, product_id, 1, max_quantity)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(item)
    return item

def remove_saved_item(db: Session, saved_item_id: int) -> bool:
    saved = get_saved_item(db, saved_item_id)
    if saved:
        db.delete(saved)
        db.commit()
        return True
    return False

# --- Обслуживание ---

def delete_carts_untouched_since(db: Session, cutoff: datetime) -> int:
    """Удаляет брошенные корзины вместе с позициями. Возвращает число удаленных корзин."""
    stale_carts = db.query(Cart).filter(Cart.updated_at < cutoff).all()
    for cart in stale_carts:
        db.delete(cart) # позиции и отложенные удаляются каскадом
    db.commit()
    return len(stale_carts)

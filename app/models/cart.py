# app/models/cart.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.schema import UniqueConstraint

from app.db.session import Base, utcnow


class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    # Непрозрачный идентификатор сессии, который генерирует клиент
    session_id = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    # Обновляется при каждой мутации - по нему чистятся брошенные корзины
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    items = relationship("CartItem", back_populates="cart", cascade="all, delete-orphan", order_by="CartItem.id")
    saved_items = relationship("SavedItem", back_populates="cart", cascade="all, delete-orphan", order_by="SavedItem.id")


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")

    # Одна позиция на пару (корзина, товар): повторное добавление увеличивает количество
    __table_args__ = (UniqueConstraint('cart_id', 'product_id', name='_cart_product_uc'),)


class SavedItem(Base):
    """Товар, отложенный "на потом". Не может одновременно лежать в корзине."""
    __tablename__ = "saved_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    saved_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    cart = relationship("Cart", back_populates="saved_items")
    product = relationship("Product")

    __table_args__ = (UniqueConstraint('cart_id', 'product_id', name='_cart_saved_product_uc'),)

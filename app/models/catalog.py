# app/models/catalog.py
from sqlalchemy import (
    JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Table, Text
)
from sqlalchemy.orm import relationship

from app.db.session import Base, utcnow


# Связи "многие ко многим" между товарами и типами/проблемами кожи
product_skin_types = Table(
    "product_skin_types",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("skin_type_id", Integer, ForeignKey("skin_types.id", ondelete="CASCADE"), primary_key=True),
)

product_skin_concerns = Table(
    "product_skin_concerns",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("skin_concern_id", Integer, ForeignKey("skin_concerns.id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    image = Column(String, nullable=True)
    description = Column(Text, nullable=True)

    products = relationship("Product", back_populates="category")


class Brand(Base):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    logo = Column(String, nullable=True)

    products = relationship("Product", back_populates="brand")


class SkinType(Base):
    __tablename__ = "skin_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)


class SkinConcern(Base):
    __tablename__ = "skin_concerns"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    sku = Column(String, unique=True, nullable=True)
    description = Column(Text, nullable=False, default="")
    short_description = Column(Text, nullable=True)

    price = Column(Float, nullable=False)
    original_price = Column(Float, nullable=True) # Цена до скидки, если товар на распродаже
    image = Column(String, nullable=False, default="")

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), nullable=True)

    stock_quantity = Column(Integer, nullable=False, default=0)
    stock_status = Column(String, nullable=False, default="in_stock")

    is_best_seller = Column(Boolean, nullable=False, default=False)
    is_new = Column(Boolean, nullable=False, default=False)
    is_organic = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)

    # Производные поля: пересчитываются при каждом новом отзыве
    rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)

    size = Column(String, nullable=True)
    ingredients = Column(Text, nullable=True)
    how_to_use = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    category = relationship("Category", back_populates="products")
    brand = relationship("Brand", back_populates="products")
    skin_types = relationship("SkinType", secondary=product_skin_types)
    skin_concerns = relationship("SkinConcern", secondary=product_skin_concerns)
    reviews = relationship("Review", back_populates="product")


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    rating = Column(Integer, nullable=False)
    title = Column(String, nullable=True)
    comment = Column(Text, nullable=True)
    author = Column(String, nullable=False)
    location = Column(String, nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    product = relationship("Product", back_populates="reviews")


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, index=True)
    rating = Column(Float, nullable=False)
    text = Column(Text, nullable=False)
    customer_name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    product = Column(String, nullable=False) # Название товара, о котором отзыв
    initials = Column(String, nullable=False)
    is_verified = Column(Boolean, nullable=False, default=True)

# app/services/catalog.py

import logging
import math
from typing import List, Optional, Type

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core import locales
from app.crud import catalog as crud_catalog
from app.models.catalog import Brand, Category, SkinConcern, SkinType
from app.models.catalog import Product as ProductModel
from app.schemas.product import (
    CategoryCreate, PaginatedProducts, Product, ProductCategory, ProductCreate,
    ProductFilters, ProductReview, ReviewCreate, TaxonomyCreate
)
from app.utils.text import slugify

logger = logging.getLogger(__name__)


def build_slug(value: str) -> str:
    """Slug из названия. Если из названия не остается ни одной латинской буквы или цифры -> 400."""
    slug = slugify(value)
    if not slug:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=locales.ERROR_INVALID_SLUG.format(value=value)
        )
    return slug


# --- Справочники ---

def get_all_categories(db: Session) -> List[ProductCategory]:
    """Список категорий с количеством товаров в каждой."""
    counts = crud_catalog.count_products_by_category(db)
    return [
        ProductCategory.model_validate(category).model_copy(
            update={"product_count": counts.get(category.id, 0)}
        )
        for category in crud_catalog.list_taxonomy(db, Category)
    ]


def get_category_by_slug(db: Session, slug: str) -> Optional[ProductCategory]:
    category = crud_catalog.get_taxonomy_by_slug(db, Category, slug)
    if not category:
        return None
    counts = crud_catalog.count_products_by_category(db)
    return ProductCategory.model_validate(category).model_copy(
        update={"product_count": counts.get(category.id, 0)}
    )


def list_reference(db: Session, model: Type) -> list:
    """Бренды, типы кожи, проблемы кожи - статичные справочники."""
    return crud_catalog.list_taxonomy(db, model)


def create_reference(db: Session, model: Type, data: TaxonomyCreate):
    """
    Создает запись справочника. Slug генерируется из названия, если не передан.
    Дубликат slug -> 409.
    """
    fields = data.model_dump()
    fields["slug"] = build_slug(data.slug or data.name)
    if crud_catalog.get_taxonomy_by_slug(db, model, fields["slug"]):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=locales.ERROR_SLUG_TAKEN.format(slug=fields["slug"])
        )
    record = crud_catalog.create_taxonomy(db, model, **fields)
    logger.info(f"Created {model.__tablename__} record '{record.slug}' with ID {record.id}.")
    return record


def create_category(db: Session, data: CategoryCreate) -> ProductCategory:
    category = create_reference(db, Category, data)
    return ProductCategory.model_validate(category)


# --- Товары ---

def get_products(db: Session, filters: ProductFilters) -> PaginatedProducts:
    """
    Фильтрует, сортирует и пагинирует каталог.
    total - количество совпадений до пагинации, total_pages = ceil(total / limit).
    """
    items, total = crud_catalog.get_products(db, filters)
    return PaginatedProducts(
        items=[Product.model_validate(p) for p in items],
        total=total,
        page=filters.page,
        limit=filters.limit,
        total_pages=math.ceil(total / filters.limit),
    )


def _find_product(db: Session, slug_or_id: str | int) -> Optional[ProductModel]:
    if isinstance(slug_or_id, int) or str(slug_or_id).isdigit():
        return crud_catalog.get_product(db, int(slug_or_id))
    return crud_catalog.get_product_by_slug(db, slug_or_id)


def get_product_by_slug_or_id(db: Session, slug_or_id: str | int) -> Optional[Product]:
    """Ищет товар по числовому ID или по slug. Отсутствие товара - не ошибка, а None."""
    product = _find_product(db, slug_or_id)
    return Product.model_validate(product) if product else None


def get_best_sellers(db: Session, limit: int) -> List[Product]:
    return [Product.model_validate(p) for p in crud_catalog.get_best_sellers(db, limit)]


def get_new_arrivals(db: Session, limit: int) -> List[Product]:
    return [Product.model_validate(p) for p in crud_catalog.get_new_arrivals(db, limit)]


def get_organic(db: Session, limit: int) -> List[Product]:
    return [Product.model_validate(p) for p in crud_catalog.get_organic(db, limit)]


def get_related(db: Session, slug_or_id: str | int, limit: int) -> Optional[List[Product]]:
    """Товары той же категории или бренда. None, если исходный товар не найден."""
    product = _find_product(db, slug_or_id)
    if not product:
        return None
    return [Product.model_validate(p) for p in crud_catalog.get_related_products(db, product, limit)]


def create_product(db: Session, data: ProductCreate) -> Product:
    fields = data.model_dump(exclude={"skin_type_ids", "skin_concern_ids"})
    fields["slug"] = build_slug(data.slug or data.name)

    if crud_catalog.get_product_by_slug(db, fields["slug"]):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=locales.ERROR_SLUG_TAKEN.format(slug=fields["slug"])
        )
    # Ссылки на несуществующие категорию/бренд - ошибка данных клиента
    if data.category_id is not None and not crud_catalog.get_taxonomy_by_ids(db, Category, [data.category_id]):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=locales.ERROR_CATEGORY_NOT_FOUND)
    if data.brand_id is not None and not crud_catalog.get_taxonomy_by_ids(db, Brand, [data.brand_id]):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=locales.ERROR_BRAND_NOT_FOUND)

    fields["stock_status"] = "in_stock" if data.stock_quantity > 0 else "out_of_stock"
    product = crud_catalog.create_product(
        db,
        skin_types=crud_catalog.get_taxonomy_by_ids(db, SkinType, data.skin_type_ids),
        skin_concerns=crud_catalog.get_taxonomy_by_ids(db, SkinConcern, data.skin_concern_ids),
        **fields
    )
    logger.info(f"Created product '{product.slug}' with ID {product.id}.")
    return Product.model_validate(product)


# --- Отзывы ---

def get_reviews_for_product(db: Session, product_id: int) -> List[ProductReview]:
    return [ProductReview.model_validate(r) for r in crud_catalog.get_reviews_by_product(db, product_id)]


def create_review(db: Session, review_data: ReviewCreate, user_id: int | None = None) -> ProductReview:
    """
    Создает отзыв. Рейтинг и количество отзывов товара пересчитываются
    в той же транзакции.
    """
    product = crud_catalog.get_product(db, review_data.product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_PRODUCT_NOT_FOUND)

    review = crud_catalog.create_review(
        db, product, user_id=user_id, **review_data.model_dump(exclude={"product_id"})
    )
    logger.info(
        f"Review {review.id} added to product {product.id}. "
        f"New rating: {product.rating} ({product.review_count} reviews)."
    )
    return ProductReview.model_validate(review)

# app/crud/catalog.py
from typing import List, Tuple, Type

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from app.models.catalog import (
    Brand, Category, Product, Review, SkinConcern, SkinType, Testimonial
)
from app.schemas.product import ProductFilters
from app.utils.text import escape_like

# --- Справочники: категории, бренды, типы и проблемы кожи ---

def list_taxonomy(db: Session, model: Type) -> list:
    """Возвращает все записи справочника в порядке добавления."""
    return db.query(model).order_by(model.id).all()

def get_taxonomy_by_slug(db: Session, model: Type, slug: str):
    return db.query(model).filter(model.slug == slug).first()

def create_taxonomy(db: Session, model: Type, **fields):
    record = model(**fields)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record

def count_products_by_category(db: Session) -> dict[int, int]:
    rows = (
        db.query(Product.category_id, func.count(Product.id))
        .filter(Product.category_id.isnot(None))
        .group_by(Product.category_id)
        .all()
    )
    return {category_id: count for category_id, count in rows}

def get_taxonomy_by_ids(db: Session, model: Type, ids: List[int]) -> list:
    if not ids:
        return []
    return db.query(model).filter(model.id.in_(ids)).all()

# --- CRUD для Товаров ---

def get_product(db: Session, product_id: int) -> Product | None:
    return db.get(Product, product_id)

def get_product_by_slug(db: Session, slug: str) -> Product | None:
    return db.query(Product).filter(Product.slug == slug).first()

def create_product(
    db: Session,
    skin_types: List[SkinType] | None = None,
    skin_concerns: List[SkinConcern] | None = None,
    **fields
) -> Product:
    product = Product(**fields)
    product.skin_types = skin_types or []
    product.skin_concerns = skin_concerns or []
    db.add(product)
    db.commit()
    db.refresh(product)
    return product

def count_products(db: Session) -> int:
    return db.query(func.count(Product.id)).scalar()


def _apply_product_filters(query: Query, filters: ProductFilters) -> Query:
    """Накладывает предикаты фильтра на запрос товаров."""
    if filters.category:
        category = filters.category.lower()
        query = query.filter(Product.category.has(
            or_(func.lower(Category.slug) == category, func.lower(Category.name) == category)
        ))
    if filters.brands:
        query = query.filter(Product.brand.has(Brand.slug.in_(filters.brands)))
    if filters.skin_types:
        query = query.filter(Product.skin_types.any(SkinType.slug.in_(filters.skin_types)))
    if filters.skin_concerns:
        query = query.filter(Product.skin_concerns.any(SkinConcern.slug.in_(filters.skin_concerns)))

    # Границы цены включительные
    if filters.min_price is not None:
        query = query.filter(Product.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.filter(Product.price <= filters.max_price)

    if filters.best_seller:
        query = query.filter(Product.is_best_seller.is_(True))
    if filters.new:
        query = query.filter(Product.is_new.is_(True))
    if filters.organic:
        query = query.filter(Product.is_organic.is_(True))
    if filters.featured:
        query = query.filter(Product.is_featured.is_(True))
    if filters.min_rating:
        query = query.filter(Product.rating >= filters.min_rating)

    if filters.search:
        pattern = f"%{escape_like(filters.search.strip())}%"
        query = query.filter(or_(
            Product.name.ilike(pattern, escape="\\"),
            Product.description.ilike(pattern, escape="\\"),
            Product.brand.has(Brand.name.ilike(pattern, escape="\\")),
        ))
    return query


# Сортировки. Вторичный ключ - id, чтобы равные значения сохраняли порядок добавления.
_SORT_ORDERS = {
    "price-asc": (Product.price.asc(), Product.id.asc()),
    "price-desc": (Product.price.desc(), Product.id.asc()),
    "rating-desc": (Product.rating.desc(), Product.id.asc()),
    "popular": (Product.review_count.desc(), Product.id.asc()),
    # id растут монотонно и не переиспользуются, поэтому больший id = более новый товар
    "newest": (Product.id.desc(),),
}

def get_products(db: Session, filters: ProductFilters) -> Tuple[List[Product], int]:
    """
    Возвращает страницу товаров и общее количество совпадений до пагинации.
    """
    query = _apply_product_filters(db.query(Product), filters)
    total = query.count()

    order_by = _SORT_ORDERS.get(filters.sort, (Product.id.asc(),))
    skip = (filters.page - 1) * filters.limit
    items = query.order_by(*order_by).offset(skip).limit(filters.limit).all()
    return items, total

def get_best_sellers(db: Session, limit: int) -> List[Product]:
    return db.query(Product).filter(Product.is_best_seller.is_(True)).order_by(Product.id).limit(limit).all()

def get_new_arrivals(db: Session, limit: int) -> List[Product]:
    return db.query(Product).filter(Product.is_new.is_(True)).order_by(Product.id).limit(limit).all()

def get_organic(db: Session, limit: int) -> List[Product]:
    return db.query(Product).filter(Product.is_organic.is_(True)).order_by(Product.id).limit(limit).all()

def get_related_products(db: Session, product: Product, limit: int) -> List[Product]:
    """Товары той же категории или того же бренда, без самого товара, в порядке добавления."""
    conditions = []
    if product.category_id is not None:
        conditions.append(Product.category_id == product.category_id)
    if product.brand_id is not None:
        conditions.append(Product.brand_id == product.brand_id)
    if not conditions:
        return []
    return (
        db.query(Product)
        .filter(Product.id != product.id, or_(*conditions))
        .order_by(Product.id)
        .limit(limit)
        .all()
    )

# --- CRUD для Отзывов ---

def get_reviews_by_product(db: Session, product_id: int) -> List[Review]:
    return db.query(Review).filter(Review.product_id == product_id).order_by(Review.id).all()

def create_review(db: Session, product: Product, **fields) -> Review:
    """
    Создает отзыв и пересчитывает рейтинг товара в ОДНОЙ транзакции:
    читатель не может увидеть отзыв без обновленного рейтинга и наоборот.
    """
    try:
        review = Review(product_id=product.id, **fields)
        db.add(review)
        db.flush()

        average, count = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.product_id == product.id)
            .one()
        )
        product.rating = round(float(average or 0), 2)
        product.review_count = count
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(review)
    return review

# --- Отзывы покупателей на главной ---

def get_testimonials(db: Session) -> List[Testimonial]:
    return db.query(Testimonial).order_by(Testimonial.id).all()

def create_testimonial(db: Session, **fields) -> Testimonial:
    testimonial = Testimonial(**fields)
    db.add(testimonial)
    db.commit()
    db.refresh(testimonial)
    return testimonial

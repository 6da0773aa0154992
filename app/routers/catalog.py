# app/routers/catalog.py

from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core import locales
from app.core.config import settings
from app.dependencies import get_admin_user, get_db
from app.models.catalog import Brand as BrandModel, SkinConcern, SkinType
from app.models.user import User
from app.schemas.product import (
    Brand, BrandCreate, CategoryCreate, PaginatedProducts, Product, ProductCategory,
    ProductCreate, ProductFilters, SortOption, TaxonomyCreate, TaxonomyItem
)
from app.services import catalog as catalog_service

router = APIRouter()


# --- Справочники ---

@router.get("/categories", response_model=List[ProductCategory])
def get_categories(db: Session = Depends(get_db)):
    """
    Получение списка всех категорий товаров.
    Этот эндпоинт публичный и не требует аутентификации.
    """
    return catalog_service.get_all_categories(db)


@router.get("/categories/{slug}", response_model=ProductCategory)
def get_category(slug: str, db: Session = Depends(get_db)):
    category = catalog_service.get_category_by_slug(db, slug)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_CATEGORY_NOT_FOUND)
    return category


@router.post("/categories", response_model=ProductCategory, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    return catalog_service.create_category(db, category_data)


@router.get("/brands", response_model=List[Brand])
def get_brands(db: Session = Depends(get_db)):
    return catalog_service.list_reference(db, BrandModel)


@router.post("/brands", response_model=Brand, status_code=status.HTTP_201_CREATED)
def create_brand(
    brand_data: BrandCreate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    return catalog_service.create_reference(db, BrandModel, brand_data)


@router.get("/skin-types", response_model=List[TaxonomyItem])
def get_skin_types(db: Session = Depends(get_db)):
    return catalog_service.list_reference(db, SkinType)


@router.post("/skin-types", response_model=TaxonomyItem, status_code=status.HTTP_201_CREATED)
def create_skin_type(
    data: TaxonomyCreate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    return catalog_service.create_reference(db, SkinType, data)


@router.get("/skin-concerns", response_model=List[TaxonomyItem])
def get_skin_concerns(db: Session = Depends(get_db)):
    return catalog_service.list_reference(db, SkinConcern)


@router.post("/skin-concerns", response_model=TaxonomyItem, status_code=status.HTTP_201_CREATED)
def create_skin_concern(
    data: TaxonomyCreate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    return catalog_service.create_reference(db, SkinConcern, data)


# --- Товары ---

@router.get("/products", response_model=PaginatedProducts)
def get_all_products(
    # Параметры пагинации
    page: int = Query(1, ge=1, description="Номер страницы"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, description="Количество товаров на странице"),

    # Параметры фильтрации
    category: Optional[str] = Query(None, description="Slug или название категории"),
    brands: List[str] = Query([], description="Slug'и брендов"),
    skin_types: List[str] = Query([], alias="skinTypes"),
    skin_concerns: List[str] = Query([], alias="skinConcerns"),
    search: Optional[str] = Query(None, description="Поисковый запрос"),
    min_price: Optional[float] = Query(None, ge=0, alias="minPrice"),
    max_price: Optional[float] = Query(None, ge=0, alias="maxPrice"),
    min_rating: Optional[float] = Query(None, ge=0, le=5, alias="minRating"),
    best_seller: Optional[bool] = Query(None, alias="bestSeller"),
    new: Optional[bool] = Query(None),
    organic: Optional[bool] = Query(None),
    featured: Optional[bool] = Query(None, description="Показывать только рекомендуемые товары"),

    # Параметры сортировки
    sort: Optional[SortOption] = Query(None, description="price-asc, price-desc, rating-desc, newest, popular"),
    popular: bool = Query(False, description="Синоним sort=popular"),

    db: Session = Depends(get_db)
):
    """
    Получение списка товаров с пагинацией, фильтрацией, поиском и сортировкой.
    """
    if popular and sort is None:
        sort = "popular"

    filters = ProductFilters(
        category=category,
        brands=brands,
        skin_types=skin_types,
        skin_concerns=skin_concerns,
        min_price=min_price,
        max_price=max_price,
        best_seller=best_seller,
        new=new,
        organic=organic,
        featured=featured,
        min_rating=min_rating,
        search=search,
        sort=sort,
        page=page,
        limit=limit,
    )
    return catalog_service.get_products(db, filters)


@router.get("/products/bestsellers", response_model=List[Product])
def get_best_sellers(limit: int = Query(4, ge=1, le=50), db: Session = Depends(get_db)):
    return catalog_service.get_best_sellers(db, limit)


@router.get("/products/new-arrivals", response_model=List[Product])
def get_new_arrivals(limit: int = Query(4, ge=1, le=50), db: Session = Depends(get_db)):
    return catalog_service.get_new_arrivals(db, limit)


@router.get("/products/organic", response_model=List[Product])
def get_organic(limit: int = Query(4, ge=1, le=50), db: Session = Depends(get_db)):
    return catalog_service.get_organic(db, limit)


@router.post("/products", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    return catalog_service.create_product(db, product_data)


@router.get("/products/{slug_or_id}", response_model=Product)
def get_single_product(slug_or_id: str, db: Session = Depends(get_db)):
    """
    Получение детальной информации о товаре по числовому ID или slug.
    """
    product = catalog_service.get_product_by_slug_or_id(db, slug_or_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_PRODUCT_NOT_FOUND)
    return product


@router.get("/products/{slug_or_id}/related", response_model=List[Product])
def get_related_products(
    slug_or_id: str,
    limit: int = Query(4, ge=1, le=50),
    db: Session = Depends(get_db)
):
    related = catalog_service.get_related(db, slug_or_id, limit)
    if related is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_PRODUCT_NOT_FOUND)
    return related

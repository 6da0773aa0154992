# app/schemas/product.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from app.core.config import settings
from app.schemas.common import ApiModel, PaginatedResponse

SortOption = Literal["price-asc", "price-desc", "rating-desc", "newest", "popular"]


class TaxonomyItem(ApiModel):
    """Общая схема для брендов, типов и проблем кожи."""
    id: int
    name: str
    slug: str


class TaxonomyCreate(ApiModel):
    name: str = Field(..., min_length=1)
    slug: Optional[str] = None # Если не передан - генерируется из названия


class ProductCategory(TaxonomyItem):
    image: Optional[str] = None
    description: Optional[str] = None
    product_count: int = 0


class CategoryCreate(TaxonomyCreate):
    image: Optional[str] = None
    description: Optional[str] = None


class Brand(TaxonomyItem):
    logo: Optional[str] = None


class BrandCreate(TaxonomyCreate):
    logo: Optional[str] = None


class Product(ApiModel):
    id: int
    name: str
    slug: str
    sku: Optional[str] = None
    description: str
    short_description: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    image: str
    category: Optional[TaxonomyItem] = None
    brand: Optional[TaxonomyItem] = None
    skin_types: List[TaxonomyItem] = []
    skin_concerns: List[TaxonomyItem] = []
    stock_quantity: int
    stock_status: str
    is_best_seller: bool
    is_new: bool
    is_organic: bool
    is_featured: bool
    rating: float
    review_count: int
    size: Optional[str] = None
    ingredients: Optional[str] = None
    how_to_use: Optional[List[str]] = None
    created_at: datetime


class ProductCreate(ApiModel):
    name: str = Field(..., min_length=1)
    slug: Optional[str] = None
    sku: Optional[str] = None
    description: str = ""
    short_description: Optional[str] = None
    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    image: str = ""
    category_id: Optional[int] = None
    brand_id: Optional[int] = None
    stock_quantity: int = Field(0, ge=0)
    is_best_seller: bool = False
    is_new: bool = False
    is_organic: bool = False
    is_featured: bool = False
    size: Optional[str] = None
    ingredients: Optional[str] = None
    how_to_use: Optional[List[str]] = None
    skin_type_ids: List[int] = []
    skin_concern_ids: List[int] = []


class ProductFilters(ApiModel):
    """Набор необязательных предикатов для выборки товаров."""
    category: Optional[str] = None # slug или название, без учета регистра
    brands: List[str] = [] # slug'и брендов
    skin_types: List[str] = []
    skin_concerns: List[str] = []
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    best_seller: Optional[bool] = None
    new: Optional[bool] = None
    organic: Optional[bool] = None
    featured: Optional[bool] = None
    min_rating: Optional[float] = Field(None, ge=0, le=5)
    search: Optional[str] = None
    sort: Optional[SortOption] = None
    page: int = Field(1, ge=1)
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, gt=0)

    @field_validator('search', 'category', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        # Пустая строка из формы поиска означает "без фильтра"
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PaginatedProducts(PaginatedResponse[Product]):
    pass


class ProductReview(ApiModel):
    id: int
    product_id: int
    rating: int
    title: Optional[str] = None
    comment: Optional[str] = None
    author: str
    location: Optional[str] = None
    is_verified: bool
    created_at: datetime


class ReviewCreate(ApiModel):
    product_id: int
    rating: int = Field(..., ge=1, le=5, description="Рейтинг от 1 до 5")
    title: Optional[str] = None
    comment: Optional[str] = None
    author: str = Field(..., min_length=1)
    location: Optional[str] = None
    is_verified: bool = False


class Testimonial(ApiModel):
    id: int
    rating: float
    text: str
    customer_name: str
    location: str
    product: str
    initials: str
    is_verified: bool

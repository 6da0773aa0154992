# app/routers/review.py

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.limiter import limiter
from app.dependencies import get_db, get_optional_current_user
from app.models.user import User
from app.schemas.product import ProductReview, ReviewCreate
from app.services import catalog as catalog_service

router = APIRouter()


@router.get("/products/{product_id}/reviews", response_model=List[ProductReview])
def get_product_reviews(product_id: int, db: Session = Depends(get_db)):
    """Отзывы о товаре в порядке добавления. Для неизвестного товара - пустой список."""
    return catalog_service.get_reviews_for_product(db, product_id)


@router.post("/reviews", response_model=ProductReview, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
def create_product_review(
    request: Request,
    review_data: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_current_user)
):
    """
    Создание нового отзыва. Рейтинг товара пересчитывается сразу.
    Оставить отзыв может и гость; авторизованный отзыв привязывается к пользователю.
    """
    user_id = current_user.id if current_user else None
    return catalog_service.create_review(db, review_data, user_id=user_id)

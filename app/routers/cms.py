# app/routers/cms.py
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List

from app.core import locales
from app.core.limiter import limiter
from app.dependencies import get_admin_user, get_db
from app.models.user import User
from app.schemas.cms import (
    BlogPost, BlogPostCreate, Consultation, ConsultationCreate,
    NewsletterSubscribe, NewsletterSubscription
)
from app.schemas.product import Testimonial
from app.services import content as content_service

router = APIRouter()


@router.get("/blog", response_model=List[BlogPost])
def get_blog_posts(db: Session = Depends(get_db)):
    """Статьи блога, новые сверху."""
    return content_service.get_blog_posts(db)


@router.get("/blog/{slug}", response_model=BlogPost)
def get_blog_post(slug: str, db: Session = Depends(get_db)):
    post = content_service.get_blog_post_by_slug(db, slug)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_BLOG_POST_NOT_FOUND)
    return post


@router.post("/blog", response_model=BlogPost, status_code=status.HTTP_201_CREATED)
def create_blog_post(
    post_data: BlogPostCreate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    return content_service.create_blog_post(db, post_data)


@router.get("/testimonials", response_model=List[Testimonial])
def get_testimonials(db: Session = Depends(get_db)):
    return content_service.get_testimonials(db)


@router.post("/consultations", response_model=Consultation, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
def request_consultation(
    request: Request,
    consultation_data: ConsultationCreate,
    db: Session = Depends(get_db)
):
    """Заявка на консультацию по уходу за кожей."""
    return content_service.create_consultation(db, consultation_data)


@router.post("/newsletter", response_model=NewsletterSubscription, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
def subscribe_newsletter(
    request: Request,
    subscription_data: NewsletterSubscribe,
    db: Session = Depends(get_db)
):
    return content_service.subscribe_to_newsletter(db, subscription_data.email)

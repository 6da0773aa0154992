# app/services/content.py

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core import locales
from app.crud import catalog as crud_catalog
from app.crud import content as crud_content
from app.schemas.cms import (
    BlogPost, BlogPostCreate, Consultation, ConsultationCreate, NewsletterSubscription
)
from app.schemas.product import Testimonial
from app.services.catalog import build_slug

logger = logging.getLogger(__name__)


# --- Блог ---

def get_blog_posts(db: Session) -> List[BlogPost]:
    return [BlogPost.model_validate(p) for p in crud_content.get_blog_posts(db)]


def get_blog_post_by_slug(db: Session, slug: str) -> Optional[BlogPost]:
    post = crud_content.get_blog_post_by_slug(db, slug)
    return BlogPost.model_validate(post) if post else None


def create_blog_post(db: Session, data: BlogPostCreate) -> BlogPost:
    fields = data.model_dump()
    fields["slug"] = build_slug(data.slug or data.title)
    if crud_content.get_blog_post_by_slug(db, fields["slug"]):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=locales.ERROR_SLUG_TAKEN.format(slug=fields["slug"])
        )
    post = crud_content.create_blog_post(db, **fields)
    logger.info(f"Blog post '{post.slug}' published.")
    return BlogPost.model_validate(post)


# --- Отзывы покупателей на главной ---

def get_testimonials(db: Session) -> List[Testimonial]:
    return [Testimonial.model_validate(t) for t in crud_catalog.get_testimonials(db)]


# --- Консультации ---

def create_consultation(db: Session, data: ConsultationCreate) -> Consultation:
    """Сохраняет заявку на консультацию. Статус всегда начинается с 'pending'."""
    consultation = crud_content.create_consultation(db, status="pending", **data.model_dump())
    logger.info(f"Consultation request {consultation.id} received from {consultation.email}.")
    return Consultation.model_validate(consultation)


# --- Рассылка ---

def subscribe_to_newsletter(db: Session, email: str) -> NewsletterSubscription:
    if crud_content.get_subscription_by_email(db, email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=locales.ERROR_ALREADY_SUBSCRIBED)
    subscription = crud_content.create_subscription(db, email=email.lower())
    logger.info(f"New newsletter subscriber: {subscription.email}")
    return NewsletterSubscription.model_validate(subscription)

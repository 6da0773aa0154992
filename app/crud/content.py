# app/crud/content.py
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.content import BlogPost, Consultation, NewsletterSubscription

# --- Блог ---

def get_blog_posts(db: Session) -> List[BlogPost]:
    return db.query(BlogPost).order_by(BlogPost.published_at.desc(), BlogPost.id.desc()).all()

def get_blog_post_by_slug(db: Session, slug: str) -> BlogPost | None:
    return db.query(BlogPost).filter(BlogPost.slug == slug).first()

def create_blog_post(db: Session, **fields) -> BlogPost:
    post = BlogPost(**fields)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

# --- Консультации ---

def create_consultation(db: Session, **fields) -> Consultation:
    consultation = Consultation(**fields)
    db.add(consultation)
    db.commit()
    db.refresh(consultation)
    return consultation

def get_consultations(db: Session, skip: int = 0, limit: int = 20) -> List[Consultation]:
    return db.query(Consultation).order_by(Consultation.id.desc()).offset(skip).limit(limit).all()

def count_consultations(db: Session, status: str | None = None) -> int:
    query = db.query(func.count(Consultation.id))
    if status:
        query = query.filter(Consultation.status == status)
    return query.scalar()

# --- Рассылка ---

def get_subscription_by_email(db: Session, email: str) -> NewsletterSubscription | None:
    return db.query(NewsletterSubscription).filter(func.lower(NewsletterSubscription.email) == email.lower()).first()

def create_subscription(db: Session, email: str) -> NewsletterSubscription:
    subscription = NewsletterSubscription(email=email)
    db.add(subscription)
    db.commit()
    db.refresh(subscription)
    return subscription

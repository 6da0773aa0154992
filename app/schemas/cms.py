# app/schemas/cms.py
from datetime import datetime
from pydantic import EmailStr, Field
from typing import List, Optional

from app.schemas.common import ApiModel


class BlogPost(ApiModel):
    id: int
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: str
    image: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    published_at: datetime


class BlogPostCreate(ApiModel):
    title: str = Field(..., min_length=1)
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: str
    image: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None


class ConsultationCreate(ApiModel):
    full_name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=10)
    skin_type: Optional[str] = None
    skin_concerns: List[str] = []
    additional_info: Optional[str] = None
    preferred_date: Optional[str] = None
    preferred_time: Optional[str] = None


class Consultation(ApiModel):
    id: int
    full_name: str
    email: str
    phone: str
    skin_type: Optional[str] = None
    skin_concerns: Optional[List[str]] = None
    additional_info: Optional[str] = None
    preferred_date: Optional[str] = None
    preferred_time: Optional[str] = None
    status: str
    created_at: datetime


class NewsletterSubscribe(ApiModel):
    email: EmailStr


class NewsletterSubscription(ApiModel):
    id: int
    email: str
    created_at: datetime

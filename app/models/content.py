# app/models/content.py
from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from app.db.session import Base, utcnow


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    image = Column(String, nullable=True)
    author = Column(String, nullable=True)
    category = Column(String, nullable=True)
    published_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class Consultation(Base):
    """Заявка на консультацию по уходу за кожей. Только добавляются, не изменяются."""
    __tablename__ = "consultations"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    skin_type = Column(String, nullable=True)
    skin_concerns = Column(JSON, nullable=True)
    additional_info = Column(Text, nullable=True)
    preferred_date = Column(String, nullable=True)
    preferred_time = Column(String, nullable=True)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class NewsletterSubscription(Base):
    __tablename__ = "newsletter_subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

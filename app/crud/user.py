# app/crud/user.py
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.user import User


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Получает пользователя по его первичному ключу."""
    return db.get(User, user_id)

def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()

def create_user(db: Session, password_hash: str, **fields) -> User:
    """Создает нового пользователя. Пароль сюда приходит уже захешированным."""
    db_user = User(password_hash=password_hash, **fields)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def count_customers(db: Session) -> int:
    return db.query(func.count(User.id)).filter(User.is_admin.is_(False)).scalar()

# app/services/auth.py

import logging
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.core import locales
from app.core.config import settings
from app.crud import user as crud_user
from app.models.user import User
from app.schemas.user import Token, UserCreate

logger = logging.getLogger(__name__)

# pbkdf2_sha256 реализован в самом passlib и не требует отдельного бэкенда
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Создает JWT токен."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def register_user(db: Session, user_data: UserCreate) -> User:
    """
    Регистрирует пользователя. Имя и email должны быть уникальны (иначе 409).
    Пароль хранится только в виде хеша.
    """
    if crud_user.get_user_by_username(db, user_data.username):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=locales.ERROR_USERNAME_TAKEN)
    if crud_user.get_user_by_email(db, user_data.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=locales.ERROR_EMAIL_TAKEN)

    user = crud_user.create_user(
        db,
        password_hash=hash_password(user_data.password),
        **user_data.model_dump(exclude={"password"})
    )
    logger.info(f"New user registered: '{user.username}' (ID: {user.id}).")
    return user


def authenticate_user(db: Session, username: str, password: str) -> Token:
    """Проверяет логин/пароль и выдает access-токен. Неверные данные -> 401."""
    user = crud_user.get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for username '{username}'.")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=locales.ERROR_INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={"sub": str(user.id)})
    logger.info(f"User {user.id} logged in.")
    return Token(access_token=access_token)

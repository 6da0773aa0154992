# app/dependencies.py

import logging
from typing import Optional, Iterator
from contextlib import contextmanager

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from fastapi import Request
from app.core import locales
from app.core.config import settings
from app.db.session import SessionLocal
from app.models.user import User

# --- Инициализация логгера ---
logger = logging.getLogger(__name__)

# --- Схемы аутентификации ---
strict_bearer_scheme = HTTPBearer(auto_error=False)
optional_bearer_scheme = HTTPBearer(auto_error=False)

# --- Управление сессией БД ---
def get_db() -> Iterator[Session]:
    """
    Основная зависимость FastAPI для получения сессии БД.
    Это генератор, который корректно работает с `Depends`.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def get_db_context() -> Iterator[Session]:
    """
    Контекстный менеджер для получения сессии БД вне FastAPI (фоновые задачи, скрипты).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# --- Зависимости аутентификации и авторизации ---

def _user_id_from_token(token: str) -> Optional[int]:
    """Достает ID пользователя из JWT. Невалидный токен -> None."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT Error during token decoding: {e}")
        return None

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        logger.warning("Token payload is missing a valid 'sub' (user_id).")
        return None
    return int(user_id)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(strict_bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    ОБЯЗАТЕЛЬНАЯ зависимость.
    Требует валидный токен. Если его нет или он невалиден - вызывает ошибку 401.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not credentials:
        raise credentials_exception

    user_id = _user_id_from_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        logger.warning(f"User with ID {user_id} from token not found in DB.")
        raise credentials_exception
    request.state.user = user
    logger.debug(f"Successfully authenticated user ID: {user.id} ({user.username})")
    return user


def get_optional_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    ОПЦИОНАЛЬНАЯ зависимость.
    Если токен предоставлен и валиден - возвращает пользователя.
    Если токен не предоставлен или невалиден - возвращает None.
    """
    if not credentials:
        return None

    user_id = _user_id_from_token(credentials.credentials)
    if user_id is None:
        return None

    user = db.get(User, user_id)
    request.state.user = user
    if not user:
        logger.warning(f"Optional user with ID {user_id} from token not found in DB.")
    return user


def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    """
    Зависимость для защиты админских эндпоинтов.
    Админ - пользователь с флагом is_admin или из списка ADMIN_USERNAMES.
    """
    if not current_user.is_admin and current_user.username not in settings.ADMIN_USERNAMES:
        logger.warning(f"Permission denied for user '{current_user.username}' (ID: {current_user.id}).")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=locales.ERROR_ADMIN_ONLY
        )

    logger.info(f"Admin access GRANTED for user '{current_user.username}'.")
    return current_user

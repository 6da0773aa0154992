# app/core/limiter.py

import logging
from typing import Optional

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)

# --- Функция-ключ для идентификации запросов ---

def key_func(request: Request) -> str:
    """
    Определяет, как идентифицировать запрос для применения лимита.
    Приоритет: ID пользователя (если авторизован) -> IP-адрес.
    """
    # Пользователь мог быть уже извлечен в зависимостях
    user: Optional[User] = getattr(request.state, "user", None)

    if user and user.id:
        return f"user:{user.id}"

    return get_remote_address(request)

# --- Создание и конфигурация лимитера ---

# Хранилище счетчиков задается в настройках: "memory://" для одного процесса,
# "redis://host:port" если сервис запущен в несколько воркеров.
limiter = Limiter(
    key_func=key_func,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="moving-window",
)

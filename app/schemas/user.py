# app/schemas/user.py
from datetime import datetime
from pydantic import EmailStr, Field
from typing import Optional

from app.schemas.common import ApiModel


# Схема для регистрации
class UserCreate(ApiModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None


class UserLogin(ApiModel):
    username: str
    password: str


# Схема пользователя, которую отдаем клиенту. Пароля здесь нет и быть не должно.
class User(ApiModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    is_admin: bool = False
    created_at: datetime


# Схема для ответа с токеном
class Token(ApiModel):
    access_token: str
    token_type: str = "bearer"

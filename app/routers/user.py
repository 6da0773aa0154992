# app/routers/user.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.core.limiter import limiter
from app.dependencies import get_current_user, get_db
from app.models.user import User as UserModel
from app.schemas.user import User, UserCreate
from app.services import auth as auth_service

router = APIRouter()


@router.post("/users/register", response_model=User, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
def register(
    request: Request,
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """Регистрация нового пользователя. Пароль в ответ никогда не попадает."""
    return auth_service.register_user(db, user_data)


@router.get("/users/me", response_model=User)
def read_users_me(current_user: UserModel = Depends(get_current_user)):
    return current_user

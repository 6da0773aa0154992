# app/routers/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.limiter import limiter
from app.dependencies import get_db
from app.schemas.user import Token, UserLogin
from app.services import auth as auth_service

router = APIRouter()


@router.get("/")
def read_root():
    return {"status": "ok"}


@router.post("/auth/login", response_model=Token)
@limiter.limit("5/minute")
def login(
    request: Request,
    login_data: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Аутентифицирует пользователя по логину и паролю и выдает JWT.
    Защищено лимитом в 5 запросов в минуту с одного IP.
    """
    return auth_service.authenticate_user(db, login_data.username, login_data.password)

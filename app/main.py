# app/main.py

import logging
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

# Конфигурация и ядро
from app.core import locales
from app.core.config import settings as config
from app.core.limiter import limiter
from app.core.logging_config import setup_logging
from app.db.init_db import init_db
from app.db.session import engine

# Роутеры FastAPI
from app.routers import (
    auth, user, catalog, review, cart, order, cms, admin as admin_router
)

# Фоновые задачи
from app.services.cart_cleanup import cleanup_abandoned_carts_task

# --- Инициализация ---
logger = logging.getLogger(__name__)
scheduler = AsyncIOScheduler()

# --- Обработчики ошибок ---
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Некорректные входные данные -> 400, до любого обращения к хранилищу."""
    logger.warning(f"Validation error for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": locales.ERROR_INVALID_REQUEST, "errors": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Глобальный обработчик для всех необработанных исключений.
    Логирует ошибку с трейсбеком, клиенту внутренние детали не отдает.
    """
    logger.critical(f"Unhandled exception for request: {request.method} {request.url}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": locales.ERROR_INTERNAL},
    )

# --- Lifespan Manager (запуск и остановка приложения) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Application lifespan startup...")

    init_db(engine, seed=config.SEED_CATALOG)

    if not scheduler.running:
        scheduler.add_job(cleanup_abandoned_carts_task, 'cron', hour=4, minute=0)
        scheduler.start()
        logger.info("Scheduler started with background jobs.")

    yield

    # Код при остановке
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler shut down.")

# --- Создание FastAPI приложения ---
app = FastAPI(
    title="Skincare Storefront API",
    description="Backend for the skincare e-commerce storefront",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS, # Разрешить запросы с этих доменов
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Лимитер запросов ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# --- Регистрация обработчиков исключений ---
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Подключение роутеров FastAPI ---
api_router = APIRouter(prefix="/api")

# Публичные эндпоинты
api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(user.router, tags=["Users"])
api_router.include_router(catalog.router, tags=["Catalog"])
api_router.include_router(review.router, tags=["Reviews"])
api_router.include_router(cart.router, tags=["Cart"])
api_router.include_router(order.router, tags=["Orders"])
api_router.include_router(cms.router, tags=["Content"])

# Админские эндпоинты
api_router.include_router(admin_router.router, prefix="/admin", tags=["Admin"])

# Подключаем главный роутер к приложению
app.include_router(api_router)

# app/routers/admin.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.dependencies import get_db, get_admin_user
from app.schemas.admin import AdminDashboardStats, PaginatedConsultations
from app.schemas.order import PaginatedOrders
from app.services import admin as admin_service

# Применяем защиту ко всем эндпоинтам в этом роутере.
# Любой запрос сюда сначала пройдет через get_admin_user.
router = APIRouter(dependencies=[Depends(get_admin_user)])


@router.get("/dashboard", response_model=AdminDashboardStats)
def get_admin_dashboard(db: Session = Depends(get_db)):
    """
    [АДМИН] Возвращает сводную статистику для главного экрана админ-панели.
    """
    return admin_service.get_dashboard_stats(db)


@router.get("/orders", response_model=PaginatedOrders)
def get_orders_list(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """[АДМИН] Все заказы магазина, новые сверху."""
    return admin_service.get_orders(db, page=page, size=size)


@router.get("/consultations", response_model=PaginatedConsultations)
def get_consultations_list(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return admin_service.get_consultations(db, page=page, size=size)

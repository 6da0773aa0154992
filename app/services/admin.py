# app/services/admin.py

import logging
import math

from sqlalchemy.orm import Session

from app.crud import catalog as crud_catalog
from app.crud import content as crud_content
from app.crud import order as crud_order
from app.crud import user as crud_user
from app.schemas.admin import AdminDashboardStats, PaginatedConsultations
from app.schemas.cms import Consultation
from app.schemas.order import PaginatedOrders
from app.services import order as order_service

logger = logging.getLogger(__name__)


def get_dashboard_stats(db: Session) -> AdminDashboardStats:
    """Собирает статистику для админской приборной панели."""
    logger.info("Calculating dashboard stats.")
    return AdminDashboardStats(
        total_sales=round(crud_order.sum_order_totals(db), 2),
        total_orders=crud_order.count_orders(db),
        pending_orders=crud_order.count_orders(db, status="pending"),
        total_products=crud_catalog.count_products(db),
        total_customers=crud_user.count_customers(db),
        pending_consultations=crud_content.count_consultations(db, status="pending"),
    )


def get_orders(db: Session, page: int, size: int) -> PaginatedOrders:
    return order_service.list_orders(db, page=page, size=size)


def get_consultations(db: Session, page: int, size: int) -> PaginatedConsultations:
    total = crud_content.count_consultations(db)
    consultations = crud_content.get_consultations(db, skip=(page - 1) * size, limit=size)
    return PaginatedConsultations(
        items=[Consultation.model_validate(c) for c in consultations],
        total=total,
        page=page,
        limit=size,
        total_pages=math.ceil(total / size),
    )

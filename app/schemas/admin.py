# app/schemas/admin.py
from app.schemas.cms import Consultation
from app.schemas.common import ApiModel, PaginatedResponse


class AdminDashboardStats(ApiModel):
    """Сводка для админской приборной панели."""
    total_sales: float
    total_orders: int
    pending_orders: int
    total_products: int
    total_customers: int
    pending_consultations: int


class PaginatedConsultations(PaginatedResponse[Consultation]):
    pass

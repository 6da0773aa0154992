# tests/test_admin.py

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.user import User
from app.schemas.cms import ConsultationCreate
from app.services import content as content_service
from app.services.auth import create_access_token

pytestmark = pytest.mark.asyncio

ADMIN_ENDPOINTS = ["/api/admin/dashboard", "/api/admin/orders", "/api/admin/consultations"]


async def test_admin_requires_auth(client: AsyncClient, auth_headers: dict):
    for endpoint in ADMIN_ENDPOINTS:
        assert (await client.get(endpoint)).status_code == 401
        assert (await client.get(endpoint, headers=auth_headers)).status_code == 403


async def test_admin_by_username_setting(client: AsyncClient, test_user: User, mocker):
    mocker.patch.object(settings, "ADMIN_USERNAMES_STR", f"someone,{test_user.username}")
    token = create_access_token(data={"sub": str(test_user.id)})

    response = await client.get("/api/admin/dashboard", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


async def test_dashboard_stats(
    client: AsyncClient, db_session: Session, admin_auth_headers: dict, test_user: User, sample_catalog: dict
):
    product_id = sample_catalog["charcoal-detox-mask"].id
    order = {
        "customerName": "Amara Owusu",
        "customerEmail": "amara@example.com",
        "customerPhone": "0244123456",
        "shippingAddress": "12 Oxford Street",
        "shippingCity": "Accra",
        "shippingRegion": "Greater Accra",
        "paymentMethod": "cash-on-delivery",
        "items": [{"productId": product_id, "quantity": 2}],
    }
    assert (await client.post("/api/orders", json=order)).status_code == 201
    content_service.create_consultation(
        db_session, ConsultationCreate(full_name="Esi Boateng", email="esi@example.com", phone="0271234567")
    )

    response = await client.get("/api/admin/dashboard", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "totalSales": 72.5, # 2 x 28.75 + доставка 15
        "totalOrders": 1,
        "pendingOrders": 1,
        "totalProducts": 4,
        "totalCustomers": 1,
        "pendingConsultations": 1,
    }

    response = await client.get("/api/admin/orders", headers=admin_auth_headers)
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["customerName"] == "Amara Owusu"

    response = await client.get("/api/admin/consultations", params={"size": 10}, headers=admin_auth_headers)
    body = response.json()
    assert body["totalPages"] == 1
    assert body["items"][0]["fullName"] == "Esi Boateng"

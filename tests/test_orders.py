# tests/test_orders.py

import re

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from app.services import cart as cart_service

pytestmark = pytest.mark.asyncio

SESSION_ID = "checkout-session"

CUSTOMER = {
    "customerName": "Amara Owusu",
    "customerEmail": "amara@example.com",
    "customerPhone": "0244123456",
    "shippingAddress": "12 Oxford Street",
    "shippingCity": "Accra",
    "shippingRegion": "Greater Accra",
    "paymentMethod": "momo-mtn",
}


async def test_order_from_session_cart(client: AsyncClient, db_session: Session, sample_catalog: dict):
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["glow-serum"].id, 2)
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["hydrating-moisturizer"].id, 1)

    response = await client.post("/api/orders", json={**CUSTOMER, "sessionId": SESSION_ID})

    assert response.status_code == 201
    order = response.json()
    assert re.fullmatch(r"ORD-\d+-\d{4}", order["orderNumber"])
    assert order["status"] == "pending"
    assert order["paymentStatus"] == "pending"
    assert order["subtotal"] == 124.48
    assert order["shippingFee"] == 15.0
    assert order["discount"] == 0
    assert order["total"] == 139.48
    assert [(i["productName"], i["productPrice"], i["quantity"]) for i in order["items"]] == [
        ("Glow Serum", 45.99, 2),
        ("Hydrating Moisturizer", 32.5, 1),
    ]

    # Корзина очищена в той же транзакции
    cart = cart_service.get_cart_summary(db_session, SESSION_ID)
    assert cart.items == []


async def test_order_snapshots_prices(client: AsyncClient, db_session: Session, sample_catalog: dict):
    product = sample_catalog["glow-serum"]
    response = await client.post("/api/orders", json={**CUSTOMER, "items": [{"productId": product.id, "quantity": 1}]})
    order_number = response.json()["orderNumber"]

    product.price = 99.0
    product.name = "Glow Serum (New Formula)"
    db_session.commit()

    response = await client.get(f"/api/orders/{order_number}")
    assert response.status_code == 200
    line = response.json()["items"][0]
    assert line["productName"] == "Glow Serum"
    assert line["productPrice"] == 45.99


async def test_explicit_items_are_merged(client: AsyncClient, sample_catalog: dict):
    product_id = sample_catalog["charcoal-detox-mask"].id
    items = [{"productId": product_id, "quantity": 1}, {"productId": product_id, "quantity": 2}]

    response = await client.post("/api/orders", json={**CUSTOMER, "items": items})

    assert response.status_code == 201
    order = response.json()
    assert len(order["items"]) == 1
    assert order["items"][0]["quantity"] == 3
    assert order["items"][0]["total"] == 86.25


async def test_order_with_coupon(client: AsyncClient, sample_catalog: dict):
    items = [{"productId": sample_catalog["hydrating-moisturizer"].id, "quantity": 7}]

    response = await client.post("/api/orders", json={**CUSTOMER, "items": items, "couponCode": "glow10"})

    order = response.json()
    assert order["subtotal"] == 227.5
    assert order["shippingFee"] == 0
    assert order["discount"] == 22.75
    assert order["total"] == 204.75
    assert order["couponCode"] == "GLOW10"


async def test_order_errors(client: AsyncClient, db_session: Session, sample_catalog: dict):
    # Пустая корзина
    cart_service.get_cart_summary(db_session, SESSION_ID)
    assert (await client.post("/api/orders", json={**CUSTOMER, "sessionId": SESSION_ID})).status_code == 400
    assert (await client.post("/api/orders", json={**CUSTOMER, "sessionId": "never-seen"})).status_code == 400
    assert (await client.post("/api/orders", json={**CUSTOMER, "items": []})).status_code == 400

    # Нет источника позиций / оба источника сразу
    assert (await client.post("/api/orders", json=CUSTOMER)).status_code == 400
    both = {**CUSTOMER, "sessionId": SESSION_ID, "items": [{"productId": 1, "quantity": 1}]}
    assert (await client.post("/api/orders", json=both)).status_code == 400

    # Неизвестный товар, неверный промокод, неверный способ оплаты
    unknown = {**CUSTOMER, "items": [{"productId": 999, "quantity": 1}]}
    assert (await client.post("/api/orders", json=unknown)).status_code == 404

    items = [{"productId": sample_catalog["glow-serum"].id, "quantity": 1}]
    response = await client.post("/api/orders", json={**CUSTOMER, "items": items, "couponCode": "NOPE"})
    assert response.status_code == 400

    response = await client.post("/api/orders", json={**CUSTOMER, "items": items, "paymentMethod": "bitcoin"})
    assert response.status_code == 400

    assert (await client.get("/api/orders/ORD-0-0000")).status_code == 404

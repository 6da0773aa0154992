# tests/test_cart.py

import pytest
from fastapi import HTTPException
from httpx import AsyncClient
from sqlalchemy.orm import Session

from app.services import cart as cart_service

pytestmark = pytest.mark.asyncio

SESSION_ID = "sess-test-123"


# --- Сервис корзины ---

async def test_repeated_add_sums_quantity(db_session: Session, sample_catalog: dict):
    product_id = sample_catalog["glow-serum"].id
    for quantity in (1, 2, 3):
        cart_service.add_item(db_session, SESSION_ID, product_id, quantity)

    cart = cart_service.get_cart_summary(db_session, SESSION_ID)
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 6


async def test_quantity_is_capped(db_session: Session, sample_catalog: dict):
    product_id = sample_catalog["glow-serum"].id
    cart_service.add_item(db_session, SESSION_ID, product_id, 60)
    item = cart_service.add_item(db_session, SESSION_ID, product_id, 60)
    assert item.quantity == 99


async def test_add_unknown_product(db_session: Session, sample_catalog: dict):
    with pytest.raises(HTTPException) as exc_info:
        cart_service.add_item(db_session, SESSION_ID, 999, 1)
    assert exc_info.value.status_code == 404


async def test_subtotal_and_shipping(db_session: Session, sample_catalog: dict):
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["glow-serum"].id, 2)
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["hydrating-moisturizer"].id, 1)

    cart = cart_service.get_cart_summary(db_session, SESSION_ID)
    assert cart.subtotal == 124.48
    assert cart.item_count == 3
    assert cart.shipping_fee == 15.0
    assert cart.total == 139.48
    assert [item.line_total for item in cart.items] == [91.98, 32.5]


async def test_free_shipping_over_threshold(db_session: Session, sample_catalog: dict):
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["glow-serum"].id, 5)
    cart = cart_service.get_cart_summary(db_session, SESSION_ID)
    assert cart.subtotal == 229.95
    assert cart.shipping_fee == 0
    assert cart.total == 229.95


async def test_empty_cart_totals(db_session: Session):
    cart = cart_service.get_cart_summary(db_session, SESSION_ID)
    assert cart.items == []
    assert cart.subtotal == 0
    assert cart.shipping_fee == 0
    assert cart.total == 0


async def test_coupon_discount(db_session: Session, sample_catalog: dict):
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["glow-serum"].id, 2)
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["hydrating-moisturizer"].id, 1)

    cart = cart_service.get_cart_summary(db_session, SESSION_ID, coupon_code="glow10")
    assert cart.applied_coupon_code == "GLOW10"
    assert cart.discount == 12.45
    assert cart.total == 127.03
    assert cart.notifications[0].level == "success"


async def test_invalid_coupon_becomes_notification(db_session: Session, sample_catalog: dict):
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["glow-serum"].id, 1)

    cart = cart_service.get_cart_summary(db_session, SESSION_ID, coupon_code="FREESTUFF")
    assert cart.discount == 0
    assert cart.applied_coupon_code is None
    assert cart.notifications[0].level == "error"
    assert "FREESTUFF" in cart.notifications[0].message


async def test_save_for_later_then_move_to_cart(db_session: Session, sample_catalog: dict):
    product_id = sample_catalog["glow-serum"].id
    item = cart_service.add_item(db_session, SESSION_ID, product_id, 3)

    cart = cart_service.save_for_later(db_session, SESSION_ID, item.id)
    assert cart.items == []
    assert [saved.product_id for saved in cart.saved_items] == [product_id]

    cart = cart_service.move_to_cart(db_session, SESSION_ID, cart.saved_items[0].id)
    assert cart.saved_items == []
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 1


async def test_adding_saved_product_removes_it_from_saved(db_session: Session, sample_catalog: dict):
    product_id = sample_catalog["glow-serum"].id
    item = cart_service.add_item(db_session, SESSION_ID, product_id, 1)
    cart_service.save_for_later(db_session, SESSION_ID, item.id)

    cart_service.add_item(db_session, SESSION_ID, product_id, 2)

    cart = cart_service.get_cart_summary(db_session, SESSION_ID)
    assert cart.saved_items == []
    assert cart.items[0].quantity == 2


async def test_cannot_touch_other_sessions_items(db_session: Session, sample_catalog: dict):
    item = cart_service.add_item(db_session, "someone-else", sample_catalog["glow-serum"].id, 1)
    cart_service.get_cart_summary(db_session, SESSION_ID)

    with pytest.raises(HTTPException) as exc_info:
        cart_service.save_for_later(db_session, SESSION_ID, item.id)
    assert exc_info.value.status_code == 404


async def test_clear_cart_keeps_session_and_saved_items(db_session: Session, sample_catalog: dict):
    saved = cart_service.add_item(db_session, SESSION_ID, sample_catalog["glow-serum"].id, 1)
    cart_service.save_for_later(db_session, SESSION_ID, saved.id)
    cart_service.add_item(db_session, SESSION_ID, sample_catalog["hydrating-moisturizer"].id, 2)
    cart_id = cart_service.get_cart_summary(db_session, SESSION_ID).id

    cart_service.clear_cart(db_session, SESSION_ID)

    cart = cart_service.get_cart_summary(db_session, SESSION_ID)
    assert cart.id == cart_id
    assert cart.items == []
    assert len(cart.saved_items) == 1


# --- HTTP API ---

async def test_cart_flow_over_http(client: AsyncClient, sample_catalog: dict):
    product_id = sample_catalog["glow-serum"].id

    response = await client.post("/api/cart/items", json={"sessionId": SESSION_ID, "productId": product_id, "quantity": 2})
    assert response.status_code == 201
    item = response.json()
    assert item["quantity"] == 2
    assert item["product"]["slug"] == "glow-serum"

    response = await client.patch(f"/api/cart/items/{item['id']}", json={"quantity": 4})
    assert response.status_code == 200
    assert response.json()["quantity"] == 4

    response = await client.get("/api/cart", params={"sessionId": SESSION_ID})
    assert response.status_code == 200
    cart = response.json()
    assert cart["itemCount"] == 4
    assert cart["subtotal"] == 183.96
    assert cart["shippingFee"] == 15.0
    assert cart["freeShippingThreshold"] == 200.0

    response = await client.delete(f"/api/cart/items/{item['id']}")
    assert response.status_code == 204
    # Повторное удаление - не ошибка
    assert (await client.delete(f"/api/cart/items/{item['id']}")).status_code == 204

    cart = (await client.get("/api/cart", params={"sessionId": SESSION_ID})).json()
    assert cart["items"] == []


async def test_update_quantity_below_one_is_rejected(client: AsyncClient, sample_catalog: dict):
    response = await client.post(
        "/api/cart/items", json={"sessionId": SESSION_ID, "productId": sample_catalog["glow-serum"].id, "quantity": 3}
    )
    item_id = response.json()["id"]

    response = await client.patch(f"/api/cart/items/{item_id}", json={"quantity": 0})
    assert response.status_code == 400

    cart = (await client.get("/api/cart", params={"sessionId": SESSION_ID})).json()
    assert cart["items"][0]["quantity"] == 3


async def test_cart_errors(client: AsyncClient, sample_catalog: dict):
    assert (await client.get("/api/cart")).status_code == 400
    assert (await client.patch("/api/cart/items/999", json={"quantity": 1})).status_code == 404

    response = await client.post("/api/cart/items", json={"sessionId": SESSION_ID, "productId": 999})
    assert response.status_code == 404

    response = await client.post("/api/cart/items", json={"sessionId": SESSION_ID, "productId": 1, "quantity": 100})
    assert response.status_code == 400


async def test_saved_items_over_http(client: AsyncClient, sample_catalog: dict):
    response = await client.post(
        "/api/cart/items", json={"sessionId": SESSION_ID, "productId": sample_catalog["glow-serum"].id}
    )
    item_id = response.json()["id"]

    response = await client.post(f"/api/cart/items/{item_id}/save-for-later", params={"sessionId": SESSION_ID})
    assert response.status_code == 200
    saved_id = response.json()["savedItems"][0]["id"]

    response = await client.post(f"/api/cart/saved/{saved_id}/move-to-cart", params={"sessionId": SESSION_ID})
    assert response.status_code == 200
    body = response.json()
    assert body["savedItems"] == []
    assert body["items"][0]["quantity"] == 1

    response = await client.post(f"/api/cart/saved/{saved_id}/move-to-cart", params={"sessionId": SESSION_ID})
    assert response.status_code == 404

    response = await client.delete(f"/api/cart/saved/{saved_id}", params={"sessionId": SESSION_ID})
    assert response.status_code == 204


async def test_clear_cart_over_http(client: AsyncClient, sample_catalog: dict):
    await client.post("/api/cart/items", json={"sessionId": SESSION_ID, "productId": sample_catalog["glow-serum"].id})

    response = await client.delete("/api/cart", params={"sessionId": SESSION_ID})
    assert response.status_code == 204

    cart = (await client.get("/api/cart", params={"sessionId": SESSION_ID})).json()
    assert cart["items"] == []
    assert cart["sessionId"] == SESSION_ID

# tests/test_auth.py

import pytest
from httpx import AsyncClient

from app.models.user import User
from app.services.auth import create_access_token, verify_password

pytestmark = pytest.mark.asyncio

TEST_PASSWORD = "glow-up-2024" # пароль пользователей из conftest

NEW_USER = {
    "username": "kwame",
    "email": "kwame@example.com",
    "password": "shea-butter-99",
    "fullName": "Kwame Asante",
}


async def test_register_hides_password(client: AsyncClient, db_session):
    response = await client.post("/api/users/register", json=NEW_USER)

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "kwame"
    assert body["fullName"] == "Kwame Asante"
    assert "password" not in body
    assert "passwordHash" not in body

    db_user = db_session.query(User).filter_by(username="kwame").one()
    assert db_user.password_hash != NEW_USER["password"]
    assert verify_password(NEW_USER["password"], db_user.password_hash)


async def test_register_duplicates(client: AsyncClient, test_user: User):
    response = await client.post("/api/users/register", json={**NEW_USER, "username": test_user.username})
    assert response.status_code == 409

    response = await client.post("/api/users/register", json={**NEW_USER, "email": test_user.email.upper()})
    assert response.status_code == 409


async def test_register_validation(client: AsyncClient):
    assert (await client.post("/api/users/register", json={**NEW_USER, "password": "short"})).status_code == 400
    assert (await client.post("/api/users/register", json={**NEW_USER, "email": "not-an-email"})).status_code == 400


async def test_login_and_me(client: AsyncClient, test_user: User):
    response = await client.post("/api/auth/login", json={"username": test_user.username, "password": TEST_PASSWORD})
    assert response.status_code == 200
    token = response.json()
    assert token["tokenType"] == "bearer"

    response = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token['accessToken']}"})
    assert response.status_code == 200
    assert response.json()["id"] == test_user.id


async def test_login_wrong_password(client: AsyncClient, test_user: User):
    response = await client.post("/api/auth/login", json={"username": test_user.username, "password": "wrong-pass"})
    assert response.status_code == 401

    response = await client.post("/api/auth/login", json={"username": "nobody", "password": "whatever1"})
    assert response.status_code == 401


async def test_me_requires_valid_token(client: AsyncClient, db_session):
    assert (await client.get("/api/users/me")).status_code == 401
    assert (await client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})).status_code == 401

    token = create_access_token(data={"sub": "424242"})
    assert (await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})).status_code == 401

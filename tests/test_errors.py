# tests/test_errors.py

import pytest
from httpx import AsyncClient

from app.core import locales

pytestmark = pytest.mark.asyncio


async def test_validation_error_shape(client: AsyncClient):
    response = await client.post("/api/cart/items", json={"productId": "abc"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == locales.ERROR_INVALID_REQUEST
    assert {tuple(error["loc"])[-1] for error in body["errors"]} >= {"sessionId", "productId"}


async def test_internal_error_is_hidden(client: AsyncClient, mocker):
    mocker.patch(
        "app.services.catalog.get_all_categories",
        side_effect=RuntimeError("database exploded at /var/lib/secret"),
    )

    response = await client.get("/api/categories")

    assert response.status_code == 500
    assert response.json() == {"detail": locales.ERROR_INTERNAL}
    assert "secret" not in response.text

# app/clients/storefront.py

import logging
import secrets
from pathlib import Path
from typing import Dict

import httpx

logger = logging.getLogger(__name__)


class StorefrontClient:
    """
    Асинхронный клиент для JSON API магазина.
    В случае HTTP-ошибки (4xx/5xx) или сетевой ошибки логирует и выбрасывает исключение.
    """
    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        timeouts = httpx.Timeout(10.0, read=30.0)
        self.async_client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/api",
            timeout=timeouts,
            transport=transport,
        )

    async def request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        try:
            response = await self.async_client.request(method, endpoint, **kwargs)
            response.raise_for_status()
            return response
        except httpx.RequestError as e:
            logger.error(f"Network error during {method} request to {e.request.url!r}.", exc_info=True)
            raise
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error during {method} request to {e.request.url!r}: {e.response.text}", exc_info=True)
            raise

    async def get(self, endpoint: str, params: dict = None) -> dict:
        response = await self.request("GET", endpoint, params=params)
        return response.json()

    async def post(self, endpoint: str, json: dict = None, params: dict = None) -> dict:
        response = await self.request("POST", endpoint, json=json, params=params)
        return response.json()

    async def patch(self, endpoint: str, json: dict) -> dict:
        response = await self.request("PATCH", endpoint, json=json)
        return response.json()

    async def delete(self, endpoint: str, params: dict = None) -> httpx.Response:
        return await self.request("DELETE", endpoint, params=params)

    async def aclose(self) -> None:
        await self.async_client.aclose()


def load_or_create_session_id(session_file: str | Path) -> str:
    """Идентификатор сессии хранится локально и переживает перезапуск клиента."""
    path = Path(session_file)
    if path.exists():
        session_id = path.read_text(encoding="utf-8").strip()
        if session_id:
            return session_id
    session_id = secrets.token_urlsafe(16)
    path.write_text(session_id, encoding="utf-8")
    logger.info("Generated new cart session id.")
    return session_id


class SessionCart:
    """
    Корзина, состояние которой хранит сервер. Локально держим только
    идентификатор сессии и счетчик товаров, который меняется оптимистично:
    до ответа сервера, с откатом при ошибке.
    """
    def __init__(self, client: StorefrontClient, session_file: str | Path):
        self.client = client
        self.session_id = load_or_create_session_id(session_file)
        self.item_count = 0
        self._quantities: Dict[int, int] = {}

    async def refresh(self) -> dict:
        """Перечитывает корзину с сервера и синхронизирует счетчик."""
        cart = await self.client.get("/cart", params={"sessionId": self.session_id})
        self._quantities = {item["id"]: item["quantity"] for item in cart["items"]}
        self.item_count = cart["itemCount"]
        return cart

    async def add_to_cart(self, product_id: int, quantity: int = 1) -> dict:
        self.item_count += quantity
        try:
            item = await self.client.post(
                "/cart/items",
                json={"sessionId": self.session_id, "productId": product_id, "quantity": quantity},
            )
        except httpx.HTTPError:
            self.item_count -= quantity
            raise
        # Сервер мог ограничить количество, поэтому сверяемся
        await self.refresh()
        return item

    async def update_quantity(self, item_id: int, quantity: int) -> dict | None:
        if quantity < 1:
            return None
        known = item_id in self._quantities
        diff = quantity - self._quantities.get(item_id, 0)
        self.item_count += diff
        try:
            item = await self.client.patch(f"/cart/items/{item_id}", json={"quantity": quantity})
        except httpx.HTTPError:
            self.item_count -= diff
            raise
        if known:
            self._quantities[item_id] = item["quantity"]
        else:
            # Прежнее количество неизвестно, счетчик берем с сервера
            await self.refresh()
        return item

    async def remove_item(self, item_id: int) -> None:
        removed = self._quantities.get(item_id, 0)
        self.item_count -= removed
        try:
            await self.client.delete(f"/cart/items/{item_id}")
        except httpx.HTTPError:
            self.item_count += removed
            raise
        self._quantities.pop(item_id, None)

    async def clear(self) -> None:
        """Удаляет позиции на сервере. Идентификатор сессии не меняется."""
        previous_count, previous_quantities = self.item_count, self._quantities
        self.item_count, self._quantities = 0, {}
        try:
            await self.client.delete("/cart", params={"sessionId": self.session_id})
        except httpx.HTTPError:
            self.item_count, self._quantities = previous_count, previous_quantities
            raise

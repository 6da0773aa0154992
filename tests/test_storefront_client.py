# tests/test_storefront_client.py

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.clients.storefront import SessionCart, StorefrontClient, load_or_create_session_id
from app.main import app


@pytest.fixture
async def storefront(client: AsyncClient):
    # client уже подменил get_db на тестовую сессию
    storefront_client = StorefrontClient("http://test", transport=ASGITransport(app=app))
    yield storefront_client
    await storefront_client.aclose()


def test_session_id_is_persisted(tmp_path):
    session_file = tmp_path / "session"
    first = load_or_create_session_id(session_file)
    assert first
    assert load_or_create_session_id(session_file) == first


async def test_session_cart_round_trip(storefront: StorefrontClient, sample_catalog: dict, tmp_path):
    cart = SessionCart(storefront, tmp_path / "session")
    serum_id = sample_catalog["glow-serum"].id

    item = await cart.add_to_cart(serum_id, 2)
    assert cart.item_count == 2

    await cart.update_quantity(item["id"], 5)
    assert cart.item_count == 5

    # Игнорируется так же, как в локальной корзине
    assert await cart.update_quantity(item["id"], 0) is None
    assert cart.item_count == 5

    await cart.add_to_cart(sample_catalog["hydrating-moisturizer"].id)
    summary = await cart.refresh()
    assert summary["itemCount"] == 6
    assert cart.item_count == 6

    await cart.remove_item(item["id"])
    assert cart.item_count == 1

    session_id = cart.session_id
    await cart.clear()
    assert cart.item_count == 0
    assert cart.session_id == session_id
    assert (await cart.refresh())["items"] == []


async def test_add_is_rolled_back_on_error(storefront: StorefrontClient, sample_catalog: dict, tmp_path):
    cart = SessionCart(storefront, tmp_path / "session")

    with pytest.raises(httpx.HTTPStatusError):
        await cart.add_to_cart(999)
    assert cart.item_count == 0


async def test_update_of_item_added_elsewhere_keeps_count_exact(
    storefront: StorefrontClient, sample_catalog: dict, tmp_path
):
    session_file = tmp_path / "session"
    other_tab = SessionCart(storefront, session_file)
    item = await other_tab.add_to_cart(sample_catalog["glow-serum"].id, 2)
    await other_tab.add_to_cart(sample_catalog["hydrating-moisturizer"].id, 1)

    # Та же сессия, но позиции этой копии корзины еще не известны
    cart = SessionCart(storefront, session_file)
    assert cart.item_count == 0

    await cart.update_quantity(item["id"], 3)
    assert cart.item_count == 4


async def test_network_error_restores_state(tmp_path):
    def fail(request: httpx.Request):
        raise httpx.ConnectError("storefront is down", request=request)

    storefront_client = StorefrontClient("http://test", transport=httpx.MockTransport(fail))
    cart = SessionCart(storefront_client, tmp_path / "session")
    cart.item_count = 3

    with pytest.raises(httpx.ConnectError):
        await cart.clear()
    assert cart.item_count == 3
    await storefront_client.aclose()

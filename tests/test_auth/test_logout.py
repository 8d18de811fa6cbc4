import pytest
from httpx import AsyncClient


@pytest.mark.anyio
async def test_logout_ends_session(async_client: AsyncClient, sign_in):
    await sign_in()
    ok = await async_client.post("/messages/add/message", json={"message": {"name": "before"}})
    assert ok.status_code == 201

    resp = await async_client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out"}

    after = await async_client.post("/messages/add/message", json={"message": {"name": "after"}})
    assert after.status_code == 500
    assert after.json() == {"error": "You are not authenticated"}


@pytest.mark.anyio
async def test_logout_without_session_is_ok(async_client: AsyncClient):
    resp = await async_client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out"}

import pytest

pytestmark = pytest.mark.asyncio


async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.text == "hello world"


async def test_cors_allows_client_url(client):
    resp = await client.options(
        "/messaging/getMessages",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"

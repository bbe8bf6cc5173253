import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_endpoint(client: AsyncClient):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/api/v1/health")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_json_responses_declare_utf8(client: AsyncClient):
    r = await client.get("/health")
    assert r.headers["content-type"] == "application/json; charset=utf-8"


@pytest.mark.asyncio
async def test_routes_listing(client: AsyncClient):
    r = await client.get("/__routes")
    assert r.status_code == 200, r.text
    routes = r.json()
    assert "/api/v1/meals/{meal_id}  [DELETE,PUT]" in routes
    assert any(route.startswith("/api/v1/ai/suggestions") for route in routes)
    assert any(route.startswith("/api/v1/meals/{meal_id}") for route in routes)

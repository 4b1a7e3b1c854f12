"""Middleware tests: request ID, rate limiting, CORS, error envelopes."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

pytestmark = pytest.mark.asyncio


def _fake_redis(counts: list[int]) -> MagicMock:
    """Redis whose pipeline reports the given INCR results (EXPIRE results interleaved)."""
    results: list[object] = []
    for count in counts:
        results.extend([count, True])
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=results)
    redis = MagicMock()
    redis.pipeline.return_value = pipe
    return redis


async def test_request_id_generated(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert len(response.headers["x-request-id"]) == 36


async def test_request_id_preserved(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-Id": "test-abc-123"})
    assert response.headers["x-request-id"] == "test-abc-123"


async def test_no_rate_limit_without_redis(client: AsyncClient) -> None:
    response = await client.get("/apps/killboard")
    assert response.status_code == 200
    assert "x-ratelimit-limit" not in response.headers


async def test_rate_limit_headers(client: AsyncClient, monkeypatch) -> None:
    monkeypatch.setattr("arsenal.middleware.rate_limit.get_redis", lambda: _fake_redis([5]))
    response = await client.get("/apps/killboard")
    assert response.status_code == 200
    assert response.headers["x-ratelimit-limit"] == "100"
    assert response.headers["x-ratelimit-remaining"] == "95"


async def test_rate_limit_blocks_excess(client: AsyncClient, monkeypatch) -> None:
    monkeypatch.setattr("arsenal.middleware.rate_limit.get_redis", lambda: _fake_redis([101]))
    response = await client.get("/apps/killboard")
    assert response.status_code == 429
    assert response.headers["retry-after"] == "900"
    assert response.json()["success"] is False


async def test_admin_limit_is_stricter(client: AsyncClient, monkeypatch, store) -> None:
    monkeypatch.setattr("arsenal.middleware.rate_limit.get_redis", lambda: _fake_redis([21, 21]))
    response = await client.post("/apps/admin-bulk", json={"operation": "initialize_customers"})
    assert response.status_code == 429
    assert response.json()["error"] == "Too many admin requests, please try again later."
    assert store.fetch_counts == []


async def test_health_not_rate_limited(client: AsyncClient, monkeypatch) -> None:
    redis = _fake_redis([10_000])
    monkeypatch.setattr("arsenal.middleware.rate_limit.get_redis", lambda: redis)
    response = await client.get("/health")
    assert response.status_code == 200
    redis.pipeline.assert_not_called()


async def test_redis_outage_lets_requests_through(client: AsyncClient, monkeypatch) -> None:
    redis = _fake_redis([])
    redis.pipeline.return_value.execute = AsyncMock(side_effect=RedisConnectionError("down"))
    monkeypatch.setattr("arsenal.middleware.rate_limit.get_redis", lambda: redis)
    response = await client.get("/apps/killboard")
    assert response.status_code == 200


async def test_cors_preflight(client: AsyncClient) -> None:
    response = await client.options(
        "/apps/killboard",
        headers={
            "Origin": "https://rc-arsenal.myshopify.com",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert "access-control-allow-origin" in response.headers


async def test_404_lists_endpoints(client: AsyncClient) -> None:
    response = await client.get("/nonexistent-path")
    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Endpoint not found"
    assert "GET /apps/killboard" in data["available_endpoints"]


async def test_malformed_body_is_json_error(client: AsyncClient) -> None:
    response = await client.post(
        "/apps/admin-update",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["success"] is False


async def test_request_id_echoed_on_apps_routes(client: AsyncClient) -> None:
    response = await client.get("/apps/killboard", headers={"X-Request-Id": "storefront-77"})
    assert response.status_code == 200
    assert response.headers["x-request-id"] == "storefront-77"

"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from arsenal.config import Settings, get_settings
from arsenal.main import create_app
from arsenal.store.client import get_store
from arsenal.store.records import RawRecord
from fakes import FakeStore

ADMIN_SECRET = "test-admin-secret"


def make_record(
    numeric_id: int,
    attributes: dict[str, str] | None = None,
    name: str | None = None,
    created_at: str = "2024-01-01T00:00:00Z",
) -> RawRecord:
    return RawRecord(
        id=f"gid://shopify/Customer/{numeric_id}",
        display_name=name,
        created_at=created_at,
        attributes=dict(attributes or {}),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        admin_secret=ADMIN_SECRET,
        shopify_store_url="test-shop.myshopify.com",
        shopify_access_token="shpat_test",
    )


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest_asyncio.fixture
async def client(monkeypatch, store: FakeStore) -> AsyncGenerator[AsyncClient, None]:
    """ASGI client against a fresh app whose store is the in-memory fake."""
    monkeypatch.setenv("ARSENAL_ADMIN_SECRET", ADMIN_SECRET)
    monkeypatch.setenv("ARSENAL_LOG_FORMAT", "console")
    get_settings.cache_clear()

    app = create_app()
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    get_settings.cache_clear()

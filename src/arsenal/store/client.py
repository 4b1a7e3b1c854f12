"""Process-wide customer store."""

from arsenal.config import Settings
from arsenal.store.records import RemoteStore
from arsenal.store.shopify import ShopifyStore

_store: RemoteStore | None = None


async def init_store(settings: Settings) -> None:
    """Create the Shopify-backed store from settings."""
    global _store  # noqa: PLW0603
    _store = ShopifyStore(
        store_url=settings.shopify_store_url,
        access_token=settings.shopify_access_token,
        api_version=settings.shopify_api_version,
        metafield_limit=settings.metafield_fetch_limit,
        timeout=settings.shopify_timeout_seconds,
    )


async def close_store() -> None:
    """Close the store's HTTP client."""
    global _store  # noqa: PLW0603
    if _store:
        await _store.aclose()
        _store = None


def get_store() -> RemoteStore:
    """Get the store (FastAPI dependency)."""
    if _store is None:
        msg = "Store not initialized. Call init_store() first."
        raise RuntimeError(msg)
    return _store

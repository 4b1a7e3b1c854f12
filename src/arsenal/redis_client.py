"""Redis connection used for rate-limit counters."""

import redis.asyncio as redis

_client: redis.Redis | None = None


async def init_redis(url: str, max_connections: int = 20) -> None:
    """Connect the rate-limit Redis client."""
    global _client  # noqa: PLW0603
    _client = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=max_connections,
    )


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client:
        await _client.aclose()
        _client = None


def get_redis() -> redis.Redis:
    """Return the client; RuntimeError until init_redis() has run."""
    if _client is None:
        msg = "Redis not initialized. Call init_redis() first."
        raise RuntimeError(msg)
    return _client

"""Redis-backed fixed window rate limiting for the /apps endpoints."""

import time
from typing import Any

import structlog
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from arsenal.redis_client import get_redis

logger = structlog.get_logger()

_LIMITED_PREFIX = "/apps"
_ADMIN_PATHS = frozenset({"/apps/admin-update", "/apps/admin-bulk"})


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Count requests per client IP and window.

    Every /apps path counts against ``requests_per_window``; admin paths also
    count against the stricter ``admin_requests_per_window``.
    """

    def __init__(
        self,
        app: Any,  # noqa: ANN401
        requests_per_window: int = 100,
        admin_requests_per_window: int = 20,
        window_seconds: int = 900,
    ) -> None:
        super().__init__(app)
        self.requests_per_window = requests_per_window
        self.admin_requests_per_window = admin_requests_per_window
        self.window_seconds = window_seconds

    def _limits_for(self, path: str) -> list[tuple[str, int, str]]:
        limits = [("apps", self.requests_per_window, "Too many requests from this IP, please try again later.")]
        if path in _ADMIN_PATHS:
            limits.append(("admin", self.admin_requests_per_window, "Too many admin requests, please try again later."))
        return limits

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Check the applicable limits, return 429 if any is exceeded."""
        if not request.url.path.startswith(_LIMITED_PREFIX):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        window = int(time.time()) // self.window_seconds
        limits = self._limits_for(request.url.path)

        try:
            redis = get_redis()
        except RuntimeError:
            # Redis not initialized, no rate limiting
            return await call_next(request)

        pipe = redis.pipeline()
        for group, _limit, _message in limits:
            rate_key = f"ratelimit:{group}:{client_ip}:{window}"
            pipe.incr(rate_key)
            pipe.expire(rate_key, self.window_seconds + 1)
        try:
            results: list[Any] = await pipe.execute()
        except RedisError:
            logger.warning("rate_limit_unavailable", path=request.url.path, exc_info=True)
            return await call_next(request)
        counts: list[int] = results[::2]

        remaining = self.requests_per_window
        limit_header = self.requests_per_window
        for (_group, limit, message), count in zip(limits, counts):
            if count > limit:
                return JSONResponse(
                    status_code=429,
                    content={"success": False, "error": message},
                    headers={
                        "Retry-After": str(self.window_seconds),
                        "X-RateLimit-Remaining": "0",
                        "X-RateLimit-Limit": str(limit),
                    },
                )
            if limit - count < remaining:
                remaining = limit - count
                limit_header = limit

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(max(0, remaining))
        response.headers["X-RateLimit-Limit"] = str(limit_header)
        return response

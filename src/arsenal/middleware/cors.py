"""CORS for storefront themes calling the /apps endpoints from the browser."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from arsenal.config import Settings

# Headers the killboard/garage widgets read back
_EXPOSED_HEADERS = ["X-Request-Id", "X-RateLimit-Remaining", "X-RateLimit-Limit", "Retry-After"]


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Admin calls authenticate with a body secret, not cookies, so credentials stay off."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-Request-Id"],
        expose_headers=_EXPOSED_HEADERS,
        max_age=600,
    )

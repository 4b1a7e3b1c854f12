"""Banner, health, readiness, and version endpoints."""

from fastapi import APIRouter

from arsenal.config import get_settings
from arsenal.redis_client import get_redis

router = APIRouter()

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /apps/killboard",
    "GET /apps/garage-data",
    "POST /apps/admin-update",
    "POST /apps/admin-bulk",
]


@router.get("/")
async def index() -> dict[str, object]:
    """Service banner."""
    return {
        "status": "RC Arsenal API is running",
        "version": get_settings().app_version,
        "endpoints": [
            "GET /apps/killboard - Public leaderboard data",
            "GET /apps/garage-data - Customer profile data",
            "POST /apps/admin-update - Admin stats update (requires secret)",
            "POST /apps/admin-bulk - Admin bulk operations (requires secret)",
        ],
    }


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness() -> dict[str, object]:
    """Readiness probe: checks Redis connectivity."""
    checks: dict[str, object] = {}

    try:
        redis = get_redis()
        await redis.ping()
        checks["redis"] = "ok"
    except Exception as exc:
        checks["redis"] = f"error: {exc}"

    all_ok = all(v == "ok" for v in checks.values())
    return {"status": "ready" if all_ok else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    settings = get_settings()
    return {
        "version": settings.app_version,
        "environment": settings.environment,
    }

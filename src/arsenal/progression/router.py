"""Storefront and admin endpoints under /apps."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Query

from arsenal.admin import verify_admin_secret
from arsenal.config import Settings, get_settings
from arsenal.errors import ValidationError
from arsenal.progression.leaderboard_service import LeaderboardService
from arsenal.progression.profile_service import ProfileService
from arsenal.progression.schemas import (
    AdminBulkRequest,
    AdminBulkResponse,
    AdminUpdateRequest,
    AdminUpdateResponse,
    BulkResultItem,
    GarageData,
    GarageResponse,
    LeaderboardEntryResponse,
    LeaderboardResponse,
)
from arsenal.progression.sync_service import MetafieldSyncService
from arsenal.store.client import get_store
from arsenal.store.records import RemoteStore

router = APIRouter(prefix="/apps", tags=["Progression"])

BULK_OPERATIONS = frozenset({"initialize_customers"})


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _customer_id(value: Any) -> str | None:
    """Accept a customer id sent as a JSON string or integer."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError("customer_id must be a string or an integer", error="Invalid customer_id")
    return str(value)


def get_leaderboard_service(
    store: RemoteStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> LeaderboardService:
    return LeaderboardService(store, settings)


def get_profile_service(
    store: RemoteStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ProfileService:
    return ProfileService(store, settings)


def get_sync_service(
    store: RemoteStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> MetafieldSyncService:
    return MetafieldSyncService(store, settings)


# ── Public endpoints ──


@router.get("/killboard", response_model=LeaderboardResponse)
async def killboard(service: LeaderboardService = Depends(get_leaderboard_service)):
    """Ranked leaderboard of every active pilot in the fetched batch."""
    entries = await service.get_leaderboard()
    items = [
        LeaderboardEntryResponse(
            id=e.profile.id,
            username=e.profile.username,
            xp=e.profile.xp,
            level=e.profile.level,
            victories=e.profile.victories,
            country=e.profile.country,
            faction=e.profile.faction,
            tier=e.profile.tier.name,
            entries=e.profile.victories,
            created_at=e.created_at,
            rank=e.rank,
        )
        for e in entries
    ]
    return LeaderboardResponse(leaderboard=items, total=len(items), last_updated=_now_iso())


@router.get("/garage-data", response_model=GarageResponse)
async def garage_data(
    customer_id: str | None = Query(default=None),
    service: ProfileService = Depends(get_profile_service),
):
    """Profile of one pilot with progress toward the next level."""
    garage = await service.get_profile(customer_id)
    profile = garage.profile
    data = GarageData(
        customer_id=profile.id,
        username=profile.username,
        level=profile.level,
        xp=profile.xp,
        victories=profile.victories,
        country=profile.country,
        faction=profile.faction,
        tier=profile.tier.name,
        tier_number=profile.tier.number,
        avatar_url=garage.avatar_url,
        car_image_url=garage.car_image_url,
        achievements=garage.achievements,
        next_level_xp=garage.next_level_xp,
        xp_progress=garage.xp_progress_percent,
    )
    return GarageResponse(data=data, last_updated=_now_iso())


# ── Admin endpoints (shared secret) ──


@router.post("/admin-update", response_model=AdminUpdateResponse)
async def admin_update(
    body: AdminUpdateRequest,
    settings: Settings = Depends(get_settings),
    service: MetafieldSyncService = Depends(get_sync_service),
):
    """Set metafields on one customer."""
    verify_admin_secret(body.admin_secret, settings)
    result = await service.apply_updates(_customer_id(body.customer_id), body.updates)
    return AdminUpdateResponse(
        customer_id=result.record_id,
        updates=result.updates,
        timestamp=_now_iso(),
    )


@router.post("/admin-bulk", response_model=AdminBulkResponse)
async def admin_bulk(
    body: AdminBulkRequest,
    settings: Settings = Depends(get_settings),
    service: MetafieldSyncService = Depends(get_sync_service),
):
    """Run a bulk operation across the first batch of customers."""
    verify_admin_secret(body.admin_secret, settings)
    if not isinstance(body.operation, str) or body.operation not in BULK_OPERATIONS:
        raise ValidationError(f"Unsupported operation: {body.operation}", error="Unknown bulk operation")

    results = await service.bulk_initialize()
    items = [BulkResultItem(customer_id=r.record_id, name=r.name, success=r.success) for r in results]
    return AdminBulkResponse(operation=body.operation, results=items, total_processed=len(items))

"""Pydantic request/response models for the /apps endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# --- Killboard ---


class LeaderboardEntryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    xp: int
    level: int
    victories: int
    country: str
    faction: str
    tier: str
    entries: int
    created_at: str | None = Field(default=None, alias="createdAt")
    rank: int


class LeaderboardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    leaderboard: list[LeaderboardEntryResponse]
    total: int
    last_updated: str = Field(alias="lastUpdated")


# --- Garage ---


class GarageData(BaseModel):
    customer_id: str
    username: str
    level: int
    xp: int
    victories: int
    country: str
    faction: str
    tier: str
    tier_number: int
    avatar_url: str = ""
    car_image_url: str = ""
    achievements: list[Any] = []
    next_level_xp: int
    xp_progress: float


class GarageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: GarageData
    last_updated: str = Field(alias="lastUpdated")


# --- Admin ---


class AdminUpdateRequest(BaseModel):
    """Loosely typed so the secret is checked before the inputs are validated."""

    admin_secret: Any = None
    customer_id: Any = None
    updates: Any = None


class AdminUpdateResponse(BaseModel):
    success: bool = True
    message: str = "Customer metafields updated successfully"
    customer_id: str
    updates: dict[str, Any]
    timestamp: str


class AdminBulkRequest(BaseModel):
    admin_secret: Any = None
    operation: Any = None
    data: Any = None


class BulkResultItem(BaseModel):
    customer_id: str
    name: str | None = None
    success: bool


class AdminBulkResponse(BaseModel):
    success: bool = True
    operation: str
    results: list[BulkResultItem]
    total_processed: int

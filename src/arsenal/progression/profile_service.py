"""Garage view: one pilot's profile plus progress toward the next level."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import structlog

from arsenal.config import Settings
from arsenal.errors import DecodeError, ValidationError
from arsenal.progression.decoder import (
    PROFILE_USERNAME_FALLBACK,
    XP_PER_LEVEL,
    ProgressionProfile,
    decode_profile,
)
from arsenal.store.records import RemoteStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class GarageProfile:
    profile: ProgressionProfile
    avatar_url: str = ""
    car_image_url: str = ""
    achievements: list = field(default_factory=list)

    @property
    def next_level_xp(self) -> int:
        return self.profile.level * XP_PER_LEVEL

    @property
    def xp_progress_percent(self) -> float:
        return (self.profile.xp % XP_PER_LEVEL) / XP_PER_LEVEL * 100


def decode_achievements(raw: str | None) -> list:
    """Parse the JSON-encoded achievements list.

    Missing or empty means no achievements. Anything else that is not a JSON
    array is corrupted data and raises DecodeError.
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"achievements is not valid JSON: {exc.msg}") from exc
    if not isinstance(value, list):
        raise DecodeError("achievements must be a JSON array")
    return value


class ProfileService:
    def __init__(self, store: RemoteStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    async def get_profile(self, record_id: str | None) -> GarageProfile:
        """Load one customer and decode it for the garage view.

        Raises ValidationError without touching the store when no id is given,
        NotFoundError when the store has no such customer.
        """
        if not record_id:
            raise ValidationError("customer_id parameter is required", error="customer_id parameter is required")

        record = await self.store.fetch_one(record_id, self.settings.metafield_namespace)
        attributes = record.attributes
        profile = decode_profile(
            record_id,
            attributes,
            display_name=record.display_name,
            username_fallback=PROFILE_USERNAME_FALLBACK,
        )
        garage = GarageProfile(
            profile=profile,
            avatar_url=attributes.get("avatar_url") or "",
            car_image_url=attributes.get("car_image_url") or "",
            achievements=decode_achievements(attributes.get("achievements")),
        )
        logger.info("profile_loaded", customer_id=record_id, level=profile.level)
        return garage

"""Killboard: rank active pilots by XP.

Always recomputed from the store; nothing is cached between requests.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from arsenal.config import Settings
from arsenal.progression.decoder import (
    LEADERBOARD_USERNAME_FALLBACK,
    ProgressionProfile,
    decode_profile,
)
from arsenal.store.records import RawRecord, RemoteStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class LeaderboardEntry:
    profile: ProgressionProfile
    rank: int
    created_at: str | None = None


def aggregate_leaderboard(records: Iterable[RawRecord]) -> list[LeaderboardEntry]:
    """Decode, drop inactive profiles, sort by XP descending and assign ranks.

    Ranks are positional (1..N). ``sorted`` is stable, so pilots with equal XP
    keep the order the store returned them in.
    """
    active: list[tuple[ProgressionProfile, str | None]] = []
    for record in records:
        profile = decode_profile(
            record.id,
            record.attributes,
            display_name=record.display_name,
            username_fallback=LEADERBOARD_USERNAME_FALLBACK,
        )
        if profile.is_active:
            active.append((profile, record.created_at))

    ordered = sorted(active, key=lambda item: -item[0].xp)
    return [
        LeaderboardEntry(profile=profile, rank=idx + 1, created_at=created_at)
        for idx, (profile, created_at) in enumerate(ordered)
    ]


class LeaderboardService:
    """Fetches one batch of customers and aggregates it into the killboard."""

    def __init__(self, store: RemoteStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    async def get_leaderboard(self) -> list[LeaderboardEntry]:
        records = await self.store.fetch_batch(
            self.settings.leaderboard_batch_size,
            self.settings.metafield_namespace,
        )
        entries = aggregate_leaderboard(records)
        logger.info("leaderboard_built", fetched=len(records), ranked=len(entries))
        return entries

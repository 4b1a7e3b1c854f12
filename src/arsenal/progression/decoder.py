"""Decode a customer's metafield namespace into a typed progression profile.

The store has no schema, so decoding is lenient: a missing, empty or
non-numeric value falls back to the field default instead of failing.
Integers are read the way the storefront writes them, from the leading
digits of the string ("12", " 12", "12.7" and "12xp" are all 12).

Stored ``level`` wins over ``xp`` whenever it parses to a positive integer,
even if the two disagree; only otherwise is it derived as ``xp // 1000 + 1``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from arsenal.progression.tiers import Tier, classify_tier

XP_PER_LEVEL = 1000

LEADERBOARD_USERNAME_FALLBACK = "Anonymous"
PROFILE_USERNAME_FALLBACK = "Pilot"
DEFAULT_COUNTRY = "Unknown"
DEFAULT_FACTION = "Independent"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: str | None) -> int | None:
    """Best-effort integer parse; None when no leading integer is present."""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # beyond the interpreter's int-string conversion limit
        return None


def level_for_xp(xp: int) -> int:
    return max(xp, 0) // XP_PER_LEVEL + 1


@dataclass(frozen=True)
class ProgressionProfile:
    id: str
    username: str
    xp: int
    level: int
    victories: int
    country: str
    faction: str
    tier: Tier

    @property
    def is_active(self) -> bool:
        """A profile counts toward the leaderboard once anything moved off the defaults."""
        return self.xp > 0 or self.victories > 0 or self.level > 1


def _non_negative(value: str | None) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed < 0:
        return 0
    return parsed


def _text(attributes: Mapping[str, str], key: str, default: str) -> str:
    return attributes.get(key) or default


def decode_profile(
    record_id: str,
    attributes: Mapping[str, str],
    display_name: str | None = None,
    username_fallback: str = LEADERBOARD_USERNAME_FALLBACK,
) -> ProgressionProfile:
    """Build a ProgressionProfile from raw metafield values.

    ``username`` falls back from the stored attribute to ``display_name`` and
    finally to ``username_fallback``.
    """
    xp = _non_negative(attributes.get("xp"))
    victories = _non_negative(attributes.get("victories"))

    level = parse_int(attributes.get("level"))
    if level is None or level < 1:
        level = level_for_xp(xp)

    return ProgressionProfile(
        id=record_id,
        username=attributes.get("username") or display_name or username_fallback,
        xp=xp,
        level=level,
        victories=victories,
        country=_text(attributes, "country", DEFAULT_COUNTRY),
        faction=_text(attributes, "faction", DEFAULT_FACTION),
        tier=classify_tier(level),
    )

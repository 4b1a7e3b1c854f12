"""Tier table and classification.

The table is walked from the highest threshold down; the first rule whose
``min_level`` the level reaches wins. Levels below every threshold (including
zero and negatives) land in the last rule.
"""

from __future__ import annotations

from dataclasses import dataclass

TIER_RULES: list[dict] = [
    {"min_level": 20, "tier": 5, "name": "Legend"},
    {"min_level": 15, "tier": 4, "name": "Elite"},
    {"min_level": 10, "tier": 3, "name": "Veteran"},
    {"min_level": 5, "tier": 2, "name": "Advanced"},
    {"min_level": 0, "tier": 1, "name": "Recruit"},
]


@dataclass(frozen=True)
class Tier:
    number: int
    name: str


def classify_tier(level: int) -> Tier:
    """Map a level to its tier."""
    for rule in TIER_RULES:
        if level >= rule["min_level"]:
            return Tier(number=rule["tier"], name=rule["name"])
    lowest = TIER_RULES[-1]
    return Tier(number=lowest["tier"], name=lowest["name"])

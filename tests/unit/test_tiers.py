"""Tier classification: walked from the highest threshold down."""

import pytest

from arsenal.progression.tiers import TIER_RULES, classify_tier


class TestTierClassification:
    @pytest.mark.parametrize(
        ("level", "number", "name"),
        [
            (1, 1, "Recruit"),
            (4, 1, "Recruit"),
            (5, 2, "Advanced"),
            (9, 2, "Advanced"),
            (10, 3, "Veteran"),
            (14, 3, "Veteran"),
            (15, 4, "Elite"),
            (19, 4, "Elite"),
            (20, 5, "Legend"),
            (250, 5, "Legend"),
        ],
    )
    def test_boundaries(self, level, number, name):
        tier = classify_tier(level)
        assert tier.number == number
        assert tier.name == name

    def test_zero_and_negative_levels_are_recruit(self):
        assert classify_tier(0).name == "Recruit"
        assert classify_tier(-7).name == "Recruit"
        assert classify_tier(-7).number == 1

    def test_tier_never_decreases_as_level_rises(self):
        numbers = [classify_tier(level).number for level in range(-5, 60)]
        assert numbers == sorted(numbers)

    def test_table_is_ordered_highest_threshold_first(self):
        thresholds = [rule["min_level"] for rule in TIER_RULES]
        assert thresholds == sorted(thresholds, reverse=True)

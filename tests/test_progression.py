"""Tests for adventure XP and level-ups."""

from __future__ import annotations

import pytest

from chatquest.models.user import new_adventure_state
from chatquest.skills.progression import apply_xp, xp_needed_for


class TestXpNeeded:
    """Test the escalating threshold curve."""

    def test_first_levels(self):
        assert xp_needed_for(1) == 100
        assert xp_needed_for(2) == 120
        assert xp_needed_for(3) == 144
        assert xp_needed_for(4) == 172
        assert xp_needed_for(5) == 207

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            xp_needed_for(0)


class TestApplyXp:
    """Test the level-up routine."""

    def test_single_level_up(self):
        """95/100 plus 10 XP lands on level 2 with 5 XP carried over."""
        profile = new_adventure_state("Hero", 0)
        profile.xp = 95

        info = apply_xp(profile, 10)

        assert info.leveled_up is True
        assert info.old_level == 1
        assert info.new_level == 2
        assert profile.level == 2
        assert profile.xp == 5
        assert profile.xp_needed == 120
        assert profile.stats.max_health == 110
        assert profile.stats.health == 110
        assert profile.stats.attack == 12
        assert profile.stats.defense == 6
        assert profile.stats.speed == 9

    def test_no_level_up(self):
        profile = new_adventure_state("Hero", 0)
        info = apply_xp(profile, 50)
        assert info.leveled_up is False
        assert info.levels_gained == 0
        assert profile.xp == 50
        assert profile.stats.attack == 10

    def test_multiple_levels_in_one_grant(self):
        profile = new_adventure_state("Hero", 0)

        info = apply_xp(profile, 100 + 120 + 10)

        assert info.levels_gained == 2
        assert profile.level == 3
        assert profile.xp == 10
        assert profile.xp_needed == 144
        assert profile.stats.max_health == 120
        assert profile.stats.attack == 14

    def test_level_up_heals_fully(self):
        profile = new_adventure_state("Hero", 0)
        profile.stats.health = 30
        apply_xp(profile, 100)
        assert profile.stats.health == profile.stats.max_health == 110

    def test_exact_threshold_levels_up(self):
        profile = new_adventure_state("Hero", 0)
        apply_xp(profile, 100)
        assert profile.level == 2
        assert profile.xp == 0

    def test_negative_amount_rejected(self):
        profile = new_adventure_state("Hero", 0)
        with pytest.raises(ValueError):
            apply_xp(profile, -1)

"""Tests for the message leveling curve."""

from __future__ import annotations

import math

import pytest

from chatquest.skills.leveling import (
    MAX_LEVEL,
    clamp_leaderboard_limit,
    level_for_xp,
    progress,
    progress_bar,
    roll_message_xp,
    xp_threshold,
)


class TestLevelForXp:
    """Test the inverse-square-root level curve."""

    def test_starting_level(self):
        assert level_for_xp(0) == 1
        assert level_for_xp(99) == 1

    def test_boundaries(self):
        assert level_for_xp(100) == 2
        assert level_for_xp(399) == 2
        assert level_for_xp(400) == 3
        assert level_for_xp(900) == 4

    def test_matches_closed_form(self):
        for xp in range(0, 200_000, 997):
            expected = min(MAX_LEVEL, math.floor(1 + math.sqrt(xp / 100)))
            assert level_for_xp(xp) == expected

    def test_monotonic(self):
        levels = [level_for_xp(xp) for xp in range(0, 50_000, 37)]
        assert levels == sorted(levels)

    def test_capped_at_max_level(self):
        assert level_for_xp(xp_threshold(MAX_LEVEL - 1)) == MAX_LEVEL
        assert level_for_xp(10**12) == MAX_LEVEL

    def test_negative_xp_rejected(self):
        with pytest.raises(ValueError):
            level_for_xp(-1)


class TestProgress:
    """Test progress through a level."""

    def test_threshold_strictly_increasing(self):
        thresholds = [xp_threshold(level) for level in range(1, 300)]
        assert all(a < b for a, b in zip(thresholds, thresholds[1:]))

    def test_start_of_level_is_zero_percent(self):
        for level in range(1, 60):
            assert progress(level, xp_threshold(level - 1)).percentage == 0

    def test_one_short_of_next_level_is_99_percent(self):
        """The last XP point before a level-up reports 99, not 100."""
        for level in range(1, 60):
            assert progress(level, xp_threshold(level) - 1).percentage == 99

    def test_boundaries_with_derived_level(self):
        """Reaching a threshold starts the next level at 0%."""
        for level in range(1, 60):
            at_threshold = xp_threshold(level)
            assert progress(level_for_xp(at_threshold), at_threshold).percentage == 0
            one_short = xp_threshold(level + 1) - 1
            assert progress(level_for_xp(one_short), one_short).percentage == 99

    def test_fields(self):
        result = progress(2, 250)
        assert result.current_xp == 150
        assert result.needed_xp == 300
        assert result.percentage == 50
        assert result.is_max_level is False

    def test_percentage_clamped(self):
        assert progress(1, 10_000).percentage == 100

    def test_max_level_flag(self):
        assert progress(MAX_LEVEL, xp_threshold(MAX_LEVEL)).is_max_level is True


class TestProgressBar:
    """Test the text progress bar."""

    def test_half(self):
        assert progress_bar(50) == "█████░░░░░"

    def test_empty_and_full(self):
        assert progress_bar(0) == "░" * 10
        assert progress_bar(100) == "█" * 10

    def test_rounds_down(self):
        assert progress_bar(99) == "█" * 9 + "░"

    def test_custom_length(self):
        bar = progress_bar(25, length=20)
        assert len(bar) == 20
        assert bar.count("█") == 5


class TestMessageXp:
    """Test the per-message XP roll."""

    def test_lowest_roll(self, rng):
        rng.push(0.0)
        assert roll_message_xp(rng) == 10

    def test_highest_roll(self, rng):
        rng.push(0.999999)
        assert roll_message_xp(rng) == 25

    def test_single_draw(self, rng):
        rng.push(0.5)
        assert roll_message_xp(rng) == 18
        assert rng.draws == 1


def test_leaderboard_limit_clamped():
    assert clamp_leaderboard_limit(0) == 1
    assert clamp_leaderboard_limit(-5) == 1
    assert clamp_leaderboard_limit(5) == 5
    assert clamp_leaderboard_limit(50) == 20

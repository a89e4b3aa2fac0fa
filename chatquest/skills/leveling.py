"""
Message Leveling Skill.

Implements the leveling curve for chat-message XP:

    level = min(MAX_LEVEL, floor(1 + sqrt(total_xp / 100)))

and the progress helpers built on ``xp_threshold(level) = 100 * level^2``.
"""

from __future__ import annotations

import math

from chatquest.models.results import LevelProgress
from chatquest.skills.rolls import RandomSource, roll_int

# =============================================================================
# Constants
# =============================================================================

MAX_LEVEL = 248

# Passive XP per qualifying chat message (inclusive range)
MESSAGE_XP_MIN = 10
MESSAGE_XP_MAX = 25

LEADERBOARD_DEFAULT = 10
LEADERBOARD_MAX = 20


def level_for_xp(total_xp: int) -> int:
    """
    Compute the level reached with a given total XP.

    Args:
        total_xp: Accumulated XP (>= 0)

    Returns:
        Level in ``[1, MAX_LEVEL]``

    Examples:
        >>> level_for_xp(0)
        1
        >>> level_for_xp(100)
        2
        >>> level_for_xp(399)
        2
    """
    if total_xp < 0:
        raise ValueError("XP cannot be negative")
    # isqrt keeps the floor exact for large totals
    return min(MAX_LEVEL, 1 + math.isqrt(total_xp // 100))


def xp_threshold(level: int) -> int:
    """Total XP at which ``level + 1`` is reached: ``100 * level^2``."""
    return 100 * level * level


def progress(level: int, xp: int) -> LevelProgress:
    """
    Progress through the current level.

    ``level`` must be the level derived from ``xp`` (``level_for_xp(xp)``,
    as stored). Level ``L`` spans ``xp_threshold(L - 1)`` up to
    ``xp_threshold(L)``, so 0% sits at ``xp_threshold(L - 1)`` and 99% at
    ``xp_threshold(L) - 1``. A mismatched pair is clamped, not corrected.

    Args:
        level: Current level
        xp: Total accumulated XP

    Returns:
        LevelProgress with XP into the level, XP span of the level and a
        percentage clamped to [0, 100]
    """
    floor_xp = xp_threshold(level - 1)
    needed_xp = xp_threshold(level) - floor_xp
    current_xp = xp - floor_xp
    percentage = math.floor(100 * current_xp / needed_xp) if needed_xp else 100
    return LevelProgress(
        current_xp=current_xp,
        needed_xp=needed_xp,
        percentage=min(100, max(0, percentage)),
        is_max_level=level >= MAX_LEVEL,
    )


def progress_bar(percentage: int, length: int = 10) -> str:
    """Render a text progress bar, e.g. ``█████░░░░░`` for 50%."""
    filled = math.floor(percentage / 100 * length)
    filled = min(length, max(0, filled))
    return "█" * filled + "░" * (length - filled)


def roll_message_xp(rng: RandomSource) -> int:
    """Roll the XP granted for one chat message."""
    return roll_int(rng, MESSAGE_XP_MIN, MESSAGE_XP_MAX)


def clamp_leaderboard_limit(limit: int, maximum: int = LEADERBOARD_MAX) -> int:
    """Clamp a requested leaderboard size to ``[1, maximum]``."""
    return max(1, min(maximum, limit))

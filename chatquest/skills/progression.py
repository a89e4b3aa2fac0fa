"""
Adventure Progression Skill.

The adventure profile levels on its own escalating curve. XP is held per
level (it resets on level-up) and the threshold for the next level grows
by 20% per level:

    xp_needed(level) = floor(100 * 1.2^(level - 1))
"""

from __future__ import annotations

import math

from chatquest.models.results import LevelUpInfo
from chatquest.models.user import AdventureState

# =============================================================================
# Constants
# =============================================================================

BASE_XP_NEEDED = 100
XP_GROWTH = 1.2

# Stat growth applied on every level gained
LEVEL_UP_MAX_HEALTH = 10
LEVEL_UP_ATTACK = 2
LEVEL_UP_DEFENSE = 1
LEVEL_UP_SPEED = 1


def xp_needed_for(level: int) -> int:
    """
    XP needed to clear a level.

    Examples:
        >>> xp_needed_for(1)
        100
        >>> xp_needed_for(2)
        120
    """
    if level < 1:
        raise ValueError("Level must be at least 1")
    return math.floor(BASE_XP_NEEDED * XP_GROWTH ** (level - 1))


def apply_xp(profile: AdventureState, amount: int) -> LevelUpInfo:
    """
    Add XP to a profile and resolve any level-ups.

    Each level gained raises max health, fully heals, bumps attack,
    defense and speed, and recomputes the threshold for the next level.
    Large grants may clear several levels in one call.

    Args:
        profile: The adventure profile (mutated in place)
        amount: XP to add (>= 0)

    Returns:
        LevelUpInfo describing the levels gained
    """
    if amount < 0:
        raise ValueError("XP amount cannot be negative")

    old_level = profile.level
    profile.xp += amount

    while profile.xp >= profile.xp_needed:
        profile.xp -= profile.xp_needed
        profile.level += 1

        stats = profile.stats
        stats.max_health += LEVEL_UP_MAX_HEALTH
        stats.health = stats.max_health
        stats.attack += LEVEL_UP_ATTACK
        stats.defense += LEVEL_UP_DEFENSE
        stats.speed += LEVEL_UP_SPEED

        profile.xp_needed = xp_needed_for(profile.level)

    return LevelUpInfo(
        leveled_up=profile.level > old_level,
        old_level=old_level,
        new_level=profile.level,
    )

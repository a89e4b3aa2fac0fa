"""
Combat Resolution Skill.

Combat is formulaic rather than round-by-round: each side's per-turn
damage decides how many turns it needs to win, and the side that needs
fewer turns wins. Ties go to the player.

Only monster selection is random; given the stats, the outcome is fixed.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Literal

from pydantic import BaseModel, Field

from chatquest.models.catalog import Location, Monster
from chatquest.models.user import Stats
from chatquest.skills.rolls import RandomSource, pick

# =============================================================================
# Constants
# =============================================================================

# Level slack above a monster's max level when building the encounter pool
COMMON_LEVEL_SLACK = 3
RARE_LEVEL_SLACK = 2

# Pool weight per eligible monster
COMMON_WEIGHT = 2
RARE_WEIGHT = 1

# Health left after a defeat, as a fraction of max health
DEFEAT_HEALTH_FRACTION = 0.25

# Hunt event roll: below the first bound is an encounter, below the second a treasure
ENCOUNTER_THRESHOLD = 0.70
TREASURE_THRESHOLD = 0.90

HuntEvent = Literal["encounter", "treasure", "nothing"]


class CombatOutcome(BaseModel):
    """The resolved fight between a player and a monster."""

    user_damage: int = Field(description="Damage the player deals per turn")
    monster_damage: int = Field(description="Damage the monster deals per turn")
    turns_for_user_to_win: int
    turns_for_monster_to_win: int
    victory: bool


def damage_per_turn(attack: int, defense: int) -> int:
    """Damage dealt per turn: attack minus half the defender's defense, at least 1."""
    return max(1, attack - defense // 2)


def resolve_combat(stats: Stats, monster: Monster) -> CombatOutcome:
    """
    Resolve a fight from current stats.

    Args:
        stats: The player's stats (current health is what counts)
        monster: The opponent

    Returns:
        CombatOutcome; ``victory`` is True iff the player needs no more
        turns than the monster does
    """
    user_damage = damage_per_turn(stats.attack, monster.defense)
    monster_damage = damage_per_turn(monster.attack, stats.defense)

    turns_for_user = math.ceil(monster.health / user_damage)
    turns_for_monster = math.ceil(stats.health / monster_damage)

    return CombatOutcome(
        user_damage=user_damage,
        monster_damage=monster_damage,
        turns_for_user_to_win=turns_for_user,
        turns_for_monster_to_win=turns_for_monster,
        victory=turns_for_user <= turns_for_monster,
    )


def health_after_defeat(max_health: int) -> int:
    """Health left after losing: a quarter of max health, never below 1."""
    return max(1, math.floor(max_health * DEFEAT_HEALTH_FRACTION))


def build_encounter_pool(
    location: Location,
    level: int,
    monsters: Mapping[str, Monster],
) -> list[Monster]:
    """
    Build the weighted monster pool for a location.

    Common monsters are entered twice and may be up to three levels below
    the player; rare monsters are entered once with two levels of slack.
    Ids missing from the catalog are skipped.
    """
    pool: list[Monster] = []

    for monster_id in location.common_monsters:
        monster = monsters.get(monster_id)
        if monster is not None and monster.fits_level(level, COMMON_LEVEL_SLACK):
            pool.extend([monster] * COMMON_WEIGHT)

    for monster_id in location.rare_monsters:
        monster = monsters.get(monster_id)
        if monster is not None and monster.fits_level(level, RARE_LEVEL_SLACK):
            pool.extend([monster] * RARE_WEIGHT)

    return pool


def select_monster(
    location: Location,
    level: int,
    monsters: Mapping[str, Monster],
    rng: RandomSource,
) -> Monster | None:
    """
    Pick a monster to fight, or None if nothing suits the player's level.

    Draws from the RNG only when the pool is non-empty.
    """
    pool: Sequence[Monster] = build_encounter_pool(location, level, monsters)
    if not pool:
        return None
    return pick(rng, pool)


def roll_hunt_event(rng: RandomSource) -> HuntEvent:
    """
    Roll what a hunt turns up (one draw).

    70% monster encounter, 20% treasure, 10% nothing.
    """
    roll = rng.random()
    if roll < ENCOUNTER_THRESHOLD:
        return "encounter"
    if roll < TREASURE_THRESHOLD:
        return "treasure"
    return "nothing"

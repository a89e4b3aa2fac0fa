"""
Loot Skill.

Gold rewards, monster drops and treasure chests. Every function takes the
random source explicitly and draws from it in a fixed order:

- victory gold: one draw
- monster drop: one draw for the chance roll, one more for the item if it hits
- treasure: one draw for gold, one for the item chance, one for the item pick
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from pydantic import BaseModel

from chatquest.models.catalog import Item, Monster
from chatquest.skills.rolls import RandomSource, chance, pick, roll_below, roll_int

# =============================================================================
# Constants
# =============================================================================

TREASURE_GOLD_PER_QUALITY = 20
TREASURE_MAX_QUALITY = 5
TREASURE_LEVELS_PER_QUALITY = 5
TREASURE_ITEM_CHANCE = 0.4
# Eligible treasure items are worth at most this multiple of the gold base
TREASURE_ITEM_VALUE_FACTOR = 2


class TreasureRoll(BaseModel):
    """Contents of a treasure chest."""

    quality: int
    gold_base: int
    gold: int
    item_id: str | None = None


def roll_victory_gold(rng: RandomSource, monster: Monster) -> int:
    """Roll gold uniformly within the monster's inclusive reward range."""
    return roll_int(rng, monster.gold_reward.min, monster.gold_reward.max)


def roll_monster_drop(rng: RandomSource, monster: Monster) -> str | None:
    """
    Roll the monster's drop table.

    One aggregate chance roll gates the drop; on a hit one item id is
    picked uniformly from ``possible_drops``.
    """
    if not chance(rng, monster.drop_chance) or not monster.possible_drops:
        return None
    return pick(rng, monster.possible_drops)


def treasure_quality(level: int) -> int:
    """Chest quality: ``floor(level / 5) + 1``, clamped to [1, 5]."""
    quality = math.floor(level / TREASURE_LEVELS_PER_QUALITY) + 1
    return min(TREASURE_MAX_QUALITY, max(1, quality))


def treasure_eligible_items(
    items: Mapping[str, Item],
    level: int,
    gold_base: int,
) -> list[str]:
    """Item ids a chest may hold at this level, in catalog order."""
    max_value = gold_base * TREASURE_ITEM_VALUE_FACTOR
    return [
        item_id
        for item_id, item in items.items()
        if item.available_at(level) and item.value <= max_value
    ]


def roll_treasure(
    rng: RandomSource,
    level: int,
    items: Mapping[str, Item],
) -> TreasureRoll:
    """
    Roll a treasure chest for a player of the given level.

    Gold is ``base + random[0, base)`` with ``base = 20 * quality``. With a
    40% chance the chest also holds one eligible item.
    """
    quality = treasure_quality(level)
    gold_base = TREASURE_GOLD_PER_QUALITY * quality
    gold = gold_base + roll_below(rng, gold_base)

    item_id: str | None = None
    if chance(rng, TREASURE_ITEM_CHANCE):
        eligible = treasure_eligible_items(items, level, gold_base)
        if eligible:
            item_id = pick(rng, eligible)

    return TreasureRoll(quality=quality, gold_base=gold_base, gold=gold, item_id=item_id)

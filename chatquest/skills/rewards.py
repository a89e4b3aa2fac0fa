"""
Training and Daily Reward Skills.

Training grants 15-24 XP and occasionally a flat stat bonus. The daily
reward scales linearly with the adventure level.
"""

from __future__ import annotations

from pydantic import BaseModel

from chatquest.models.results import StatBonus
from chatquest.models.user import Stats
from chatquest.skills.rolls import RandomSource, chance, pick, roll_int

# =============================================================================
# Constants
# =============================================================================

TRAIN_XP_MIN = 15
TRAIN_XP_MAX = 24
TRAIN_STAT_BONUS_CHANCE = 0.2
TRAIN_STAT_CHOICES = ("attack", "defense", "speed", "maxHealth")
TRAIN_MAX_HEALTH_BONUS = 5
TRAIN_STAT_BONUS = 1

DAILY_BASE_GOLD = 100
DAILY_GOLD_PER_LEVEL = 10
DAILY_BASE_XP = 20
DAILY_XP_PER_LEVEL = 5


class TrainingRoll(BaseModel):
    """What a training session yields before it is applied."""

    xp: int
    stat_bonus: StatBonus | None = None


class DailyReward(BaseModel):
    """Gold and XP for a daily claim."""

    gold: int
    xp: int


def roll_training(rng: RandomSource) -> TrainingRoll:
    """
    Roll a training session.

    Draw order: XP amount, bonus chance, and the stat pick if the bonus hits.
    """
    xp = roll_int(rng, TRAIN_XP_MIN, TRAIN_XP_MAX)

    bonus: StatBonus | None = None
    if chance(rng, TRAIN_STAT_BONUS_CHANCE):
        stat = pick(rng, TRAIN_STAT_CHOICES)
        amount = TRAIN_MAX_HEALTH_BONUS if stat == "maxHealth" else TRAIN_STAT_BONUS
        bonus = StatBonus(stat=stat, amount=amount)

    return TrainingRoll(xp=xp, stat_bonus=bonus)


def apply_stat_bonus(stats: Stats, bonus: StatBonus) -> None:
    """Apply a training bonus. A max health bonus also raises current health."""
    if bonus.stat == "maxHealth":
        stats.max_health += bonus.amount
        stats.health += bonus.amount
    elif bonus.stat == "attack":
        stats.attack += bonus.amount
    elif bonus.stat == "defense":
        stats.defense += bonus.amount
    else:
        stats.speed += bonus.amount


def daily_reward(level: int) -> DailyReward:
    """
    Daily reward for a level.

    Examples:
        >>> daily_reward(1)
        DailyReward(gold=110, xp=25)
    """
    return DailyReward(
        gold=DAILY_BASE_GOLD + DAILY_GOLD_PER_LEVEL * level,
        xp=DAILY_BASE_XP + DAILY_XP_PER_LEVEL * level,
    )


def stat_label(stat: str) -> str:
    """Display name for a stat key."""
    if stat == "maxHealth":
        return "Health"
    return stat.capitalize()

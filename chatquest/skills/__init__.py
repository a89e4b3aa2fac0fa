"""
Stateless Skills for Chat Quest.

Skills are pure functions that:
- Take structured input (Pydantic models, catalog mappings)
- Execute game rules (curves, combat, loot)
- Return structured output
- NEVER touch storage
- Draw randomness only from an injected RandomSource
"""

from chatquest.skills.combat import (
    CombatOutcome,
    build_encounter_pool,
    damage_per_turn,
    health_after_defeat,
    resolve_combat,
    roll_hunt_event,
    select_monster,
)
from chatquest.skills.cooldowns import (
    DAILY_COOLDOWN_MS,
    HUNT_COOLDOWN_MS,
    HUNT_NOTHING_FOUND_COOLDOWN_MS,
    TRAIN_COOLDOWN_MS,
    Clock,
    is_ready,
    remaining_ms,
    system_clock,
)
from chatquest.skills.leveling import (
    MAX_LEVEL,
    clamp_leaderboard_limit,
    level_for_xp,
    progress,
    progress_bar,
    roll_message_xp,
    xp_threshold,
)
from chatquest.skills.loot import (
    TreasureRoll,
    roll_monster_drop,
    roll_treasure,
    roll_victory_gold,
    treasure_quality,
)
from chatquest.skills.progression import apply_xp, xp_needed_for
from chatquest.skills.rewards import (
    DailyReward,
    TrainingRoll,
    apply_stat_bonus,
    daily_reward,
    roll_training,
)
from chatquest.skills.rolls import RandomSource, chance, default_random, pick, roll_int

__all__ = [
    # Rolls
    "RandomSource",
    "default_random",
    "roll_int",
    "pick",
    "chance",
    # Leveling
    "MAX_LEVEL",
    "clamp_leaderboard_limit",
    "level_for_xp",
    "xp_threshold",
    "progress",
    "progress_bar",
    "roll_message_xp",
    # Progression
    "apply_xp",
    "xp_needed_for",
    # Combat
    "CombatOutcome",
    "resolve_combat",
    "damage_per_turn",
    "health_after_defeat",
    "build_encounter_pool",
    "select_monster",
    "roll_hunt_event",
    # Loot
    "TreasureRoll",
    "roll_victory_gold",
    "roll_monster_drop",
    "roll_treasure",
    "treasure_quality",
    # Training & daily
    "TrainingRoll",
    "DailyReward",
    "roll_training",
    "apply_stat_bonus",
    "daily_reward",
    # Cooldowns
    "Clock",
    "system_clock",
    "is_ready",
    "remaining_ms",
    "HUNT_COOLDOWN_MS",
    "HUNT_NOTHING_FOUND_COOLDOWN_MS",
    "TRAIN_COOLDOWN_MS",
    "DAILY_COOLDOWN_MS",
]

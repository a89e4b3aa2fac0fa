"""
Core Data Models for Chat Quest.

- user: the stored per-user record (leveling + adventure halves)
- catalog: read-only static content (items, monsters, locations, quests)
- results: structured results returned by every operation
"""

from chatquest.models.catalog import (
    EQUIPMENT_SLOTS,
    Catalog,
    GoldReward,
    Item,
    ItemType,
    Location,
    Monster,
    Quest,
    QuestRequirement,
    QuestReward,
)
from chatquest.models.results import (
    ActionFailure,
    ConsumeOutcome,
    DailyOutcome,
    DailyResult,
    EncounterOutcome,
    EquipOutcome,
    EquipResult,
    FailureReason,
    HuntResult,
    LeaderboardEntry,
    LevelProgress,
    LevelUpInfo,
    LevelUpResult,
    NothingFoundOutcome,
    PurchaseOutcome,
    PurchaseResult,
    QuestListing,
    QuestListResult,
    StatBonus,
    TrainOutcome,
    TrainResult,
    TravelOutcome,
    TravelResult,
    TreasureOutcome,
)
from chatquest.models.user import (
    AdventureState,
    Cooldowns,
    Equipment,
    Inventory,
    InventoryItem,
    LevelingState,
    Stats,
    UserRecord,
    clean_user_id,
    new_adventure_state,
    new_leveling_state,
)

__all__ = [
    # User record
    "UserRecord",
    "LevelingState",
    "AdventureState",
    "Stats",
    "Inventory",
    "InventoryItem",
    "Equipment",
    "Cooldowns",
    "clean_user_id",
    "new_leveling_state",
    "new_adventure_state",
    # Catalog
    "Catalog",
    "Item",
    "ItemType",
    "EQUIPMENT_SLOTS",
    "Monster",
    "GoldReward",
    "Location",
    "Quest",
    "QuestRequirement",
    "QuestReward",
    # Leveling results
    "LevelUpResult",
    "LevelProgress",
    "LeaderboardEntry",
    # Adventure results
    "ActionFailure",
    "FailureReason",
    "LevelUpInfo",
    "StatBonus",
    "EncounterOutcome",
    "TreasureOutcome",
    "NothingFoundOutcome",
    "TrainOutcome",
    "DailyOutcome",
    "PurchaseOutcome",
    "EquipOutcome",
    "ConsumeOutcome",
    "TravelOutcome",
    "QuestListing",
    "HuntResult",
    "TrainResult",
    "DailyResult",
    "PurchaseResult",
    "EquipResult",
    "TravelResult",
    "QuestListResult",
]

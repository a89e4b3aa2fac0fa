"""
Result Models for Chat Quest.

Every user-facing operation returns a result instead of raising. Adventure
actions return a tagged union per action (discriminated on ``kind``) so
callers can branch on the outcome exhaustively:

    HuntResult = EncounterOutcome | TreasureOutcome | NothingFoundOutcome | ActionFailure
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from chatquest.models.catalog import Quest


# =============================================================================
# Leveling Results
# =============================================================================


class LevelUpResult(BaseModel):
    """Result of granting leveling XP to a user."""

    user_id: str
    display_name: str
    leveled_up: bool
    old_level: int
    new_level: int
    xp_gained: int
    current_xp: int = Field(description="Total accumulated XP after the grant")
    total_messages: int
    announce: bool = Field(
        default=False,
        description="Level-up that the host should announce in chat",
    )


class LevelProgress(BaseModel):
    """Progress through the current leveling level."""

    current_xp: int
    needed_xp: int
    percentage: int = Field(ge=0, le=100)
    is_max_level: bool


class LeaderboardEntry(BaseModel):
    """One row of the XP leaderboard."""

    rank: int = Field(ge=1)
    user_id: str
    display_name: str
    level: int
    xp: int
    is_max_level: bool = False


# =============================================================================
# Adventure Results
# =============================================================================


class FailureReason(str, Enum):
    """Why an adventure action was refused."""

    COOLDOWN = "cooldown"
    SAFE_ZONE = "safe_zone"
    UNKNOWN_LOCATION = "unknown_location"
    NO_MONSTER = "no_monster"
    UNKNOWN_ITEM = "unknown_item"
    LEVEL_TOO_LOW = "level_too_low"
    INSUFFICIENT_GOLD = "insufficient_gold"
    NOT_IN_INVENTORY = "not_in_inventory"
    NOT_EQUIPABLE = "not_equipable"
    INTERNAL_ERROR = "internal_error"


class LevelUpInfo(BaseModel):
    """What the adventure level-up routine did."""

    leveled_up: bool = False
    old_level: int
    new_level: int

    @property
    def levels_gained(self) -> int:
        return self.new_level - self.old_level


class StatBonus(BaseModel):
    """A flat stat bonus granted by training."""

    stat: Literal["attack", "defense", "speed", "maxHealth"]
    amount: int


class ActionFailure(BaseModel):
    """An adventure action that did not happen."""

    kind: Literal["failure"] = "failure"
    success: Literal[False] = False
    message: str
    reason: FailureReason
    retry_in_ms: int | None = Field(
        default=None, description="Time left on the cooldown, if that was the cause"
    )


class EncounterOutcome(BaseModel):
    """A hunt that ran into a monster."""

    kind: Literal["encounter"] = "encounter"
    success: bool
    message: str
    monster_id: str
    monster_name: str
    victory: bool
    gold: int = 0
    xp: int = 0
    dropped_item: str | None = None
    level_up: LevelUpInfo | None = None
    health_remaining: int


class TreasureOutcome(BaseModel):
    """A hunt that turned up a treasure chest."""

    kind: Literal["treasure"] = "treasure"
    success: Literal[True] = True
    message: str
    gold: int
    item_id: str | None = None


class NothingFoundOutcome(BaseModel):
    """A hunt that found nothing."""

    kind: Literal["nothing"] = "nothing"
    success: Literal[True] = True
    message: str


class TrainOutcome(BaseModel):
    """A completed training session."""

    kind: Literal["train"] = "train"
    success: Literal[True] = True
    message: str
    xp_gained: int
    stat_bonus: StatBonus | None = None
    level_up: LevelUpInfo


class DailyOutcome(BaseModel):
    """A claimed daily reward."""

    kind: Literal["daily"] = "daily"
    success: Literal[True] = True
    message: str
    gold: int
    xp: int
    level_up: LevelUpInfo


class PurchaseOutcome(BaseModel):
    """A completed shop purchase."""

    kind: Literal["purchase"] = "purchase"
    success: Literal[True] = True
    message: str
    item_id: str
    price: int
    gold_remaining: int


class EquipOutcome(BaseModel):
    """An item moved into an equipment slot."""

    kind: Literal["equip"] = "equip"
    success: Literal[True] = True
    message: str
    item_id: str
    slot: Literal["weapon", "armor", "accessory"]
    replaced_item_id: str | None = None


class ConsumeOutcome(BaseModel):
    """A consumable used up."""

    kind: Literal["consume"] = "consume"
    success: Literal[True] = True
    message: str
    item_id: str
    health_restored: int = 0
    cosmetic_boost: bool = Field(
        default=False, description="Stat-boost consumables only produce flavor text"
    )


class TravelOutcome(BaseModel):
    """A completed move to another location."""

    kind: Literal["travel"] = "travel"
    success: Literal[True] = True
    message: str
    location_id: str


class QuestListing(BaseModel):
    """Quests the user may take on."""

    kind: Literal["quests"] = "quests"
    success: Literal[True] = True
    message: str = ""
    quests: list[Quest] = Field(default_factory=list)


HuntResult = Annotated[
    Union[EncounterOutcome, TreasureOutcome, NothingFoundOutcome, ActionFailure],
    Field(discriminator="kind"),
]
TrainResult = Annotated[Union[TrainOutcome, ActionFailure], Field(discriminator="kind")]
DailyResult = Annotated[Union[DailyOutcome, ActionFailure], Field(discriminator="kind")]
PurchaseResult = Annotated[Union[PurchaseOutcome, ActionFailure], Field(discriminator="kind")]
EquipResult = Annotated[
    Union[EquipOutcome, ConsumeOutcome, ActionFailure], Field(discriminator="kind")
]
TravelResult = Annotated[Union[TravelOutcome, ActionFailure], Field(discriminator="kind")]
QuestListResult = Annotated[Union[QuestListing, ActionFailure], Field(discriminator="kind")]

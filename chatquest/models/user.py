"""
User Record Models for Chat Quest.

A single stored row per user holds two halves:
- LevelingState: message-XP leveling (owned by the leveling service)
- AdventureState: the RPG profile (owned by the adventure service)

Both serialize to the flat JSON layout used on disk, with the adventure
profile nested under the ``adventure`` key.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Starting values for a freshly created adventure profile
STARTING_GOLD = 100
STARTING_LOCATION = "town"
STARTING_XP_NEEDED = 100
DEFAULT_CHARACTER_NAME = "Adventurer"


def clean_user_id(user_id: str) -> str:
    """Strip the platform suffix from a user id (``123@s.whatsapp.net`` -> ``123``)."""
    return str(user_id).split("@")[0]


class Stats(BaseModel):
    """Combat stats for an adventurer."""

    model_config = ConfigDict(populate_by_name=True)

    health: int = Field(default=100, ge=0)
    max_health: int = Field(default=100, ge=1, alias="maxHealth")
    attack: int = Field(default=10, ge=0)
    defense: int = Field(default=5, ge=0)
    speed: int = Field(default=8, ge=0)

    @model_validator(mode="after")
    def health_not_exceeds_max(self) -> Stats:
        if self.health > self.max_health:
            self.health = self.max_health
        return self

    def heal(self, amount: int) -> int:
        """
        Heal up to max health.

        Returns actual health restored.
        """
        space = self.max_health - self.health
        actual = max(0, min(amount, space))
        self.health += actual
        return actual


class InventoryItem(BaseModel):
    """A stack of one item held in the inventory."""

    item_id: str = Field(alias="id")
    quantity: int = Field(default=1, ge=1)

    model_config = ConfigDict(populate_by_name=True)


class Inventory(BaseModel):
    """Gold and item stacks."""

    gold: int = Field(default=STARTING_GOLD, ge=0)
    items: list[InventoryItem] = Field(default_factory=list)

    def quantity_of(self, item_id: str) -> int:
        """Get how many units of an item are held."""
        for stack in self.items:
            if stack.item_id == item_id:
                return stack.quantity
        return 0

    def add(self, item_id: str, quantity: int = 1) -> None:
        """Add units of an item, stacking onto an existing entry."""
        for stack in self.items:
            if stack.item_id == item_id:
                stack.quantity += quantity
                return
        self.items.append(InventoryItem(item_id=item_id, quantity=quantity))

    def remove(self, item_id: str, quantity: int = 1) -> bool:
        """
        Remove units of an item.

        The stack is dropped once its quantity reaches zero.
        Returns False if the item is not held.
        """
        for index, stack in enumerate(self.items):
            if stack.item_id != item_id:
                continue
            remaining = stack.quantity - quantity
            if remaining <= 0:
                del self.items[index]
            else:
                stack.quantity = remaining
            return True
        return False


class Equipment(BaseModel):
    """Equipment slots, each holding at most one item id."""

    weapon: str | None = None
    armor: str | None = None
    accessory: str | None = None

    def get_slot(self, slot: str) -> str | None:
        """Get the item id in a slot."""
        if slot not in ("weapon", "armor", "accessory"):
            raise ValueError(f"Unknown equipment slot: {slot}")
        return getattr(self, slot)

    def set_slot(self, slot: str, item_id: str | None) -> None:
        """Put an item id into a slot."""
        if slot not in ("weapon", "armor", "accessory"):
            raise ValueError(f"Unknown equipment slot: {slot}")
        setattr(self, slot, item_id)


class Cooldowns(BaseModel):
    """
    Per-activity cooldown timestamps in epoch milliseconds.

    A value of 0 (or any past timestamp) means the activity is ready.
    """

    hunt: int = 0
    train: int = 0
    daily: int = 0
    quest: int = 0


class AdventureState(BaseModel):
    """The RPG profile nested inside a user record."""

    model_config = ConfigDict(populate_by_name=True)

    character_name: str = Field(default=DEFAULT_CHARACTER_NAME, alias="name")
    level: int = Field(default=1, ge=1)
    xp: int = Field(default=0, ge=0, description="XP into the current level")
    xp_needed: int = Field(default=STARTING_XP_NEEDED, ge=1, alias="xpNeeded")
    stats: Stats = Field(default_factory=Stats)
    inventory: Inventory = Field(default_factory=Inventory)
    equipment: Equipment = Field(default_factory=Equipment)
    location: str = STARTING_LOCATION
    quests_completed: list[str] = Field(default_factory=list, alias="questsCompleted")
    monsters_defeated: int = Field(default=0, ge=0, alias="monstersDefeated")
    cooldowns: Cooldowns = Field(default_factory=Cooldowns)
    joined_at: int = Field(default=0, alias="joinedAt")
    last_played: int = Field(default=0, alias="lastPlayed")


class LevelingState(BaseModel):
    """
    Message-XP leveling half of a user record.

    Unknown keys found in storage are kept so that writes never drop
    fields owned by other features.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    jid: str = ""
    display_name: str = Field(default="", alias="pushName")
    total_xp: int = Field(default=0, ge=0, alias="xp")
    level: int = Field(default=1, ge=1)
    message_count: int = Field(default=0, ge=0, alias="messages")
    last_active_at: int = Field(default=0, alias="lastActive")
    joined_at: int = Field(default=0, alias="joinedAt")
    group_memberships: list[str] = Field(default_factory=list, alias="groups")

    def join_group(self, group_id: str) -> bool:
        """Record a group membership. Returns True if it was new."""
        if group_id in self.group_memberships:
            return False
        self.group_memberships.append(group_id)
        return True


class UserRecord(BaseModel):
    """
    A full stored row: the leveling half plus an optional adventure half.

    Both services read and write through this composition so neither
    overwrites the other's half.
    """

    user_id: str
    leveling: LevelingState
    adventure: AdventureState | None = None

    @classmethod
    def from_storage(cls, user_id: str, raw: dict[str, Any]) -> UserRecord:
        """Build a record from the flat stored layout."""
        data = dict(raw)
        adventure_raw = data.pop("adventure", None)
        return cls(
            user_id=user_id,
            leveling=LevelingState.model_validate(data),
            adventure=(
                AdventureState.model_validate(adventure_raw)
                if isinstance(adventure_raw, dict)
                else None
            ),
        )

    def to_storage(self) -> dict[str, Any]:
        """Serialize to the flat stored layout."""
        data = self.leveling.model_dump(by_alias=True)
        if self.adventure is not None:
            data["adventure"] = self.adventure.model_dump(by_alias=True)
        return data


def new_leveling_state(
    user_id: str,
    display_name: str | None,
    now: int,
) -> LevelingState:
    """Factory for a fresh leveling half."""
    return LevelingState(
        jid=user_id,
        display_name=display_name or clean_user_id(user_id),
        last_active_at=now,
        joined_at=now,
    )


def new_adventure_state(character_name: str | None, now: int) -> AdventureState:
    """Factory for a fresh adventure profile with the fixed starting values."""
    return AdventureState(
        character_name=character_name or DEFAULT_CHARACTER_NAME,
        joined_at=now,
        last_played=now,
    )

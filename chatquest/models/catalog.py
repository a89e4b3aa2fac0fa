"""
Static Catalog Models for Chat Quest.

Items, monsters, locations and quests are read-only content loaded once at
startup. A Catalog bundles them as immutable id -> definition mappings that
are handed to the services by reference.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ItemType(str, Enum):
    """Item categories."""

    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
    CONSUMABLE = "consumable"
    MATERIAL = "material"


EQUIPMENT_SLOTS = (ItemType.WEAPON, ItemType.ARMOR, ItemType.ACCESSORY)


class Item(BaseModel):
    """An item definition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    name: str
    description: str = ""
    type: ItemType
    rarity: Literal["common", "uncommon", "rare", "epic", "legendary"] = "common"
    value: int = Field(default=0, ge=0)
    required_level: int | None = Field(default=None, ge=1)
    image: str = ""

    # Equipment bonuses
    attack: int | None = None
    defense: int | None = None
    health: int | None = None
    speed: int | None = None

    # Consumable effects
    restore: int | None = Field(default=None, ge=0)
    attack_boost: int | None = Field(default=None, alias="attackBoost")
    defense_boost: int | None = Field(default=None, alias="defenseBoost")
    speed_boost: int | None = Field(default=None, alias="speedBoost")
    duration: int | None = Field(default=None, description="Boost duration in seconds")

    @property
    def is_equipable(self) -> bool:
        """Check if this item goes into an equipment slot."""
        return self.type in EQUIPMENT_SLOTS

    @property
    def is_consumable(self) -> bool:
        """Check if this item is used up on use."""
        return self.type == ItemType.CONSUMABLE

    @property
    def is_stat_boost(self) -> bool:
        """Check if this consumable carries a (cosmetic) stat boost."""
        return bool(self.attack_boost or self.defense_boost or self.speed_boost)

    def available_at(self, level: int) -> bool:
        """Check the level requirement. Items without one are always available."""
        return self.required_level is None or self.required_level <= level


class GoldReward(BaseModel):
    """Inclusive gold range awarded on victory."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=0)
    max: int = Field(ge=0)

    @model_validator(mode="after")
    def min_not_above_max(self) -> GoldReward:
        if self.min > self.max:
            raise ValueError(f"goldReward min ({self.min}) exceeds max ({self.max})")
        return self


class Monster(BaseModel):
    """A monster definition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    name: str
    description: str = ""
    min_level: int = Field(ge=1, alias="minLevel")
    max_level: int = Field(ge=1, alias="maxLevel")
    health: int = Field(ge=1)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    speed: int = Field(default=0, ge=0)
    xp_reward: int = Field(ge=0, alias="xpReward")
    gold_reward: GoldReward = Field(alias="goldReward")
    drop_chance: float = Field(default=0.0, ge=0.0, le=1.0, alias="dropChance")
    possible_drops: tuple[str, ...] = Field(default=(), alias="possibleDrops")
    boss: bool = False
    image: str = ""

    def fits_level(self, level: int, slack: int) -> bool:
        """Check ``min_level <= level <= max_level + slack``."""
        return self.min_level <= level <= self.max_level + slack


class Location(BaseModel):
    """A location definition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    name: str
    description: str = ""
    safe_zone: bool = Field(default=False, alias="safeZone")
    shop_available: bool = Field(default=False, alias="shopAvailable")
    train_available: bool = Field(default=False, alias="trainAvailable")
    min_level: int = Field(default=1, ge=1, alias="minLevel")
    common_monsters: tuple[str, ...] = Field(default=(), alias="commonMonsters")
    rare_monsters: tuple[str, ...] = Field(default=(), alias="rareMonsters")
    image: str = ""


class QuestRequirement(BaseModel):
    """What a quest asks for."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = "monster"
    monster_id: str | None = Field(default=None, alias="monsterId")
    count: int = Field(default=1, ge=1)


class QuestReward(BaseModel):
    """What a quest pays out."""

    model_config = ConfigDict(frozen=True)

    gold: int = Field(default=0, ge=0)
    xp: int = Field(default=0, ge=0)
    items: tuple[str, ...] = ()


class Quest(BaseModel):
    """A quest definition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    name: str
    description: str = ""
    requirement: QuestRequirement
    reward: QuestReward = Field(default_factory=QuestReward)
    min_level: int = Field(default=1, ge=1, alias="minLevel")
    image: str = ""


def _index(entries: Iterable[BaseModel]) -> Mapping[str, BaseModel]:
    return MappingProxyType({entry.id: entry for entry in entries})  # type: ignore[attr-defined]


class Catalog:
    """
    Immutable bundle of all static content, keyed by id.

    Mappings preserve the order entries were supplied in.
    """

    def __init__(
        self,
        items: Iterable[Item] = (),
        monsters: Iterable[Monster] = (),
        locations: Iterable[Location] = (),
        quests: Iterable[Quest] = (),
    ) -> None:
        self._items: Mapping[str, Item] = _index(items)  # type: ignore[assignment]
        self._monsters: Mapping[str, Monster] = _index(monsters)  # type: ignore[assignment]
        self._locations: Mapping[str, Location] = _index(locations)  # type: ignore[assignment]
        self._quests: Mapping[str, Quest] = _index(quests)  # type: ignore[assignment]

    @property
    def items(self) -> Mapping[str, Item]:
        return self._items

    @property
    def monsters(self) -> Mapping[str, Monster]:
        return self._monsters

    @property
    def locations(self) -> Mapping[str, Location]:
        return self._locations

    @property
    def quests(self) -> Mapping[str, Quest]:
        return self._quests

    def item(self, item_id: str) -> Item | None:
        return self._items.get(item_id)

    def monster(self, monster_id: str) -> Monster | None:
        return self._monsters.get(monster_id)

    def location(self, location_id: str) -> Location | None:
        return self._locations.get(location_id)

    def quest(self, quest_id: str) -> Quest | None:
        return self._quests.get(quest_id)

    def __repr__(self) -> str:
        return (
            f"Catalog(items={len(self._items)}, monsters={len(self._monsters)}, "
            f"locations={len(self._locations)}, quests={len(self._quests)})"
        )

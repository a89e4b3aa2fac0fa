"""
Adventure Service for Chat Quest.

Runs the RPG actions: hunting, training, the daily reward, shopping,
equipping and travel. Every action follows the same shape:

1. Take the user's lock and snapshot their row
2. Read the profile (created lazily on first access)
3. Check cooldowns and preconditions, returning ActionFailure on refusal
4. Mutate the in-memory copy using the stateless skills
5. Write the adventure half back once and flush

Store failures are caught here, logged, and reported as a generic
failure after the row is restored from the snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from chatquest.db.interfaces import StoreError
from chatquest.models.catalog import Catalog, Item, Location, Monster
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
    LevelUpInfo,
    NothingFoundOutcome,
    PurchaseOutcome,
    PurchaseResult,
    QuestListing,
    QuestListResult,
    TrainOutcome,
    TrainResult,
    TravelOutcome,
    TravelResult,
    TreasureOutcome,
)
from chatquest.models.user import AdventureState, clean_user_id, new_adventure_state
from chatquest.services.records import UserRecordAccessor
from chatquest.skills.combat import (
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
    format_hours,
    format_minutes,
    format_seconds,
    is_ready,
    remaining_ms,
    system_clock,
)
from chatquest.skills.loot import roll_monster_drop, roll_treasure, roll_victory_gold
from chatquest.skills.progression import apply_xp
from chatquest.skills.rewards import apply_stat_bonus, daily_reward, roll_training, stat_label
from chatquest.skills.rolls import RandomSource, default_random

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _level_up_text(info: LevelUpInfo) -> str:
    if not info.leveled_up:
        return ""
    return (
        "\n\n🎉 **LEVEL UP!** 🎉\n"
        f"You reached level {info.new_level}!\n"
        "Your stats have increased!"
    )


@dataclass
class AdventureService:
    """
    Runs adventure actions against the shared user store.

    Catalogs are read-only and shared by reference; randomness and time
    are injected so tests can script every roll.
    """

    records: UserRecordAccessor
    catalog: Catalog
    rng: RandomSource = field(default_factory=default_random)
    clock: Clock = system_clock
    command_prefix: str = "."

    # =========================================================================
    # Plumbing
    # =========================================================================

    def _run(self, user_id: str, activity: str, action: Callable[[str], R]) -> R | ActionFailure:
        # StoreError inside the block restores the row as it was on entry
        try:
            with self.records.atomic(user_id) as key:
                return action(key)
        except StoreError:
            logger.exception(f"Store failure while {activity} for {clean_user_id(user_id)}")
            return ActionFailure(
                message=f"❌ An error occurred while {activity}. Please try again.",
                reason=FailureReason.INTERNAL_ERROR,
            )

    def _save(self, key: str, profile: AdventureState) -> None:
        profile.last_played = self.clock()
        self.records.commit_adventure(key, profile)
        self.records.flush()

    # =========================================================================
    # Profile
    # =========================================================================

    def get_profile(self, user_id: str) -> AdventureState | None:
        """
        Get a user's adventure profile, creating it on first access.

        Returns None (and logs) if the store fails or the stored row is
        malformed.
        """
        try:
            with self.records.atomic(user_id) as key:
                return self._profile(key)
        except StoreError:
            logger.exception(f"Failed to load adventure profile for {clean_user_id(user_id)}")
            return None

    def _profile(self, key: str) -> AdventureState:
        record = self.records.get_or_create(key)
        if record.adventure is not None:
            return record.adventure

        profile = new_adventure_state(record.leveling.display_name, self.clock())
        self.records.commit_adventure(key, profile)
        logger.info(f"Created new adventure profile for user {key}")
        return profile

    # =========================================================================
    # Hunting
    # =========================================================================

    def hunt(self, user_id: str) -> HuntResult:
        """
        Hunt at the current location.

        Refused while the hunt cooldown runs or in a safe zone. Otherwise
        one roll decides between a monster encounter, a treasure chest and
        nothing at all.
        """
        return self._run(user_id, "hunting", self._hunt)

    def _hunt(self, key: str) -> HuntResult:
        profile = self._profile(key)
        now = self.clock()

        if not is_ready(profile.cooldowns.hunt, now):
            return ActionFailure(
                message=(
                    "⏳ You're still resting from your last hunt! "
                    f"Try again in {format_seconds(profile.cooldowns.hunt, now)}."
                ),
                reason=FailureReason.COOLDOWN,
                retry_in_ms=remaining_ms(profile.cooldowns.hunt, now),
            )

        location = self.catalog.location(profile.location)
        if location is None:
            return ActionFailure(
                message=(
                    "❌ Error: Invalid location. "
                    f"Please use {self.command_prefix}travel to go somewhere."
                ),
                reason=FailureReason.UNKNOWN_LOCATION,
            )

        if location.safe_zone:
            return ActionFailure(
                message=(
                    f"🏘️ You can't hunt in {location.name} - it's a safe zone! "
                    f"Use {self.command_prefix}travel to go somewhere dangerous."
                ),
                reason=FailureReason.SAFE_ZONE,
            )

        event = roll_hunt_event(self.rng)
        if event == "encounter":
            return self._encounter(key, profile, location, now)
        if event == "treasure":
            return self._treasure(key, profile, now)

        profile.cooldowns.hunt = now + HUNT_NOTHING_FOUND_COOLDOWN_MS
        self._save(key, profile)
        return NothingFoundOutcome(
            message=(
                f"{location.image} You explored {location.name} "
                "but didn't find anything interesting this time."
            ).strip()
        )

    def _encounter(
        self,
        key: str,
        profile: AdventureState,
        location: Location,
        now: int,
    ) -> EncounterOutcome | ActionFailure:
        monster = select_monster(location, profile.level, self.catalog.monsters, self.rng)
        if monster is None:
            return ActionFailure(
                message="❌ No suitable monsters found for your level and location.",
                reason=FailureReason.NO_MONSTER,
            )

        combat = resolve_combat(profile.stats, monster)
        profile.cooldowns.hunt = now + HUNT_COOLDOWN_MS
        intro = f"⚔️ You encountered a **{monster.name}** {monster.image}!\n\n"

        if not combat.victory:
            profile.stats.health = health_after_defeat(profile.stats.max_health)
            self._save(key, profile)
            return EncounterOutcome(
                success=False,
                message=(
                    intro + "It was too strong for you! You were defeated and barely "
                    "escaped with your life. Your health is now critically low. "
                    "Rest or use potions to recover."
                ),
                monster_id=monster.id,
                monster_name=monster.name,
                victory=False,
                health_remaining=profile.stats.health,
            )

        return self._victory(key, profile, monster, intro)

    def _victory(
        self,
        key: str,
        profile: AdventureState,
        monster: Monster,
        intro: str,
    ) -> EncounterOutcome:
        gold = roll_victory_gold(self.rng, monster)
        profile.inventory.gold += gold
        level_up = apply_xp(profile, monster.xp_reward)
        profile.monsters_defeated += 1

        item_text = ""
        dropped = roll_monster_drop(self.rng, monster)
        item = self.catalog.item(dropped) if dropped else None
        if item is not None:
            profile.inventory.add(item.id)
            item_text = f"\n\n🎁 The {monster.name} dropped: **{item.name}** {item.image}!"

        self._save(key, profile)

        message = (
            intro
            + "After a fierce battle, you emerged victorious!\n"
            + f"💰 Gained: {gold} gold\n"
            + f"✨ Gained: {monster.xp_reward} XP"
            + item_text
            + _level_up_text(level_up)
        )
        return EncounterOutcome(
            success=True,
            message=message,
            monster_id=monster.id,
            monster_name=monster.name,
            victory=True,
            gold=gold,
            xp=monster.xp_reward,
            dropped_item=item.id if item is not None else None,
            level_up=level_up,
            health_remaining=profile.stats.health,
        )

    def _treasure(self, key: str, profile: AdventureState, now: int) -> TreasureOutcome:
        chest = roll_treasure(self.rng, profile.level, self.catalog.items)
        profile.inventory.gold += chest.gold

        found = self.catalog.item(chest.item_id) if chest.item_id else None
        if found is not None:
            profile.inventory.add(found.id)

        profile.cooldowns.hunt = now + HUNT_COOLDOWN_MS
        self._save(key, profile)

        if found is not None:
            message = (
                f"💰 You found a treasure chest containing {chest.gold} gold "
                f"and a **{found.name}** {found.image}!"
            )
        else:
            message = f"💰 You found a treasure chest containing {chest.gold} gold!"
        return TreasureOutcome(
            message=message,
            gold=chest.gold,
            item_id=found.id if found is not None else None,
        )

    # =========================================================================
    # Training & daily reward
    # =========================================================================

    def train(self, user_id: str) -> TrainResult:
        """Train for 15-24 XP with a 20% chance of a stat bonus. 30 minute cooldown."""
        return self._run(user_id, "training", self._train)

    def _train(self, key: str) -> TrainResult:
        profile = self._profile(key)
        now = self.clock()

        if not is_ready(profile.cooldowns.train, now):
            return ActionFailure(
                message=(
                    "⏳ You're still tired from your last training session! "
                    f"You can train again in {format_minutes(profile.cooldowns.train, now)}."
                ),
                reason=FailureReason.COOLDOWN,
                retry_in_ms=remaining_ms(profile.cooldowns.train, now),
            )

        session = roll_training(self.rng)
        # The bonus lands before XP so a level-up heal covers it
        if session.stat_bonus is not None:
            apply_stat_bonus(profile.stats, session.stat_bonus)
        level_up = apply_xp(profile, session.xp)

        profile.cooldowns.train = now + TRAIN_COOLDOWN_MS
        self._save(key, profile)

        message = f"🏋️ You completed your training session!\n\n✨ Gained: {session.xp} XP"
        if session.stat_bonus is not None:
            bonus = session.stat_bonus
            message += f"\n💪 Bonus: +{bonus.amount} {stat_label(bonus.stat)}"
        message += _level_up_text(level_up)

        return TrainOutcome(
            message=message,
            xp_gained=session.xp,
            stat_bonus=session.stat_bonus,
            level_up=level_up,
        )

    def claim_daily(self, user_id: str) -> DailyResult:
        """Claim ``100 + 10*level`` gold and ``20 + 5*level`` XP once per 24 hours."""
        return self._run(user_id, "claiming daily reward", self._claim_daily)

    def _claim_daily(self, key: str) -> DailyResult:
        profile = self._profile(key)
        now = self.clock()

        if not is_ready(profile.cooldowns.daily, now):
            return ActionFailure(
                message=(
                    "⏳ You've already claimed your daily reward! "
                    f"Come back in {format_hours(profile.cooldowns.daily, now)}."
                ),
                reason=FailureReason.COOLDOWN,
                retry_in_ms=remaining_ms(profile.cooldowns.daily, now),
            )

        reward = daily_reward(profile.level)
        profile.inventory.gold += reward.gold
        level_up = apply_xp(profile, reward.xp)

        profile.cooldowns.daily = now + DAILY_COOLDOWN_MS
        self._save(key, profile)

        return DailyOutcome(
            message=(
                "🎁 **Daily Reward Claimed!**\n\n"
                f"💰 Gold: +{reward.gold}\n"
                f"✨ XP: +{reward.xp}" + _level_up_text(level_up)
            ),
            gold=reward.gold,
            xp=reward.xp,
            level_up=level_up,
        )

    # =========================================================================
    # Shop & inventory
    # =========================================================================

    def buy_item(self, user_id: str, item_id: str) -> PurchaseResult:
        """Buy one unit of an item at its catalog value."""
        return self._run(user_id, "purchasing", lambda key: self._buy_item(key, item_id))

    def _buy_item(self, key: str, item_id: str) -> PurchaseResult:
        profile = self._profile(key)

        item = self.catalog.item(item_id)
        if item is None:
            return ActionFailure(
                message="❌ Item not found in shop. Check the item ID and try again.",
                reason=FailureReason.UNKNOWN_ITEM,
            )

        if not item.available_at(profile.level):
            return ActionFailure(
                message=(
                    f"❌ You need to be level {item.required_level} to buy this item. "
                    f"You are only level {profile.level}."
                ),
                reason=FailureReason.LEVEL_TOO_LOW,
            )

        if profile.inventory.gold < item.value:
            return ActionFailure(
                message=(
                    "❌ You don't have enough gold to buy this item. "
                    f"You need {item.value} gold."
                ),
                reason=FailureReason.INSUFFICIENT_GOLD,
            )

        profile.inventory.gold -= item.value
        profile.inventory.add(item.id)
        self._save(key, profile)

        verb = "use" if item.is_consumable else "equip"
        return PurchaseOutcome(
            message=(
                f"✅ You purchased a {item.name} {item.image} for {item.value} gold! "
                f"Use {self.command_prefix}{verb} to use it."
            ),
            item_id=item.id,
            price=item.value,
            gold_remaining=profile.inventory.gold,
        )

    def equip_item(self, user_id: str, item_id: str) -> EquipResult:
        """
        Equip or use a held item.

        Consumables are used up (one unit). Weapons, armor and accessories
        go into their slot; whatever was there goes back to the inventory.
        """
        return self._run(user_id, "equipping item", lambda key: self._equip_item(key, item_id))

    def _equip_item(self, key: str, item_id: str) -> EquipResult:
        profile = self._profile(key)

        if profile.inventory.quantity_of(item_id) < 1:
            return ActionFailure(
                message="❌ You don't have this item in your inventory.",
                reason=FailureReason.NOT_IN_INVENTORY,
            )

        item = self.catalog.item(item_id)
        if item is None:
            return ActionFailure(
                message="❌ This item doesn't exist in the database.",
                reason=FailureReason.UNKNOWN_ITEM,
            )

        if item.is_consumable:
            return self._consume(key, profile, item)

        if not item.is_equipable:
            return ActionFailure(
                message="❌ This item cannot be equipped.",
                reason=FailureReason.NOT_EQUIPABLE,
            )

        slot = item.type.value
        previous = profile.equipment.get_slot(slot)
        profile.equipment.set_slot(slot, item.id)
        profile.inventory.remove(item.id)
        if previous:
            profile.inventory.add(previous)
        self._save(key, profile)

        return EquipOutcome(
            message=f"✅ You equipped the {item.name} {item.image}!",
            item_id=item.id,
            slot=slot,
            replaced_item_id=previous,
        )

    def _consume(self, key: str, profile: AdventureState, item: Item) -> ConsumeOutcome:
        restored = 0
        if item.restore:
            restored = profile.stats.heal(item.restore)
            effect = (
                f"You used a {item.name} {item.image} and restored {restored} health! "
                f"({profile.stats.health}/{profile.stats.max_health})"
            )
        elif item.is_stat_boost:
            # Boost potions have no timed effect, only the flavor text
            effect = f"You used a {item.name} {item.image} and feel stronger!"
        else:
            effect = f"You used a {item.name} {item.image}."

        profile.inventory.remove(item.id)
        self._save(key, profile)

        return ConsumeOutcome(
            message=f"✅ {effect}",
            item_id=item.id,
            health_restored=restored,
            cosmetic_boost=not item.restore and item.is_stat_boost,
        )

    # =========================================================================
    # Travel
    # =========================================================================

    def travel(self, user_id: str, location_id: str) -> TravelResult:
        """Move to another location if the user's level allows it."""
        return self._run(user_id, "traveling", lambda key: self._travel(key, location_id))

    def _travel(self, key: str, location_id: str) -> TravelResult:
        profile = self._profile(key)

        location = self.catalog.location(location_id)
        if location is None:
            return ActionFailure(
                message="❌ That location doesn't exist. Check the location ID and try again.",
                reason=FailureReason.UNKNOWN_LOCATION,
            )

        if profile.level < location.min_level:
            return ActionFailure(
                message=(
                    f"❌ You need to be level {location.min_level} to travel to "
                    f"{location.name}. You are only level {profile.level}."
                ),
                reason=FailureReason.LEVEL_TOO_LOW,
            )

        profile.location = location.id
        self._save(key, profile)

        return TravelOutcome(
            message=(
                f"🧳 You have traveled to {location.name} {location.image}\n\n"
                f"{location.description}"
            ),
            location_id=location.id,
        )

    # =========================================================================
    # Catalog queries
    # =========================================================================

    def available_quests(self, user_id: str) -> QuestListResult:
        """Quests the user's level allows and that they have not completed."""
        return self._run(user_id, "listing quests", self._available_quests)

    def _available_quests(self, key: str) -> QuestListing:
        profile = self._profile(key)
        completed = set(profile.quests_completed)
        quests = [
            quest
            for quest in self.catalog.quests.values()
            if quest.min_level <= profile.level and quest.id not in completed
        ]
        return QuestListing(quests=quests)

    def shop_items(self, level: int = 1) -> list[Item]:
        """Items purchasable at a level, in catalog order."""
        return [item for item in self.catalog.items.values() if item.available_at(level)]

    def locations(self) -> list[Location]:
        """All locations in catalog order."""
        return list(self.catalog.locations.values())

    def item_info(self, item_id: str) -> Item | None:
        """Look up an item definition."""
        return self.catalog.item(item_id)

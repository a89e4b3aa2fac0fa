"""Tests for the adventure service."""

from __future__ import annotations

from chatquest.models.results import (
    ActionFailure,
    ConsumeOutcome,
    DailyOutcome,
    EncounterOutcome,
    EquipOutcome,
    FailureReason,
    NothingFoundOutcome,
    PurchaseOutcome,
    QuestListing,
    TrainOutcome,
    TravelOutcome,
    TreasureOutcome,
)
from chatquest.models.user import Inventory, InventoryItem, Stats
from chatquest.skills.cooldowns import (
    DAILY_COOLDOWN_MS,
    HUNT_COOLDOWN_MS,
    HUNT_NOTHING_FOUND_COOLDOWN_MS,
    TRAIN_COOLDOWN_MS,
)

USER = "42@s.whatsapp.net"

# Hunt rolls
ENCOUNTER = 0.0
TREASURE = 0.75
NOTHING = 0.95
NO_DROP = 0.99


def _seed(adventure, records, **changes):
    """Create the user's profile and overwrite some of its fields."""
    profile = adventure.get_profile(USER)
    for name, value in changes.items():
        setattr(profile, name, value)
    records.commit_adventure(USER, profile)
    return profile


def _stored(records):
    return records.load(USER).adventure


class TestProfile:
    """Tests for lazy profile creation."""

    def test_created_with_defaults(self, adventure):
        profile = adventure.get_profile(USER)
        assert profile.character_name == "42"
        assert profile.level == 1
        assert profile.inventory.gold == 100
        assert profile.location == "town"
        assert profile.stats == Stats()

    def test_uses_display_name(self, adventure, records):
        records.get_or_create(USER, "Alice")
        assert adventure.get_profile(USER).character_name == "Alice"

    def test_idempotent(self, adventure, clock):
        first = adventure.get_profile(USER)
        clock.advance(60_000)
        assert adventure.get_profile(USER) == first

    def test_keeps_leveling_half(self, adventure, leveling, store):
        leveling.grant_xp(USER, amount=150)
        adventure.get_profile(USER)
        assert store.get("42")["xp"] == 150


class TestHuntRefusals:
    """Hunts that never roll."""

    def test_safe_zone(self, adventure, rng):
        result = adventure.hunt(USER)
        assert isinstance(result, ActionFailure)
        assert result.reason == FailureReason.SAFE_ZONE
        assert "safe zone" in result.message
        assert rng.draws == 0

    def test_unknown_location(self, adventure, records):
        _seed(adventure, records, location="atlantis")
        result = adventure.hunt(USER)
        assert result.reason == FailureReason.UNKNOWN_LOCATION

    def test_cooldown(self, adventure, records, clock, rng):
        profile = _seed(adventure, records, location="forest")
        profile.cooldowns.hunt = clock.now + 60_000
        records.commit_adventure(USER, profile)

        result = adventure.hunt(USER)

        assert result.reason == FailureReason.COOLDOWN
        assert "60 seconds" in result.message
        assert result.retry_in_ms == 60_000
        assert rng.draws == 0


class TestHuntEncounters:
    """Monster encounters in the forest at level 1 (pool: slime x2, rat x2)."""

    def test_victory(self, adventure, records, rng, clock):
        _seed(adventure, records, location="forest")
        rng.push(ENCOUNTER, 0.0, 0.0, NO_DROP)

        result = adventure.hunt(USER)

        assert isinstance(result, EncounterOutcome)
        assert result.success is True
        assert result.victory is True
        assert result.monster_id == "slime"
        assert result.gold == 5
        assert result.xp == 10
        assert result.dropped_item is None
        assert result.level_up.leveled_up is False

        stored = _stored(records)
        assert stored.inventory.gold == 105
        assert stored.xp == 10
        assert stored.monsters_defeated == 1
        assert stored.cooldowns.hunt == clock.now + HUNT_COOLDOWN_MS
        assert rng.remaining == 0

    def test_victory_with_drop(self, adventure, records, rng):
        _seed(adventure, records, location="forest")
        rng.push(ENCOUNTER, 0.0, 0.0, 0.1, 0.0)

        result = adventure.hunt(USER)

        assert result.dropped_item == "potion_health"
        assert "dropped" in result.message
        assert _stored(records).inventory.quantity_of("potion_health") == 1

    def test_victory_levels_up(self, adventure, records, rng):
        _seed(adventure, records, location="forest", xp=95)
        rng.push(ENCOUNTER, 0.0, 0.0, NO_DROP)

        result = adventure.hunt(USER)

        assert result.level_up.leveled_up is True
        assert "LEVEL UP" in result.message
        stored = _stored(records)
        assert stored.level == 2
        assert stored.xp == 5

    def test_defeat(self, adventure, records, rng, clock):
        """Losing leaves a quarter of max health and no rewards."""
        _seed(
            adventure,
            records,
            location="forest",
            stats=Stats(health=50, max_health=100, attack=1, defense=0, speed=8),
        )
        rng.push(ENCOUNTER, 0.0)

        result = adventure.hunt(USER)

        assert isinstance(result, EncounterOutcome)
        assert result.success is False
        assert result.victory is False
        assert result.health_remaining == 25
        stored = _stored(records)
        assert stored.stats.health == 25
        assert stored.inventory.gold == 100
        assert stored.monsters_defeated == 0
        assert stored.cooldowns.hunt == clock.now + HUNT_COOLDOWN_MS

    def test_defeat_leaves_at_least_one_health(self, adventure, records, rng):
        _seed(
            adventure,
            records,
            location="forest",
            stats=Stats(health=1, max_health=2, attack=1, defense=0, speed=8),
        )
        rng.push(ENCOUNTER, 0.0)

        result = adventure.hunt(USER)

        assert result.victory is False
        assert _stored(records).stats.health == 1

    def test_tie_goes_to_player(self, adventure, records, rng):
        """Slime needs 20 turns either way: the player wins."""
        _seed(
            adventure,
            records,
            location="forest",
            stats=Stats(health=100, max_health=100, attack=1, defense=0, speed=8),
        )
        rng.push(ENCOUNTER, 0.0, 0.0, NO_DROP)

        result = adventure.hunt(USER)

        assert result.victory is True

    def test_no_suitable_monster(self, adventure, records, rng):
        before = _seed(adventure, records, location="forest", level=12)
        rng.push(ENCOUNTER)

        result = adventure.hunt(USER)

        assert isinstance(result, ActionFailure)
        assert result.reason == FailureReason.NO_MONSTER
        assert _stored(records) == before


class TestHuntOtherOutcomes:
    """Treasure and empty-handed hunts."""

    def test_treasure_gold_only(self, adventure, records, rng, clock):
        _seed(adventure, records, location="forest")
        rng.push(TREASURE, 0.5, 0.9)

        result = adventure.hunt(USER)

        assert isinstance(result, TreasureOutcome)
        assert result.gold == 30
        assert result.item_id is None
        stored = _stored(records)
        assert stored.inventory.gold == 130
        assert stored.cooldowns.hunt == clock.now + HUNT_COOLDOWN_MS

    def test_treasure_with_item(self, adventure, records, rng):
        _seed(adventure, records, location="forest")
        rng.push(TREASURE, 0.0, 0.1, 0.0)

        result = adventure.hunt(USER)

        assert result.item_id == "potion_health"
        assert _stored(records).inventory.quantity_of("potion_health") == 1

    def test_nothing_found_short_cooldown(self, adventure, records, rng, clock):
        _seed(adventure, records, location="forest")
        rng.push(NOTHING)

        result = adventure.hunt(USER)

        assert isinstance(result, NothingFoundOutcome)
        assert _stored(records).cooldowns.hunt == clock.now + HUNT_NOTHING_FOUND_COOLDOWN_MS

    def test_cooldown_gates_next_hunt(self, adventure, records, rng, clock):
        _seed(adventure, records, location="forest")
        rng.push(NOTHING)
        adventure.hunt(USER)

        assert adventure.hunt(USER).reason == FailureReason.COOLDOWN

        clock.advance(HUNT_NOTHING_FOUND_COOLDOWN_MS)
        rng.push(NOTHING)
        assert isinstance(adventure.hunt(USER), NothingFoundOutcome)


class TestTraining:
    """Tests for train."""

    def test_xp_only(self, adventure, records, rng, clock):
        adventure.get_profile(USER)
        rng.push(0.0, 0.5)

        result = adventure.train(USER)

        assert isinstance(result, TrainOutcome)
        assert result.xp_gained == 15
        assert result.stat_bonus is None
        stored = _stored(records)
        assert stored.xp == 15
        assert stored.cooldowns.train == clock.now + TRAIN_COOLDOWN_MS

    def test_max_health_bonus(self, adventure, records, rng):
        adventure.get_profile(USER)
        rng.push(0.0, 0.1, 0.99)

        result = adventure.train(USER)

        assert result.stat_bonus.stat == "maxHealth"
        assert "+5 Health" in result.message
        stored = _stored(records)
        assert stored.stats.max_health == 105
        assert stored.stats.health == 105

    def test_cooldown(self, adventure, rng, clock):
        rng.push(0.0, 0.5)
        adventure.train(USER)

        result = adventure.train(USER)
        assert result.reason == FailureReason.COOLDOWN
        assert "30m 0s" in result.message

        clock.advance(TRAIN_COOLDOWN_MS)
        rng.push(0.0, 0.5)
        assert isinstance(adventure.train(USER), TrainOutcome)

    def test_store_failure(self, adventure, records, store, rng):
        adventure.get_profile(USER)
        store.fail_on = {"set"}
        rng.push(0.0, 0.5)

        result = adventure.train(USER)

        assert isinstance(result, ActionFailure)
        assert result.reason == FailureReason.INTERNAL_ERROR
        store.fail_on = set()
        stored = _stored(records)
        assert stored.xp == 0
        assert stored.cooldowns.train == 0


class TestDaily:
    """Tests for claim_daily."""

    def test_claim(self, adventure, records, clock):
        result = adventure.claim_daily(USER)

        assert isinstance(result, DailyOutcome)
        assert result.gold == 110
        assert result.xp == 25
        stored = _stored(records)
        assert stored.inventory.gold == 210
        assert stored.xp == 25
        assert stored.cooldowns.daily == clock.now + DAILY_COOLDOWN_MS

    def test_claim_twice(self, adventure, clock):
        adventure.claim_daily(USER)
        result = adventure.claim_daily(USER)
        assert result.reason == FailureReason.COOLDOWN
        assert "24h 0m" in result.message

        clock.advance(DAILY_COOLDOWN_MS)
        assert isinstance(adventure.claim_daily(USER), DailyOutcome)


class TestShop:
    """Tests for buy_item and the shop listing."""

    def test_purchase(self, adventure, records):
        result = adventure.buy_item(USER, "potion_health")

        assert isinstance(result, PurchaseOutcome)
        assert result.price == 25
        assert result.gold_remaining == 75
        assert ".use" in result.message
        stored = _stored(records)
        assert stored.inventory.gold == 75
        assert stored.inventory.quantity_of("potion_health") == 1

    def test_unknown_item(self, adventure):
        assert adventure.buy_item(USER, "excalibur").reason == FailureReason.UNKNOWN_ITEM

    def test_level_too_low(self, adventure, records):
        """A level 5 item is refused at level 3 without touching gold or inventory."""
        before = _seed(adventure, records, level=3, inventory=Inventory(gold=1000))

        result = adventure.buy_item(USER, "axe_1")

        assert result.success is False
        assert result.reason == FailureReason.LEVEL_TOO_LOW
        assert _stored(records).inventory == before.inventory

    def test_insufficient_gold(self, adventure, records):
        _seed(adventure, records, level=3)
        result = adventure.buy_item(USER, "sword_2")
        assert result.reason == FailureReason.INSUFFICIENT_GOLD
        assert _stored(records).inventory.gold == 100

    def test_material_has_no_level_requirement(self, adventure):
        assert isinstance(adventure.buy_item(USER, "mat_wood"), PurchaseOutcome)

    def test_shop_items_by_level(self, adventure):
        low = [item.id for item in adventure.shop_items(1)]
        assert "sword_1" in low
        assert "mat_wood" in low
        assert "sword_2" not in low
        assert len(adventure.shop_items(15)) == 22

    def test_item_info(self, adventure):
        assert adventure.item_info("sword_1").name == "Wooden Sword"
        assert adventure.item_info("excalibur") is None


class TestEquip:
    """Tests for equip_item."""

    def test_swap_returns_previous_item(self, adventure, records):
        profile = _seed(adventure, records)
        profile.equipment.weapon = "sword_1"
        profile.inventory.items = [InventoryItem(item_id="sword_2", quantity=1)]
        records.commit_adventure(USER, profile)

        result = adventure.equip_item(USER, "sword_2")

        assert isinstance(result, EquipOutcome)
        assert result.slot == "weapon"
        assert result.replaced_item_id == "sword_1"
        stored = _stored(records)
        assert stored.equipment.weapon == "sword_2"
        assert stored.inventory.quantity_of("sword_2") == 0
        assert stored.inventory.quantity_of("sword_1") == 1

    def test_equip_into_empty_slot(self, adventure, records):
        _seed(adventure, records, inventory=Inventory(items=[InventoryItem(item_id="ring_hp")]))

        result = adventure.equip_item(USER, "ring_hp")

        assert result.replaced_item_id is None
        stored = _stored(records)
        assert stored.equipment.accessory == "ring_hp"
        assert stored.inventory.items == []

    def test_not_in_inventory(self, adventure):
        result = adventure.equip_item(USER, "sword_1")
        assert result.reason == FailureReason.NOT_IN_INVENTORY

    def test_unknown_item(self, adventure, records):
        _seed(adventure, records, inventory=Inventory(items=[InventoryItem(item_id="mystery")]))
        assert adventure.equip_item(USER, "mystery").reason == FailureReason.UNKNOWN_ITEM

    def test_material_cannot_be_equipped(self, adventure, records):
        _seed(adventure, records, inventory=Inventory(items=[InventoryItem(item_id="mat_iron")]))

        result = adventure.equip_item(USER, "mat_iron")

        assert result.reason == FailureReason.NOT_EQUIPABLE
        assert _stored(records).inventory.quantity_of("mat_iron") == 1

    def test_health_potion(self, adventure, records):
        _seed(
            adventure,
            records,
            stats=Stats(health=30),
            inventory=Inventory(items=[InventoryItem(item_id="potion_health", quantity=2)]),
        )

        result = adventure.equip_item(USER, "potion_health")

        assert isinstance(result, ConsumeOutcome)
        assert result.health_restored == 50
        stored = _stored(records)
        assert stored.stats.health == 80
        assert stored.inventory.quantity_of("potion_health") == 1

    def test_heal_clamped_to_max(self, adventure, records):
        _seed(
            adventure,
            records,
            stats=Stats(health=90),
            inventory=Inventory(items=[InventoryItem(item_id="potion_health")]),
        )

        result = adventure.equip_item(USER, "potion_health")

        assert result.health_restored == 10
        assert _stored(records).stats.health == 100

    def test_boost_potion_is_cosmetic(self, adventure, records):
        _seed(
            adventure,
            records,
            inventory=Inventory(items=[InventoryItem(item_id="potion_strength")]),
        )

        result = adventure.equip_item(USER, "potion_strength")

        assert result.cosmetic_boost is True
        assert "feel stronger" in result.message
        stored = _stored(records)
        assert stored.stats == Stats()
        assert stored.inventory.items == []


class TestTravel:
    """Tests for travel and the location listing."""

    def test_travel(self, adventure, records, clock):
        adventure.get_profile(USER)
        clock.advance(1_000)

        result = adventure.travel(USER, "forest")

        assert isinstance(result, TravelOutcome)
        stored = _stored(records)
        assert stored.location == "forest"
        assert stored.last_played == clock.now

    def test_level_too_low(self, adventure, records):
        result = adventure.travel(USER, "cave")
        assert result.reason == FailureReason.LEVEL_TOO_LOW
        assert _stored(records).location == "town"

    def test_unknown_location(self, adventure):
        assert adventure.travel(USER, "atlantis").reason == FailureReason.UNKNOWN_LOCATION

    def test_locations(self, adventure):
        assert [loc.id for loc in adventure.locations()] == ["town", "forest", "cave", "mountain"]


class TestQuests:
    """Tests for available_quests."""

    def test_level_one(self, adventure):
        result = adventure.available_quests(USER)
        assert isinstance(result, QuestListing)
        assert [q.id for q in result.quests] == ["q1"]

    def test_completed_quests_hidden(self, adventure, records):
        _seed(adventure, records, level=6, quests_completed=["q1"])
        assert [q.id for q in adventure.available_quests(USER).quests] == ["q2", "q3"]


class TestStoreFailures:
    """A failed store call leaves the user's row as it was before the action."""

    def test_failed_flush_undoes_purchase(self, adventure, records, store):
        adventure.get_profile(USER)
        store.fail_on = {"flush"}

        result = adventure.buy_item(USER, "potion_health")

        assert isinstance(result, ActionFailure)
        assert result.reason == FailureReason.INTERNAL_ERROR
        store.fail_on = set()
        stored = _stored(records)
        assert stored.inventory.gold == 100
        assert stored.inventory.items == []

    def test_failed_flush_does_not_start_cooldown(self, adventure, records, store, rng):
        _seed(adventure, records, location="forest")
        store.fail_on = {"flush"}
        rng.push(NOTHING)

        assert adventure.hunt(USER).reason == FailureReason.INTERNAL_ERROR

        store.fail_on = set()
        assert _stored(records).cooldowns.hunt == 0
        rng.push(NOTHING)
        assert isinstance(adventure.hunt(USER), NothingFoundOutcome)

    def test_failed_first_action_leaves_no_row(self, adventure, store):
        store.fail_on = {"flush"}

        result = adventure.claim_daily(USER)

        assert result.reason == FailureReason.INTERNAL_ERROR
        assert "42" not in store

    def test_malformed_row(self, adventure, store, rng):
        raw = {"jid": USER, "xp": -5, "level": 1}
        store.set("42", raw)

        result = adventure.hunt(USER)

        assert isinstance(result, ActionFailure)
        assert result.reason == FailureReason.INTERNAL_ERROR
        assert adventure.get_profile(USER) is None
        assert store.get("42") == raw
        assert rng.draws == 0

    def test_get_profile_store_failure(self, adventure, store):
        store.fail_on = {"get"}
        assert adventure.get_profile(USER) is None

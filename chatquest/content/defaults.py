"""
Default Adventure Content for Chat Quest.

Provides the built-in items, monsters, locations and quests. Each mapping
is keyed by id and uses the same shape as the JSON catalog files, so it
can be written out verbatim when a file is missing.
"""

from __future__ import annotations

from typing import Any

ContentData = dict[str, dict[str, Any]]


# =============================================================================
# Items
# =============================================================================

DEFAULT_ITEMS: ContentData = {
    # Weapons
    "sword_1": {
        "name": "Wooden Sword",
        "description": "A training sword made of wood",
        "type": "weapon",
        "rarity": "common",
        "attack": 5,
        "value": 50,
        "required_level": 1,
        "image": "🗡️",
    },
    "sword_2": {
        "name": "Iron Sword",
        "description": "A standard iron sword",
        "type": "weapon",
        "rarity": "common",
        "attack": 12,
        "value": 200,
        "required_level": 3,
        "image": "🗡️",
    },
    "sword_3": {
        "name": "Steel Sword",
        "description": "A well-crafted sword made of hardened steel",
        "type": "weapon",
        "rarity": "uncommon",
        "attack": 18,
        "value": 450,
        "required_level": 7,
        "image": "⚔️",
    },
    "sword_4": {
        "name": "Enchanted Blade",
        "description": "A sword infused with magical energy",
        "type": "weapon",
        "rarity": "rare",
        "attack": 25,
        "special": "critical",
        "critical_chance": 10,
        "value": 1200,
        "required_level": 15,
        "image": "⚔️",
    },
    "axe_1": {
        "name": "Battle Axe",
        "description": "A heavy axe that deals significant damage",
        "type": "weapon",
        "rarity": "uncommon",
        "attack": 15,
        "value": 300,
        "required_level": 5,
        "image": "🪓",
    },
    "staff_1": {
        "name": "Novice Staff",
        "description": "A wooden staff with magical properties",
        "type": "weapon",
        "rarity": "uncommon",
        "attack": 8,
        "magic": 10,
        "value": 250,
        "required_level": 4,
        "image": "🪄",
    },
    # Armor
    "armor_1": {
        "name": "Leather Armor",
        "description": "Basic protection made from tanned hides",
        "type": "armor",
        "rarity": "common",
        "defense": 5,
        "value": 100,
        "required_level": 1,
        "image": "🥋",
    },
    "armor_2": {
        "name": "Chain Mail",
        "description": "Interlocking metal rings offering good protection",
        "type": "armor",
        "rarity": "common",
        "defense": 12,
        "value": 350,
        "required_level": 5,
        "image": "🛡️",
    },
    "armor_3": {
        "name": "Steel Plate",
        "description": "Heavy armor providing excellent protection",
        "type": "armor",
        "rarity": "uncommon",
        "defense": 20,
        "value": 800,
        "required_level": 10,
        "image": "🛡️",
    },
    "armor_4": {
        "name": "Enchanted Armor",
        "description": "Armor reinforced with magical enchantments",
        "type": "armor",
        "rarity": "rare",
        "defense": 25,
        "magic_resistance": 15,
        "value": 1500,
        "required_level": 15,
        "image": "⚡",
    },
    # Accessories
    "ring_hp": {
        "name": "Health Ring",
        "description": "A ring that increases maximum health",
        "type": "accessory",
        "rarity": "uncommon",
        "health": 20,
        "value": 150,
        "required_level": 3,
        "image": "💍",
    },
    "amulet_speed": {
        "name": "Swift Amulet",
        "description": "An amulet that increases speed",
        "type": "accessory",
        "rarity": "uncommon",
        "speed": 5,
        "value": 200,
        "required_level": 5,
        "image": "📿",
    },
    "ring_atk": {
        "name": "Ring of Power",
        "description": "A ring that enhances attack strength",
        "type": "accessory",
        "rarity": "rare",
        "attack": 8,
        "value": 300,
        "required_level": 8,
        "image": "💍",
    },
    "talisman_luck": {
        "name": "Lucky Talisman",
        "description": "Increases the chance of finding rare items",
        "type": "accessory",
        "rarity": "rare",
        "luck": 15,
        "value": 500,
        "required_level": 10,
        "image": "🔮",
    },
    # Consumables
    "potion_health": {
        "name": "Health Potion",
        "description": "Restores 50 health points",
        "type": "consumable",
        "rarity": "common",
        "restore": 50,
        "value": 25,
        "required_level": 1,
        "image": "🧪",
    },
    "potion_strength": {
        "name": "Strength Potion",
        "description": "Temporarily increases attack power by 5",
        "type": "consumable",
        "rarity": "uncommon",
        "attackBoost": 5,
        "duration": 600,
        "value": 75,
        "required_level": 3,
        "image": "🧪",
    },
    "potion_defense": {
        "name": "Defense Potion",
        "description": "Temporarily increases defense by 5",
        "type": "consumable",
        "rarity": "uncommon",
        "defenseBoost": 5,
        "duration": 600,
        "value": 75,
        "required_level": 3,
        "image": "🧪",
    },
    "food_basic": {
        "name": "Basic Rations",
        "description": "Restores 20 health points",
        "type": "consumable",
        "rarity": "common",
        "restore": 20,
        "value": 10,
        "required_level": 1,
        "image": "🍖",
    },
    # Materials (no level requirement)
    "mat_leather": {
        "name": "Leather",
        "description": "Material used for crafting armor",
        "type": "material",
        "rarity": "common",
        "value": 5,
        "image": "🧶",
    },
    "mat_iron": {
        "name": "Iron Ore",
        "description": "Material used for crafting weapons and armor",
        "type": "material",
        "rarity": "common",
        "value": 8,
        "image": "🪨",
    },
    "mat_wood": {
        "name": "Wood",
        "description": "Basic crafting material",
        "type": "material",
        "rarity": "common",
        "value": 3,
        "image": "🪵",
    },
    "mat_herb": {
        "name": "Medicinal Herbs",
        "description": "Used to create healing potions",
        "type": "material",
        "rarity": "common",
        "value": 5,
        "image": "🌿",
    },
}


# =============================================================================
# Monsters
# =============================================================================

DEFAULT_MONSTERS: ContentData = {
    # Beginner
    "slime": {
        "name": "Slime",
        "description": "A gelatinous creature that bounces around",
        "minLevel": 1,
        "maxLevel": 3,
        "health": 20,
        "attack": 5,
        "defense": 2,
        "speed": 3,
        "xpReward": 10,
        "goldReward": {"min": 5, "max": 15},
        "dropChance": 0.3,
        "possibleDrops": ["potion_health", "mat_herb"],
        "image": "🟢",
    },
    "rat": {
        "name": "Giant Rat",
        "description": "An oversized rodent with sharp teeth",
        "minLevel": 1,
        "maxLevel": 4,
        "health": 15,
        "attack": 7,
        "defense": 1,
        "speed": 8,
        "xpReward": 8,
        "goldReward": {"min": 3, "max": 10},
        "dropChance": 0.4,
        "possibleDrops": ["mat_leather"],
        "image": "🐀",
    },
    "wolf": {
        "name": "Wolf",
        "description": "A wild predator with sharp claws",
        "minLevel": 2,
        "maxLevel": 5,
        "health": 40,
        "attack": 10,
        "defense": 3,
        "speed": 10,
        "xpReward": 20,
        "goldReward": {"min": 10, "max": 25},
        "dropChance": 0.4,
        "possibleDrops": ["potion_health", "mat_leather"],
        "image": "🐺",
    },
    # Intermediate
    "goblin": {
        "name": "Goblin",
        "description": "A small green-skinned creature with a wicked mind",
        "minLevel": 3,
        "maxLevel": 7,
        "health": 60,
        "attack": 15,
        "defense": 5,
        "speed": 7,
        "xpReward": 35,
        "goldReward": {"min": 15, "max": 40},
        "dropChance": 0.5,
        "possibleDrops": ["potion_health", "mat_iron", "sword_1"],
        "image": "👺",
    },
    "skeleton": {
        "name": "Skeleton",
        "description": "An animated pile of bones",
        "minLevel": 5,
        "maxLevel": 9,
        "health": 50,
        "attack": 20,
        "defense": 8,
        "speed": 5,
        "xpReward": 45,
        "goldReward": {"min": 20, "max": 50},
        "dropChance": 0.6,
        "possibleDrops": ["armor_1", "mat_iron"],
        "image": "💀",
    },
    "bandit": {
        "name": "Bandit",
        "description": "A ruthless thief looking for easy prey",
        "minLevel": 6,
        "maxLevel": 10,
        "health": 80,
        "attack": 18,
        "defense": 10,
        "speed": 9,
        "xpReward": 50,
        "goldReward": {"min": 30, "max": 70},
        "dropChance": 0.7,
        "possibleDrops": ["sword_2", "potion_strength", "potion_health"],
        "image": "🥷",
    },
    # Advanced
    "troll": {
        "name": "Troll",
        "description": "A giant beast with regenerative abilities",
        "minLevel": 10,
        "maxLevel": 15,
        "health": 150,
        "attack": 25,
        "defense": 15,
        "speed": 4,
        "xpReward": 100,
        "goldReward": {"min": 50, "max": 120},
        "dropChance": 0.65,
        "possibleDrops": ["armor_2", "potion_defense", "mat_leather"],
        "image": "👹",
    },
    "golem": {
        "name": "Stone Golem",
        "description": "A creature made of animated stone",
        "minLevel": 12,
        "maxLevel": 18,
        "health": 200,
        "attack": 20,
        "defense": 30,
        "speed": 3,
        "xpReward": 120,
        "goldReward": {"min": 70, "max": 150},
        "dropChance": 0.7,
        "possibleDrops": ["mat_iron", "armor_3", "amulet_speed"],
        "image": "🗿",
    },
    # Boss
    "dragon": {
        "name": "Young Dragon",
        "description": "A fearsome dragon still growing into its power",
        "minLevel": 15,
        "maxLevel": 20,
        "health": 300,
        "attack": 40,
        "defense": 25,
        "speed": 12,
        "xpReward": 200,
        "goldReward": {"min": 100, "max": 250},
        "dropChance": 0.9,
        "possibleDrops": ["sword_4", "armor_4", "ring_atk", "talisman_luck"],
        "boss": True,
        "image": "🐉",
    },
}


# =============================================================================
# Locations
# =============================================================================

DEFAULT_LOCATIONS: ContentData = {
    "town": {
        "name": "Town",
        "description": "A safe place to rest and resupply",
        "safeZone": True,
        "shopAvailable": True,
        "trainAvailable": True,
        "minLevel": 1,
        "commonMonsters": [],
        "rareMonsters": [],
        "image": "🏘️",
    },
    "forest": {
        "name": "Forest",
        "description": "A lush woodland teeming with wildlife",
        "safeZone": False,
        "shopAvailable": False,
        "trainAvailable": False,
        "minLevel": 1,
        "commonMonsters": ["slime", "rat", "wolf"],
        "rareMonsters": ["goblin"],
        "image": "🌲",
    },
    "cave": {
        "name": "Cave",
        "description": "A dark cavern with many dangers",
        "safeZone": False,
        "shopAvailable": False,
        "trainAvailable": False,
        "minLevel": 5,
        "commonMonsters": ["goblin", "skeleton"],
        "rareMonsters": ["troll"],
        "image": "🕳️",
    },
    "mountain": {
        "name": "Mountain",
        "description": "Treacherous peaks with powerful foes",
        "safeZone": False,
        "shopAvailable": False,
        "trainAvailable": False,
        "minLevel": 10,
        "commonMonsters": ["troll", "golem"],
        "rareMonsters": ["dragon"],
        "image": "⛰️",
    },
}


# =============================================================================
# Quests
# =============================================================================

DEFAULT_QUESTS: ContentData = {
    "q1": {
        "name": "Slime Extermination",
        "description": "Defeat 5 slimes that are threatening the town",
        "requirement": {"type": "monster", "monsterId": "slime", "count": 5},
        "reward": {"gold": 50, "xp": 30, "items": ["potion_health"]},
        "minLevel": 1,
        "image": "📜",
    },
    "q2": {
        "name": "Wolf Hunt",
        "description": "Cull the wolf population by defeating 3 wolves",
        "requirement": {"type": "monster", "monsterId": "wolf", "count": 3},
        "reward": {"gold": 100, "xp": 60, "items": ["sword_1"]},
        "minLevel": 2,
        "image": "📜",
    },
    "q3": {
        "name": "Bandit Leader",
        "description": "Defeat the bandit leader who's been terrorizing travelers",
        "requirement": {"type": "monster", "monsterId": "bandit", "count": 1},
        "reward": {"gold": 200, "xp": 100, "items": ["armor_2"]},
        "minLevel": 6,
        "image": "📜",
    },
}

"""
Services for Chat Quest.

Services own the read-modify-write cycle around the stateless skills:
- UserRecordAccessor: the single, lock-aware path to the user store
- LevelingService: passive message XP, ranks and progress
- AdventureService: hunting, training, daily rewards, shop, equipment, travel
"""

from __future__ import annotations

from chatquest.services.adventure import AdventureService
from chatquest.services.leveling import LevelingService
from chatquest.services.records import UserRecordAccessor

__all__ = [
    "UserRecordAccessor",
    "LevelingService",
    "AdventureService",
]

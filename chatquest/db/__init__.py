"""
Storage layer for Chat Quest.

Provides the UserStore interface and its implementations:
- JsonFileStore: flat JSON file with periodic autosave (production)
- InMemoryUserStore: plain dict (testing)
"""

from __future__ import annotations

from chatquest.db.interfaces import StoreError, UserStore
from chatquest.db.json_store import JsonFileStore
from chatquest.db.memory import InMemoryUserStore

__all__ = [
    # Protocol interface
    "UserStore",
    "StoreError",
    # Implementations
    "JsonFileStore",
    "InMemoryUserStore",
]

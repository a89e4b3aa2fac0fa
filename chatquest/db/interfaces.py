"""
Storage interface definitions for Chat Quest.

Uses a Protocol class to define the contract for the user store.
Implementations can use a JSON file on disk or an in-memory dict for testing.
"""

from __future__ import annotations

from typing import Any, Protocol


class StoreError(Exception):
    """Raised when the underlying store cannot be read or written."""


class UserStore(Protocol):
    """
    Interface for the persistent key-value user store.

    Keys are cleaned user ids; values are JSON-like dicts in the flat
    record layout. The store owns its records: callers receive copies and
    hand back whole records through ``set``.
    """

    def get(self, key: str) -> dict[str, Any] | None:
        """Get a record by key, or None if absent."""
        ...

    def set(self, key: str, record: dict[str, Any]) -> None:
        """Insert or replace a whole record."""
        ...

    def delete(self, key: str) -> None:
        """Remove a record if present."""
        ...

    def entries(self) -> list[tuple[str, dict[str, Any]]]:
        """Get all ``(key, record)`` pairs in store iteration order."""
        ...

    def flush(self) -> None:
        """Persist pending changes to durable storage."""
        ...

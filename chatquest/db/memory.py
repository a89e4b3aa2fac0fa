"""
In-memory implementation of the user store for testing.

Records live in a plain dict and are deep-copied in and out, so a caller
mutating a record it read never changes what the store holds.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from chatquest.db.interfaces import StoreError


class InMemoryUserStore:
    """
    In-memory implementation of UserStore for testing.

    ``fail_on`` makes the named operations raise StoreError, to exercise
    the services' collaborator-failure path.
    """

    def __init__(self, records: dict[str, dict[str, Any]] | None = None) -> None:
        self._records: dict[str, dict[str, Any]] = deepcopy(records) if records else {}
        self.flush_count = 0
        self.fail_on: set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StoreError(f"Simulated {operation} failure")

    def get(self, key: str) -> dict[str, Any] | None:
        """Get a record by key, or None if absent."""
        self._check("get")
        record = self._records.get(key)
        return deepcopy(record) if record is not None else None

    def set(self, key: str, record: dict[str, Any]) -> None:
        """Insert or replace a whole record."""
        self._check("set")
        self._records[key] = deepcopy(record)

    def delete(self, key: str) -> None:
        """Remove a record if present."""
        self._check("delete")
        self._records.pop(key, None)

    def entries(self) -> list[tuple[str, dict[str, Any]]]:
        """Get all records in insertion order."""
        self._check("entries")
        return [(key, deepcopy(record)) for key, record in self._records.items()]

    def flush(self) -> None:
        """Count the flush; there is nothing to persist."""
        self._check("flush")
        self.flush_count += 1

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

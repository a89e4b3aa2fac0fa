"""
User record accessor for Chat Quest.

Both services reach the store only through this accessor. It cleans user
ids into store keys, hands out per-user locks, and performs read-merge-write
so that a leveling write never drops the adventure half and vice versa.

``atomic`` wraps a whole action: if any store call inside it fails, the
user's row is put back the way it was before the action started.
"""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from chatquest.db.interfaces import StoreError, UserStore
from chatquest.models.user import (
    AdventureState,
    LevelingState,
    UserRecord,
    clean_user_id,
    new_leveling_state,
)
from chatquest.skills.cooldowns import Clock, system_clock

logger = logging.getLogger(__name__)


@dataclass
class UserRecordAccessor:
    """
    Single entry point to the user store.

    All methods take raw user ids (``123@s.whatsapp.net`` or ``123``) and
    clean them before touching the store.
    """

    store: UserStore
    clock: Clock = system_clock

    # Locks are dropped once no action holds them
    _locks: weakref.WeakValueDictionary[str, Any] = field(
        init=False, default_factory=weakref.WeakValueDictionary
    )
    _locks_guard: threading.Lock = field(init=False, default_factory=threading.Lock)

    @contextmanager
    def locked(self, user_id: str) -> Iterator[str]:
        """
        Hold the user's lock for a whole read-modify-write.

        Yields the cleaned key. The lock is re-entrant, so an action may
        call other accessor methods while holding it.
        """
        key = clean_user_id(user_id)
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
        with lock:
            yield key

    @contextmanager
    def atomic(self, user_id: str) -> Iterator[str]:
        """
        Hold the user's lock and undo the action's writes on StoreError.

        The row is snapshotted on entry. If a StoreError escapes the block
        the snapshot is written back (or the row removed if there was
        none) and the error is re-raised.
        """
        with self.locked(user_id) as key:
            before = self.store.get(key)
            try:
                yield key
            except StoreError:
                self._restore(key, before)
                raise

    def _restore(self, key: str, before: dict[str, Any] | None) -> None:
        try:
            if before is None:
                self.store.delete(key)
            else:
                self.store.set(key, before)
        except StoreError:
            logger.exception(f"Failed to roll back record {key}")
        else:
            logger.warning(f"Rolled back record {key} after a store failure")

    # =========================================================================
    # Reads
    # =========================================================================

    def load(self, user_id: str) -> UserRecord | None:
        """
        Get a user's record, or None if they have none.

        Raises:
            StoreError: If the store fails or the stored row is malformed
        """
        key = clean_user_id(user_id)
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return UserRecord.from_storage(key, raw)
        except ValidationError as e:
            raise StoreError(f"Malformed record for {key}: {e}") from e

    def get_or_create(self, user_id: str, display_name: str | None = None) -> UserRecord:
        """
        Get a user's record, creating the leveling half if missing.

        A non-empty display name that differs from the stored one replaces
        it. Nothing is written when the record exists unchanged.
        """
        with self.locked(user_id) as key:
            record = self.load(key)
            if record is None:
                record = UserRecord(
                    user_id=key,
                    leveling=new_leveling_state(user_id, display_name, self.clock()),
                )
                self.store.set(key, record.to_storage())
                logger.debug(f"Created user record {key}")
            elif display_name and record.leveling.display_name != display_name:
                record.leveling.display_name = display_name
                self.commit_leveling(key, record.leveling)
            return record

    def records(self) -> list[UserRecord]:
        """All well-formed records in store iteration order. Malformed rows are skipped."""
        result = []
        for key, raw in self.store.entries():
            try:
                result.append(UserRecord.from_storage(key, raw))
            except ValidationError:
                logger.warning(f"Skipping malformed record {key}")
        return result

    # =========================================================================
    # Writes
    # =========================================================================

    def commit_leveling(self, user_id: str, leveling: LevelingState) -> None:
        """Write the leveling half, keeping whatever adventure half is stored."""
        key = clean_user_id(user_id)
        with self.locked(key):
            current = self.store.get(key) or {}
            merged = leveling.model_dump(by_alias=True)
            if "adventure" in current:
                merged["adventure"] = current["adventure"]
            self.store.set(key, merged)

    def commit_adventure(self, user_id: str, adventure: AdventureState) -> None:
        """Write the adventure half, keeping the stored leveling half."""
        key = clean_user_id(user_id)
        with self.locked(key):
            current = self.store.get(key)
            if current is None:
                current = new_leveling_state(user_id, None, self.clock()).model_dump(by_alias=True)
            current["adventure"] = adventure.model_dump(by_alias=True)
            self.store.set(key, current)

    def flush(self) -> None:
        """Force the store to persist."""
        self.store.flush()

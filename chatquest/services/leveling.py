"""
Message Leveling Service for Chat Quest.

Turns chat messages into XP. Passive XP is throttled per user by an
in-memory cooldown map. The map is not persisted, so a restart
resets the throttle while stored XP is untouched.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from chatquest.config import Settings
from chatquest.db.interfaces import StoreError
from chatquest.models.results import LeaderboardEntry, LevelProgress, LevelUpResult
from chatquest.models.user import UserRecord, clean_user_id
from chatquest.services.records import UserRecordAccessor
from chatquest.skills.cooldowns import Clock, system_clock
from chatquest.skills.leveling import (
    LEADERBOARD_DEFAULT,
    MAX_LEVEL,
    level_for_xp,
    progress,
    roll_message_xp,
)
from chatquest.skills.rolls import RandomSource, default_random

logger = logging.getLogger(__name__)


@dataclass
class LevelingService:
    """
    Grants message XP and answers rank and progress queries.

    Usage:
        service = LevelingService(records=accessor, settings=Settings())
        result = service.grant_message_xp("123@s.whatsapp.net", "456@g.us", "hello there")
        if result and result.leveled_up:
            ...
    """

    records: UserRecordAccessor
    settings: Settings = field(default_factory=Settings)
    rng: RandomSource = field(default_factory=default_random)
    clock: Clock = system_clock

    _xp_cooldowns: dict[str, int] = field(init=False, default_factory=dict)
    _cooldowns_guard: threading.Lock = field(init=False, default_factory=threading.Lock)

    # =========================================================================
    # Records
    # =========================================================================

    def get_or_create(self, user_id: str, display_name: str | None = None) -> UserRecord | None:
        """
        Get a user's record, creating it with defaults if missing.

        Returns None (and logs) if the store fails or the row is malformed.
        """
        try:
            with self.records.atomic(user_id):
                return self.records.get_or_create(user_id, display_name)
        except StoreError:
            logger.exception(f"Failed to load record for {clean_user_id(user_id)}")
            return None

    # =========================================================================
    # XP grants
    # =========================================================================

    def grant_message_xp(
        self,
        user_id: str,
        group_id: str | None,
        content: str | None,
        display_name: str | None = None,
        is_group_admin: bool = False,
    ) -> LevelUpResult | None:
        """
        Grant passive XP for a chat message.

        Returns None without side effects when leveling is disabled, the
        message is too short or is a command, it was not sent in a group,
        the sender is not allowed in private mode, or the user's cooldown
        has not elapsed.

        Args:
            user_id: Sender id
            group_id: Group the message was sent in (None for direct chats)
            content: Message text
            display_name: Sender's current display name, if known
            is_group_admin: Whether the sender administers the group

        Returns:
            LevelUpResult, or None if no XP was granted
        """
        settings = self.settings
        if not settings.leveling_enabled:
            return None
        if not content or len(content) < settings.min_message_length:
            return None
        if settings.prefix and content.startswith(settings.prefix):
            return None
        if not group_id:
            return None
        if settings.private_mode:
            if not settings.is_owner(clean_user_id(user_id)) and not is_group_admin:
                return None

        return self.grant_xp(user_id, group_id=group_id, display_name=display_name)

    def grant_xp(
        self,
        user_id: str,
        amount: int = 0,
        bypass_cooldown: bool = False,
        group_id: str | None = None,
        display_name: str | None = None,
    ) -> LevelUpResult | None:
        """
        Grant XP directly.

        With ``amount == 0`` a random message amount is drawn. That path
        honours the passive cooldown unless ``bypass_cooldown`` is set;
        explicit amounts never touch the cooldown.

        Returns:
            LevelUpResult, or None if throttled or the store failed
        """
        if amount < 0:
            raise ValueError("XP amount cannot be negative")

        with self.records.locked(user_id) as key:
            now = self.clock()
            throttled = amount == 0 and not bypass_cooldown
            if throttled and self._cooling_down(key, now):
                return None
            if amount == 0:
                amount = roll_message_xp(self.rng)

            try:
                with self.records.atomic(key):
                    result = self._apply(user_id, key, amount, group_id, display_name)
            except StoreError:
                logger.exception(f"Failed to grant XP to {key}")
                return None

            # The window only starts once the grant is stored
            if throttled:
                with self._cooldowns_guard:
                    self._xp_cooldowns[key] = now + self.settings.xp_cooldown_ms
            return result

    def _cooling_down(self, key: str, now: int) -> bool:
        with self._cooldowns_guard:
            # Expired entries are dropped, so the map only holds users who
            # earned XP within the last cooldown window
            expired = [k for k, expires_at in self._xp_cooldowns.items() if expires_at <= now]
            for k in expired:
                del self._xp_cooldowns[k]
            return key in self._xp_cooldowns

    def _apply(
        self,
        user_id: str,
        key: str,
        amount: int,
        group_id: str | None,
        display_name: str | None,
    ) -> LevelUpResult:
        record = self.records.get_or_create(user_id, display_name)
        state = record.leveling
        old_level = state.level

        state.total_xp += amount
        state.message_count += 1
        state.last_active_at = self.clock()
        if group_id:
            state.join_group(group_id)

        new_level = level_for_xp(state.total_xp)
        leveled_up = new_level > old_level
        if leveled_up:
            state.level = new_level

        self.records.commit_leveling(key, state)
        if leveled_up:
            # Level-ups are persisted right away rather than waiting for autosave
            self.records.flush()
            logger.info(f"{key} reached level {new_level}")

        return LevelUpResult(
            user_id=key,
            display_name=state.display_name,
            leveled_up=leveled_up,
            old_level=old_level,
            new_level=state.level,
            xp_gained=amount,
            current_xp=state.total_xp,
            total_messages=state.message_count,
            announce=leveled_up and bool(self.settings.level_up_messages),
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def _ranked(self) -> list[UserRecord]:
        # sorted() is stable, so ties keep store iteration order
        return sorted(self.records.records(), key=lambda r: r.leveling.total_xp, reverse=True)

    def rank(self, user_id: str) -> int:
        """1-based leaderboard position by total XP, or 0 if the user has no record."""
        key = clean_user_id(user_id)
        try:
            ranked = self._ranked()
        except StoreError:
            logger.exception("Failed to read records for rank")
            return 0
        for position, record in enumerate(ranked, start=1):
            if record.user_id == key:
                return position
        return 0

    def top_n(self, n: int) -> list[UserRecord]:
        """The ``n`` records with the most total XP."""
        if n <= 0:
            return []
        try:
            return self._ranked()[:n]
        except StoreError:
            logger.exception("Failed to read records for leaderboard")
            return []

    def top_users(self, limit: int = LEADERBOARD_DEFAULT) -> list[LeaderboardEntry]:
        """Leaderboard rows for the top ``limit`` users."""
        return [
            LeaderboardEntry(
                rank=position,
                user_id=record.user_id,
                display_name=record.leveling.display_name or record.user_id,
                level=record.leveling.level,
                xp=record.leveling.total_xp,
                is_max_level=record.leveling.level >= MAX_LEVEL,
            )
            for position, record in enumerate(self.top_n(limit), start=1)
        ]

    def progress_for(self, user_id: str) -> LevelProgress | None:
        """Level progress for a stored user, or None if they have no readable record."""
        try:
            record = self.records.load(user_id)
        except StoreError:
            logger.exception(f"Failed to read record for {clean_user_id(user_id)}")
            return None
        if record is None:
            return None
        return progress(record.leveling.level, record.leveling.total_xp)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def shutdown(self) -> None:
        """Final flush of pending leveling writes."""
        try:
            self.records.flush()
        except StoreError:
            logger.exception("Final flush failed")

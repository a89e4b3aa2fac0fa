"""
Runtime configuration for Chat Quest.

Settings are plain dataclass fields. Any field left as None is filled from
the environment, then from the built-in default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_PREFIX = "."
DEFAULT_DATA_DIR = "./data"
DEFAULT_AUTOSAVE_SECONDS = 20.0
DEFAULT_MIN_MESSAGE_LENGTH = 3
DEFAULT_XP_COOLDOWN_MS = 5000

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _env_number(name: str, default: float, cast: type = int) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


@dataclass
class Settings:
    """
    Chat Quest settings.

    Configuration via environment variables:
        CHATQUEST_LEVELING_ENABLED: Grant passive message XP (default: true)
        CHATQUEST_LEVEL_UP_MESSAGES: Announce level-ups in chat (default: true)
        CHATQUEST_PREFIX: Command prefix; prefixed messages earn no XP (default: ".")
        CHATQUEST_PRIVATE_MODE: Only owners and group admins earn XP (default: false)
        CHATQUEST_OWNERS: Comma-separated owner ids
        CHATQUEST_DATA_DIR: Where users.json and the catalogs live (default: ./data)
        CHATQUEST_AUTOSAVE_SECONDS: Store autosave interval (default: 20)
        CHATQUEST_MIN_MESSAGE_LENGTH: Shortest message that earns XP (default: 3)
        CHATQUEST_XP_COOLDOWN_MS: Passive XP cooldown per user (default: 5000)
    """

    leveling_enabled: bool | None = None
    level_up_messages: bool | None = None
    prefix: str | None = None
    private_mode: bool | None = None
    owners: list[str] = field(default_factory=list)
    data_dir: str | None = None
    autosave_seconds: float | None = None
    min_message_length: int | None = None
    xp_cooldown_ms: int | None = None

    def __post_init__(self) -> None:
        """Fill unset fields from the environment."""
        if self.leveling_enabled is None:
            self.leveling_enabled = _env_bool("CHATQUEST_LEVELING_ENABLED", True)

        if self.level_up_messages is None:
            self.level_up_messages = _env_bool("CHATQUEST_LEVEL_UP_MESSAGES", True)

        if self.prefix is None:
            self.prefix = os.getenv("CHATQUEST_PREFIX") or DEFAULT_PREFIX

        if self.private_mode is None:
            self.private_mode = _env_bool("CHATQUEST_PRIVATE_MODE", False)

        if not self.owners and os.getenv("CHATQUEST_OWNERS"):
            self.owners = [
                owner.strip()
                for owner in os.getenv("CHATQUEST_OWNERS", "").split(",")
                if owner.strip()
            ]

        if self.data_dir is None:
            self.data_dir = os.getenv("CHATQUEST_DATA_DIR") or DEFAULT_DATA_DIR

        if self.autosave_seconds is None:
            self.autosave_seconds = _env_number(
                "CHATQUEST_AUTOSAVE_SECONDS", DEFAULT_AUTOSAVE_SECONDS, float
            )

        if self.min_message_length is None:
            self.min_message_length = int(
                _env_number("CHATQUEST_MIN_MESSAGE_LENGTH", DEFAULT_MIN_MESSAGE_LENGTH)
            )

        if self.xp_cooldown_ms is None:
            self.xp_cooldown_ms = int(_env_number("CHATQUEST_XP_COOLDOWN_MS", DEFAULT_XP_COOLDOWN_MS))

    def is_owner(self, user_id: str) -> bool:
        """Check an already-cleaned user id against the owner list."""
        return user_id in self.owners

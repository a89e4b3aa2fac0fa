"""
Cooldown Skill.

A cooldown is an epoch-millisecond timestamp before which an activity is
refused. Zero, or any time in the past, means ready.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable

Clock = Callable[[], int]

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS

HUNT_COOLDOWN_MS = 2 * MINUTE_MS
HUNT_NOTHING_FOUND_COOLDOWN_MS = 30 * SECOND_MS
TRAIN_COOLDOWN_MS = 30 * MINUTE_MS
DAILY_COOLDOWN_MS = 24 * HOUR_MS


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def is_ready(expires_at: int, now: int) -> bool:
    """Check whether a cooldown has elapsed."""
    return expires_at <= now


def remaining_ms(expires_at: int, now: int) -> int:
    """Milliseconds left on a cooldown (0 if ready)."""
    return max(0, expires_at - now)


def remaining_seconds(expires_at: int, now: int) -> int:
    """Whole seconds left, rounded up."""
    return math.ceil(remaining_ms(expires_at, now) / SECOND_MS)


def format_seconds(expires_at: int, now: int) -> str:
    """``"42 seconds"``."""
    return f"{remaining_seconds(expires_at, now)} seconds"


def format_minutes(expires_at: int, now: int) -> str:
    """``"12m 5s"``."""
    left = remaining_seconds(expires_at, now)
    return f"{left // 60}m {left % 60}s"


def format_hours(expires_at: int, now: int) -> str:
    """``"23h 59m"``."""
    left = remaining_seconds(expires_at, now)
    return f"{left // 3600}h {(left % 3600) // 60}m"

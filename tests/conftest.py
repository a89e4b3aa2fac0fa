"""Shared fixtures: scripted randomness, a manual clock and in-memory wiring."""

from __future__ import annotations

from collections import deque

import pytest

from chatquest.config import Settings
from chatquest.content.loader import default_catalog
from chatquest.db.memory import InMemoryUserStore
from chatquest.models.catalog import Catalog
from chatquest.services.adventure import AdventureService
from chatquest.services.leveling import LevelingService
from chatquest.services.records import UserRecordAccessor

START_MS = 1_700_000_000_000


class ScriptedRandom:
    """Random source that returns queued floats and fails on an unexpected draw."""

    def __init__(self, *values: float) -> None:
        self._values: deque[float] = deque(values)
        self.draws = 0

    def push(self, *values: float) -> None:
        self._values.extend(values)

    def random(self) -> float:
        if not self._values:
            raise AssertionError("Random source exhausted")
        self.draws += 1
        return self._values.popleft()

    @property
    def remaining(self) -> int:
        return len(self._values)


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def catalog() -> Catalog:
    return default_catalog()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        leveling_enabled=True,
        level_up_messages=True,
        prefix=".",
        private_mode=False,
        owners=[],
        data_dir="./data",
        autosave_seconds=20,
        min_message_length=3,
        xp_cooldown_ms=5000,
    )


@pytest.fixture
def records(store: InMemoryUserStore, clock: FakeClock) -> UserRecordAccessor:
    return UserRecordAccessor(store=store, clock=clock)


@pytest.fixture
def leveling(
    records: UserRecordAccessor,
    settings: Settings,
    rng: ScriptedRandom,
    clock: FakeClock,
) -> LevelingService:
    return LevelingService(records=records, settings=settings, rng=rng, clock=clock)


@pytest.fixture
def adventure(
    records: UserRecordAccessor,
    catalog: Catalog,
    rng: ScriptedRandom,
    clock: FakeClock,
) -> AdventureService:
    return AdventureService(records=records, catalog=catalog, rng=rng, clock=clock)

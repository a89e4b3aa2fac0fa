"""
Wiring for Chat Quest.

``create_services`` builds the store, loads the catalogs and hands both
to the services, so the host bot needs a single call at startup and a
single ``shutdown`` at exit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from chatquest.config import Settings
from chatquest.content.loader import load_catalog
from chatquest.db.interfaces import UserStore
from chatquest.db.json_store import JsonFileStore
from chatquest.models.catalog import Catalog
from chatquest.services.adventure import AdventureService
from chatquest.services.leveling import LevelingService
from chatquest.services.records import UserRecordAccessor
from chatquest.skills.cooldowns import Clock, system_clock
from chatquest.skills.rolls import RandomSource, default_random

logger = logging.getLogger(__name__)

USERS_FILE = "users.json"


@dataclass
class GameServices:
    """Everything the host needs, already wired together."""

    settings: Settings
    store: UserStore
    catalog: Catalog
    records: UserRecordAccessor
    leveling: LevelingService
    adventure: AdventureService
    owned_store: JsonFileStore | None = None

    def shutdown(self) -> None:
        """Flush pending writes and stop the store's autosave if we started it."""
        self.leveling.shutdown()
        if self.owned_store is not None:
            self.owned_store.close()


def create_services(
    settings: Settings | None = None,
    store: UserStore | None = None,
    catalog: Catalog | None = None,
    rng: RandomSource | None = None,
    clock: Clock = system_clock,
) -> GameServices:
    """
    Build the services.

    Args:
        settings: Runtime settings (read from the environment if omitted)
        store: User store; defaults to ``<data_dir>/users.json`` with autosave
        catalog: Static content; defaults to the catalogs under ``<data_dir>``
        rng: Random source shared by both services
        clock: Millisecond clock shared by both services

    Returns:
        GameServices ready for use
    """
    settings = settings or Settings()
    rng = rng or default_random()

    owned_store: JsonFileStore | None = None
    if store is None:
        owned_store = JsonFileStore(
            Path(settings.data_dir) / USERS_FILE,
            autosave_interval=settings.autosave_seconds,
        )
        owned_store.start_autosave()
        store = owned_store

    if catalog is None:
        catalog = load_catalog(settings.data_dir)

    records = UserRecordAccessor(store=store, clock=clock)
    leveling = LevelingService(records=records, settings=settings, rng=rng, clock=clock)
    adventure = AdventureService(
        records=records,
        catalog=catalog,
        rng=rng,
        clock=clock,
        command_prefix=settings.prefix,
    )
    logger.info(f"Chat Quest ready with {catalog!r}")

    return GameServices(
        settings=settings,
        store=store,
        catalog=catalog,
        records=records,
        leveling=leveling,
        adventure=adventure,
        owned_store=owned_store,
    )

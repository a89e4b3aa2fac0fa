"""
Catalog loading for Chat Quest.

Catalog files live under ``<data_dir>/adventure/`` as JSON objects keyed
by id. A missing file is created from the built-in defaults, so a fresh
install starts with the standard content and operators can edit it.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from chatquest.content.defaults import (
    DEFAULT_ITEMS,
    DEFAULT_LOCATIONS,
    DEFAULT_MONSTERS,
    DEFAULT_QUESTS,
)
from chatquest.models.catalog import Catalog, Item, Location, Monster, Quest

logger = logging.getLogger(__name__)

CATALOG_SUBDIR = "adventure"


class CatalogError(Exception):
    """Raised when a catalog file cannot be read or holds invalid entries."""


def _build(model: type, kind: str, data: Mapping[str, Mapping[str, Any]]) -> list[Any]:
    entries = []
    for entry_id, fields in data.items():
        if not isinstance(fields, Mapping):
            raise CatalogError(f"{kind} '{entry_id}' is not an object")
        try:
            entries.append(model.model_validate({**fields, "id": entry_id}))
        except ValidationError as e:
            raise CatalogError(f"Invalid {kind} '{entry_id}': {e}") from e
    return entries


def catalog_from_data(
    items: Mapping[str, Mapping[str, Any]],
    monsters: Mapping[str, Mapping[str, Any]],
    locations: Mapping[str, Mapping[str, Any]],
    quests: Mapping[str, Mapping[str, Any]],
) -> Catalog:
    """
    Build a Catalog from raw id-keyed mappings.

    Raises:
        CatalogError: If any entry fails validation
    """
    return Catalog(
        items=_build(Item, "item", items),
        monsters=_build(Monster, "monster", monsters),
        locations=_build(Location, "location", locations),
        quests=_build(Quest, "quest", quests),
    )


def default_catalog() -> Catalog:
    """The built-in content, without touching the filesystem."""
    return catalog_from_data(DEFAULT_ITEMS, DEFAULT_MONSTERS, DEFAULT_LOCATIONS, DEFAULT_QUESTS)


def _load_file(path: Path, defaults: Mapping[str, Any]) -> dict[str, Any]:
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf8") as handle:
            json.dump(defaults, handle, indent=2, ensure_ascii=False)
        logger.info(f"Created {path} with default content")
        return dict(defaults)

    try:
        with path.open(encoding="utf8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as e:
        raise CatalogError(f"Failed to read {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"{path} must hold a JSON object keyed by id")
    return data


def load_catalog(data_dir: str | os.PathLike[str]) -> Catalog:
    """
    Load all four catalogs from ``<data_dir>/adventure/``.

    Args:
        data_dir: Root data directory

    Returns:
        The loaded Catalog

    Raises:
        CatalogError: If a file is unreadable or holds invalid entries
    """
    base = Path(data_dir) / CATALOG_SUBDIR
    items = _load_file(base / "items.json", DEFAULT_ITEMS)
    monsters = _load_file(base / "monsters.json", DEFAULT_MONSTERS)
    locations = _load_file(base / "locations.json", DEFAULT_LOCATIONS)
    quests = _load_file(base / "quests.json", DEFAULT_QUESTS)

    catalog = catalog_from_data(items, monsters, locations, quests)
    logger.info(f"Loaded {len(catalog.items)} items")
    logger.info(f"Loaded {len(catalog.monsters)} monsters")
    logger.info(f"Loaded {len(catalog.locations)} locations")
    logger.info(f"Loaded {len(catalog.quests)} quests")
    return catalog

"""
Adventure content for Chat Quest.

Built-in default catalogs and the JSON catalog loader.
"""

from __future__ import annotations

from chatquest.content.defaults import (
    DEFAULT_ITEMS,
    DEFAULT_LOCATIONS,
    DEFAULT_MONSTERS,
    DEFAULT_QUESTS,
)
from chatquest.content.loader import (
    CatalogError,
    catalog_from_data,
    default_catalog,
    load_catalog,
)

__all__ = [
    "DEFAULT_ITEMS",
    "DEFAULT_MONSTERS",
    "DEFAULT_LOCATIONS",
    "DEFAULT_QUESTS",
    "CatalogError",
    "catalog_from_data",
    "default_catalog",
    "load_catalog",
]

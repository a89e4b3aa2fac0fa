"""
JSON file implementation of the user store.

All records are held in memory and the whole file is rewritten on flush.
Writes go to a temporary file in the same directory which then replaces
the target, so a crash mid-write leaves the previous file intact.

A daemon timer flushes periodically when autosave is running; ``close``
stops the timer and performs the final flush.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from copy import deepcopy
from pathlib import Path
from typing import Any

from chatquest.db.interfaces import StoreError

logger = logging.getLogger(__name__)

DEFAULT_AUTOSAVE_SECONDS = 20.0


class JsonFileStore:
    """
    Flat JSON file store with periodic autosave.

    Args:
        path: Target JSON file (created on first flush if missing)
        autosave_interval: Seconds between autosave flushes
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        autosave_interval: float = DEFAULT_AUTOSAVE_SECONDS,
    ) -> None:
        self.path = Path(path)
        self.autosave_interval = autosave_interval
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = threading.RLock()
        self._dirty = False
        self._timer: threading.Timer | None = None
        self._closed = False
        self._load()

    # =========================================================================
    # UserStore protocol
    # =========================================================================

    def get(self, key: str) -> dict[str, Any] | None:
        """Get a record by key, or None if absent."""
        with self._lock:
            record = self._records.get(key)
            return deepcopy(record) if record is not None else None

    def set(self, key: str, record: dict[str, Any]) -> None:
        """Insert or replace a whole record. Persisted on the next flush."""
        with self._lock:
            self._records[key] = deepcopy(record)
            self._dirty = True

    def delete(self, key: str) -> None:
        """Remove a record if present. Persisted on the next flush."""
        with self._lock:
            if self._records.pop(key, None) is not None:
                self._dirty = True

    def entries(self) -> list[tuple[str, dict[str, Any]]]:
        """Get all records in file order."""
        with self._lock:
            return [(key, deepcopy(record)) for key, record in self._records.items()]

    def flush(self) -> None:
        """
        Write every record to disk atomically.

        Raises:
            StoreError: If the file cannot be written
        """
        with self._lock:
            payload = json.dumps(self._records, indent=2, ensure_ascii=False)
            try:
                self._write(payload)
            except OSError as e:
                raise StoreError(f"Failed to write {self.path}: {e}") from e
            self._dirty = False
        logger.debug(f"Flushed {len(self._records)} records to {self.path}")

    # =========================================================================
    # Autosave
    # =========================================================================

    @property
    def dirty(self) -> bool:
        """Whether there are writes not yet flushed."""
        return self._dirty

    @property
    def autosave_running(self) -> bool:
        return self._timer is not None

    def start_autosave(self) -> None:
        """Start the periodic flush timer (no-op if already running)."""
        with self._lock:
            if self._timer is not None or self._closed:
                return
            self._schedule()
        logger.info(f"Autosave every {self.autosave_interval}s for {self.path}")

    def stop_autosave(self) -> None:
        """Cancel the periodic flush timer."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def close(self) -> None:
        """Stop autosave and flush whatever is pending."""
        self.stop_autosave()
        with self._lock:
            self._closed = True
            self.flush()
        logger.info(f"Closed store {self.path}")

    def _schedule(self) -> None:
        timer = threading.Timer(self.autosave_interval, self._autosave_tick)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _autosave_tick(self) -> None:
        with self._lock:
            if self._timer is None:
                return
            try:
                if self._dirty:
                    self.flush()
            except StoreError:
                logger.exception("Autosave failed")
            finally:
                if self._timer is not None:
                    self._schedule()

    # =========================================================================
    # File I/O
    # =========================================================================

    def _load(self) -> None:
        if not self.path.exists():
            logger.info(f"No store file at {self.path}, starting empty")
            return
        try:
            with self.path.open(encoding="utf8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store file {self.path} does not hold a JSON object")
        self._records = {str(key): value for key, value in data.items() if isinstance(value, dict)}
        logger.info(f"Loaded {len(self._records)} records from {self.path}")

    def _write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf8", dir=self.path.parent, delete=False
            ) as handle:
                temp_path = Path(handle.name)
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self.path)
            temp_path = None
        finally:
            if temp_path is not None:
                try:
                    temp_path.unlink()
                except FileNotFoundError:
                    pass

    def __len__(self) -> int:
        return len(self._records)

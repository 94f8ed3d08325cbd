"""JSON-file-backed implementation of RateStore.

Entries are stored as ``{key: {"rate": number, "fetchedAt": epoch-millis}}``.
Writes are last-writer-wins; pair keys make overwrites idempotent.  A
file that cannot be parsed is treated as empty on write and replaced
whole, so a torn write never survives the next successful fetch.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from checkout.domain.model.rate import RateCacheEntry
from checkout.domain.repository.rate_store import RateStore

logger = logging.getLogger(__name__)


class JsonRateStore(RateStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- RateStore interface --------------------------------------------------

    def get(self, key: str) -> RateCacheEntry | None:
        raw = self._load_raw().get(key)
        if raw is None:
            return None
        return RateCacheEntry.from_raw(raw)

    def set(self, key: str, entry: RateCacheEntry) -> None:
        try:
            records = self._load_raw()
        except ValueError as exc:
            logger.warning("Discarding unreadable rate file %s: %s", self._file_path, exc)
            records = {}
        records[key] = entry.to_raw()
        self._persist_raw(records)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, dict]:
        records = json.loads(self._file_path.read_text(encoding="utf-8"))
        if not isinstance(records, dict):
            raise ValueError(f"expected an object, got {type(records).__name__}")
        return records

    def _persist_raw(self, records: dict[str, dict]) -> None:
        tmp = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")

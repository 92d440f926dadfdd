"""History store interface and its serialized-list implementation."""

from __future__ import annotations

import json
import logging
from typing import Protocol

from pydantic import ValidationError

from furigana_service.config import DEFAULT_STORAGE_KEY
from furigana_service.history.backends import KeyValueBackend
from furigana_service.types import HistoryEntry, HistoryUpdate

LOGGER = logging.getLogger(__name__)


class HistoryStore(Protocol):
    """Newest-first list of past annotations addressable by id."""

    def list(self) -> list[HistoryEntry]:
        """Return all entries, newest first."""

    def append(self, entry: HistoryEntry) -> None:
        """Insert an entry at the front."""

    def remove(self, entry_id: str) -> None:
        """Delete entries with this id."""

    def update(self, entry_id: str, updates: HistoryUpdate) -> None:
        """Apply the explicitly set fields of `updates` to the entry."""


class SerializedHistoryStore:
    """Keeps the whole history as one JSON array under a fixed key.

    Every operation is a read-modify-write of that array; the last write wins.
    Corrupted data never raises: an unreadable document reads as an empty list
    and invalid items are dropped one by one.
    """

    def __init__(self, backend: KeyValueBackend, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._backend = backend
        self._key = key

    def list(self) -> list[HistoryEntry]:
        raw = self._backend.get(self._key)
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except ValueError:
            LOGGER.warning("event=history_load status=discarded reason=invalid_json key=%s", self._key)
            return []
        if not isinstance(payload, list):
            LOGGER.warning("event=history_load status=discarded reason=not_a_list key=%s", self._key)
            return []

        entries: list[HistoryEntry] = []
        for item in payload:
            try:
                entries.append(HistoryEntry.model_validate(item))
            except ValidationError:
                LOGGER.debug("event=history_load status=skipped_item key=%s", self._key)
        return entries

    def append(self, entry: HistoryEntry) -> None:
        entries = self.list()
        entries.insert(0, entry)
        self._write(entries)

    def remove(self, entry_id: str) -> None:
        self._write([entry for entry in self.list() if entry.id != entry_id])

    def update(self, entry_id: str, updates: HistoryUpdate) -> None:
        changes = updates.changes()
        self._write(
            [
                entry.model_copy(update=changes) if entry.id == entry_id else entry
                for entry in self.list()
            ]
        )

    def _write(self, entries: list[HistoryEntry]) -> None:
        self._backend.set(
            self._key,
            json.dumps([entry.to_storage() for entry in entries], ensure_ascii=False),
        )

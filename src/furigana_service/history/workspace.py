"""Client-side annotation flow over a history store."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Protocol

from furigana_service.config import HistoryConfig
from furigana_service.history.store import HistoryStore
from furigana_service.sanitizer import sanitize, trim_text
from furigana_service.types import AnnotationResult, HistoryEntry, HistoryUpdate

LOGGER = logging.getLogger(__name__)


class AnnotationClient(Protocol):
    def annotate(self, text: str) -> AnnotationResult:
        """Return raw ruby HTML for `text` or raise an `AnnotationError`."""


class AnnotationWorkspace:
    """Submits text for annotation and keeps the sanitized results.

    This is the only path that writes new entries, and it always sanitizes
    the model output before the entry is built.
    """

    def __init__(
        self,
        *,
        client: AnnotationClient,
        store: HistoryStore,
        config: HistoryConfig | None = None,
    ) -> None:
        self.client = client
        self.store = store
        self.config = config or HistoryConfig()

    def submit(self, text: str) -> HistoryEntry:
        original = trim_text(text)
        result = self.client.annotate(original)
        entry = HistoryEntry(
            id=str(uuid.uuid4()),
            original_text=original,
            html=sanitize(result.html),
            created_at=int(time.time() * 1000),
        )
        self.store.append(entry)
        LOGGER.info("event=history_append status=ok entry_id=%s", entry.id)
        return entry

    def entries(self) -> list[HistoryEntry]:
        return self.store.list()

    def get(self, entry_id: str) -> HistoryEntry | None:
        for entry in self.store.list():
            if entry.id == entry_id:
                return entry
        return None

    def delete(self, entry_id: str) -> None:
        self.store.remove(entry_id)

    def rename(self, entry_id: str, name: str | None) -> None:
        """Set a custom name; a blank name clears it."""
        cleaned = (name or "").strip()
        self.store.update(entry_id, HistoryUpdate(name=cleaned or None))

    def display_label(self, entry: HistoryEntry) -> str:
        return display_label(entry, max_length=self.config.label_length)


def display_label(entry: HistoryEntry, *, max_length: int = 40) -> str:
    """Custom name if set, else the original text, truncated with an ellipsis."""
    text = (entry.name or entry.original_text).strip()
    if len(text) <= max_length:
        return text
    return text[:max_length] + "…"

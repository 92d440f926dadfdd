"""Furigana annotation service package."""

from .config import AnnotatorConfig, HistoryConfig
from .history.backends import InMemoryKeyValueBackend, SqliteKeyValueBackend
from .history.store import SerializedHistoryStore
from .history.workspace import AnnotationWorkspace
from .sanitizer import sanitize

__all__ = [
    "AnnotationWorkspace",
    "AnnotatorConfig",
    "HistoryConfig",
    "InMemoryKeyValueBackend",
    "SerializedHistoryStore",
    "SqliteKeyValueBackend",
    "sanitize",
]

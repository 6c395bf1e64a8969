"""
Clipboard history capture engine.

This package watches the system clipboard, classifies each new payload into
one content kind, deduplicates it against recent history and keeps a bounded,
persisted, newest-first history with favorites and provenance labels.

The ClipboardEngine is the entry point; settings are Pydantic models loaded
from environment variables, a `.env` file and YAML files in the app root.
"""

__version__ = "0.1.0"

from .clipboard import (
    ClipboardAccessor,
    MemoryClipboard,
    Representation,
    SystemClipboard,
)
from .config import ClipboardSettings, LoggingSettings, get_settings
from .engine import ClipboardEngine
from .exceptions import ClipboardReadError, ClipstackError, RecordDecodeError
from .models import HistoryEntry, Provenance, ProvenanceKind
from .persistence import HistoryRepository

__all__ = [
    "__version__",
    "ClipboardAccessor",
    "MemoryClipboard",
    "Representation",
    "SystemClipboard",
    "ClipboardSettings",
    "LoggingSettings",
    "get_settings",
    "ClipboardEngine",
    "ClipboardReadError",
    "ClipstackError",
    "RecordDecodeError",
    "HistoryEntry",
    "Provenance",
    "ProvenanceKind",
    "HistoryRepository",
]

# region Docstring
"""
clipstack.engine
Composition root of the clipboard history engine.
Overview:
- Wires the accessor, history store, repository, provenance detector, signal and
    monitor together, and exposes the public API consumed by front ends.
Contents:
- Classes:
    - ClipboardEngine:
        start() / stop() for the capture lifecycle, history() for read-only snapshots,
        delete(id) / toggle_favorite(id) / clear() for user edits, load() for the
        persisted state and tick() for a single synchronous capture.
Design Notes:
- There are no module-level singletons; every collaborator is owned by the engine
    instance, so several engines can coexist (for example in tests).
- Every mutation is persisted immediately, and stop() flushes the store once more.
- start() must be called on a thread with a running asyncio loop, or given a loop.
"""
# endregion
# region Imports
import asyncio
import logging
from typing import Optional

from clipstack.clipboard import ClipboardAccessor
from clipstack.config import ClipboardSettings
from clipstack.constants import SIGNAL_NEW_CONTENT
from clipstack.events import Signal
from clipstack.models import HistoryEntry
from clipstack.monitor import ClipboardMonitor
from clipstack.persistence import HistoryRepository
from clipstack.provenance import ProvenanceDetector
from clipstack.store import HistoryStore

# endregion


class ClipboardEngine:
    """
    Clipboard capture and history engine.

    Attributes:
        settings (ClipboardSettings): Engine settings, read live by the monitor.
        accessor (ClipboardAccessor): Clipboard being watched.
        repository (HistoryRepository): Persistent storage of the history.
        store (HistoryStore): The in-memory history.
        new_content (Signal): Fired after a capture when auto-activate is on.
        monitor (ClipboardMonitor): The capture loop.
    """

    def __init__(
        self,
        settings: ClipboardSettings,
        accessor: ClipboardAccessor,
        repository: Optional[HistoryRepository] = None,
        detector: Optional[ProvenanceDetector] = None,
        logger: Optional[logging.Logger] = None,
    ):
        parent = logger or logging.getLogger("clipstack")
        self.logger = parent.getChild(self.__class__.__name__)
        self.settings = settings
        self.accessor = accessor
        self.repository = repository or HistoryRepository.from_settings(
            settings, logger=parent
        )
        self.store = HistoryStore(settings)
        self.new_content = Signal(SIGNAL_NEW_CONTENT, logger=parent)
        self.monitor = ClipboardMonitor(
            accessor,
            self.store,
            self.repository,
            settings,
            self.new_content,
            detector=detector,
            logger=parent,
        )
        self._loaded = False

    @property
    def is_running(self) -> bool:
        return self.monitor.is_running

    # region Lifecycle
    def load(self) -> tuple[HistoryEntry, ...]:
        """
        Replace the in-memory history with the persisted one.

        Returns:
            tuple[HistoryEntry, ...]: The loaded history, newest first.
        """
        self.store.replace(self.repository.load())
        self._loaded = True
        self.logger.info(f"Loaded {len(self.store)} history entries")
        return self.store.snapshot()

    def start(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """
        Load persisted history (once) and start monitoring the clipboard.

        Arguments:
            loop (Optional[asyncio.AbstractEventLoop]): Loop to poll on. Defaults to the
                running loop.
        """
        if not self._loaded:
            self.load()
        self.monitor.start(loop)

    def stop(self) -> None:
        """Stop monitoring and flush the history to storage."""
        self.monitor.stop()
        if self._loaded:
            self._persist()

    def tick(self) -> Optional[HistoryEntry]:
        """Run one capture attempt immediately."""
        return self.monitor.tick()

    # endregion
    # region History API
    def history(self) -> tuple[HistoryEntry, ...]:
        """Read-only snapshot of the history, newest first."""
        return self.store.snapshot()

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        return self.store.get(entry_id)

    def delete(self, entry_id: str) -> bool:
        """Delete an entry and persist. Unknown ids are a no-op."""
        removed = self.store.delete(entry_id)
        if removed:
            self._persist()
        return removed

    def toggle_favorite(self, entry_id: str) -> bool:
        """Flip an entry's favorite flag and persist. Unknown ids are a no-op."""
        toggled = self.store.toggle_favorite(entry_id)
        if toggled:
            self._persist()
        return toggled

    def clear(self) -> None:
        """Remove every entry and persist the empty history."""
        self.store.clear()
        self._persist()

    def _persist(self) -> None:
        self.repository.save(list(self.store.snapshot()))

    # endregion


__all__ = ["ClipboardEngine"]

# region Docstring
"""
clipstack.monitor
Polling capture loop that turns clipboard changes into history entries.
Overview:
- Polls the clipboard change counter on an asyncio event loop and, on a change, runs
    the capture pipeline once: read, classify, dedup, attribute, insert, persist, notify.
Contents:
- Classes:
    - ClipboardMonitor:
        tick() runs one capture attempt synchronously and returns the new entry or None.
        start(loop) / stop() schedule and cancel the recurring tick.
Design Notes:
- Ticks run on the loop thread via `loop.call_later`, so they never overlap each other
    or other callbacks issued on the same loop.
- The counter seen at construction, and again at start(), is the baseline: whatever is
    already on the clipboard when monitoring starts is not captured.
- A tick never raises. Read failures are logged at debug level and retried on the next
    tick; anything else is logged as an error. Either way the monitor keeps running.
- A failed save does not undo a capture. The entry stays in the history, is returned and
    announced, and is written by the next successful save.
- `auto_activate_on_capture` and the history bound are read from the settings at tick
    time, so changing them applies from the next capture on.
"""
# endregion
# region Imports
import asyncio
import logging
import sqlite3
from datetime import datetime
from typing import Callable, Optional

from clipstack.classifier import classify
from clipstack.clipboard import ClipboardAccessor
from clipstack.config import ClipboardSettings
from clipstack.constants import DEDUP_WINDOW
from clipstack.dedup import is_duplicate
from clipstack.events import Signal
from clipstack.exceptions import ClipboardReadError
from clipstack.models import HistoryEntry, compute_content_hash
from clipstack.persistence import HistoryRepository
from clipstack.provenance import (
    HeuristicProvenanceDetector,
    ProvenanceDetector,
    TimingContext,
)
from clipstack.store import HistoryStore
from clipstack.utils import get_time

# endregion


class ClipboardMonitor:
    """
    Capture loop over a clipboard accessor.

    Attributes:
        accessor (ClipboardAccessor): Clipboard to watch.
        store (HistoryStore): Receives captured entries.
        repository (HistoryRepository): Persists the store after each capture.
        settings (ClipboardSettings): Poll interval, auto-activate flag and history bound.
        signal (Signal): Emitted after a capture when auto-activate is on.
        detector (ProvenanceDetector): Attributes an origin to each capture.
    """

    def __init__(
        self,
        accessor: ClipboardAccessor,
        store: HistoryStore,
        repository: HistoryRepository,
        settings: ClipboardSettings,
        signal: Signal,
        detector: Optional[ProvenanceDetector] = None,
        clock: Callable[[], datetime] = get_time,
        logger: Optional[logging.Logger] = None,
    ):
        self.accessor = accessor
        self.store = store
        self.repository = repository
        self.settings = settings
        self.signal = signal
        self.detector = detector or HeuristicProvenanceDetector()
        self.clock = clock
        self.logger = (logger or logging.getLogger("clipstack")).getChild(
            self.__class__.__name__
        )
        self.last_capture_at: Optional[datetime] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._last_counter: Optional[int] = None
        self.reset_baseline()

    # region Capture
    def reset_baseline(self) -> None:
        """Treat the current clipboard contents as already seen."""
        try:
            self._last_counter = self.accessor.change_counter()
        except ClipboardReadError as e:
            self.logger.debug(f"Could not read baseline change counter: {e}")
            self._last_counter = None

    def tick(self) -> Optional[HistoryEntry]:
        """
        Run one capture attempt.

        Returns:
            Optional[HistoryEntry]: The captured entry, or None if nothing was captured.
        """
        try:
            return self._capture()
        except ClipboardReadError as e:
            self.logger.debug(f"Clipboard read failed, retrying next tick: {e}")
        except Exception as e:
            self.logger.error(f"Capture failed: {e}", exc_info=True)
        return None

    def _capture(self) -> Optional[HistoryEntry]:
        counter = self.accessor.change_counter()
        if counter == self._last_counter:
            return None
        self._last_counter = counter

        representations = self.accessor.read_representations()
        if not representations:
            return None

        classification = classify(representations)
        if classification is None:
            self.logger.debug("Clipboard payload is not a supported type")
            return None

        content = classification.content
        content_hash = compute_content_hash(content)
        if is_duplicate(
            content.type, content_hash, self.store.recent(DEDUP_WINDOW), DEDUP_WINDOW
        ):
            self.logger.debug(f"Skipping duplicate {content.type} capture")
            return None

        now = self.clock()
        provenance = self.detector.detect(
            representations,
            TimingContext(now=now, last_capture_at=self.last_capture_at),
        )
        entry = HistoryEntry(
            content=content,
            content_type=classification.content_type,
            captured_at=now,
            provenance=provenance,
            content_hash=content_hash,
        )
        self.store.insert(entry)
        self.last_capture_at = now
        try:
            self.repository.save(list(self.store.snapshot()))
        except (OSError, sqlite3.Error) as e:
            self.logger.error(
                f"Could not persist history after capturing {entry.id}: {e}",
                exc_info=True,
            )
        self.logger.info(f"Captured {entry.tag} entry {entry.id} ({provenance})")

        if self.settings.auto_activate_on_capture:
            self.signal.emit()
        return entry

    # endregion
    # region Scheduling
    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def start(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """
        Begin polling on the given loop, or on the running loop.

        Raises:
            RuntimeError: If no loop is given and none is running.
        """
        if self.is_running:
            self.logger.warning("Monitor already running")
            return
        self._loop = loop or asyncio.get_running_loop()
        self.reset_baseline()
        self._schedule()
        self.logger.info(
            f"Monitoring clipboard every {self.settings.poll_interval_ms} ms"
        )

    def stop(self) -> None:
        """Cancel future ticks. A tick in progress finishes."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        self.logger.info("Monitoring stopped")

    def _schedule(self) -> None:
        self._handle = self._loop.call_later(self.settings.poll_interval, self._on_timer)

    def _on_timer(self) -> None:
        self.tick()
        if self._handle is not None:
            self._schedule()

    # endregion


__all__ = ["ClipboardMonitor"]

# region Docstring
"""
clipstack.store
In-memory, bounded, newest-first clipboard history.
Overview:
- Owns the ordered sequence of history entries and every mutation of it.
- Enforces the size bound on insert by evicting from the tail (oldest) only.
Contents:
- Classes:
    - HistoryStore:
        insert(entry), delete(id), toggle_favorite(id), clear(), snapshot(), plus
        recent(k), get(id) and replace(entries) for loading persisted state.
Design Notes:
- The bound is read from the settings at every insert, so a changed max size applies
    from the next capture on. Lowering it does not trim until something is inserted.
- Entries are frozen; toggle_favorite swaps in a modified copy. snapshot() returns a
    tuple, so callers hold no mutable reference into the store.
- Every operation is total: unknown ids are no-ops, reported through the bool return.
"""
# endregion
# region Imports
from collections import deque
from itertools import islice
from typing import Iterable, Iterator, Optional

from clipstack.config import ClipboardSettings
from clipstack.models import HistoryEntry

# endregion


class HistoryStore:
    """
    Bounded, newest-first sequence of history entries.
    """

    def __init__(
        self,
        settings: ClipboardSettings,
        entries: Optional[Iterable[HistoryEntry]] = None,
    ):
        """
        Args:
            settings (ClipboardSettings): Source of the effective max size.
            entries (Optional[Iterable[HistoryEntry]]): Initial entries, newest first.
        """
        self.settings = settings
        self._entries: deque[HistoryEntry] = deque(entries or ())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))

    @property
    def max_size(self) -> int:
        return self.settings.effective_max_size

    def insert(self, entry: HistoryEntry) -> None:
        """Prepend an entry, then evict from the tail while over the bound."""
        self._entries.appendleft(entry)
        max_size = self.max_size
        while len(self._entries) > max_size:
            self._entries.pop()

    def delete(self, entry_id: str) -> bool:
        """Remove the entry with the given id. Returns False if it was absent."""
        for entry in self._entries:
            if entry.id == entry_id:
                self._entries.remove(entry)
                return True
        return False

    def toggle_favorite(self, entry_id: str) -> bool:
        """Flip the favorite flag of an entry. Returns False if it was absent."""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                self._entries[index] = entry.model_copy(
                    update={"is_favorite": not entry.is_favorite}
                )
                return True
        return False

    def clear(self) -> None:
        self._entries.clear()

    def replace(self, entries: Iterable[HistoryEntry]) -> None:
        """Swap the whole history, e.g. with freshly loaded persisted state."""
        self._entries = deque(entries)

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def recent(self, k: int) -> tuple[HistoryEntry, ...]:
        """The newest `k` entries, newest first."""
        return tuple(islice(self._entries, k))

    def snapshot(self) -> tuple[HistoryEntry, ...]:
        """Read-only view of the whole history, newest first."""
        return tuple(self._entries)


__all__ = ["HistoryStore"]

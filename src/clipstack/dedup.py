"""
clipstack.dedup
Duplicate detection against the most recent history entries.

Only the newest DEDUP_WINDOW (8) entries are compared, so a payload
identical to the ninth most recent entry is captured again.
"""

from typing import Iterable

from clipstack.constants import DEDUP_WINDOW
from clipstack.models import ContentTag, HistoryEntry


def is_duplicate(
    tag: ContentTag,
    content_hash: str,
    recent: Iterable[HistoryEntry],
    window: int = DEDUP_WINDOW,
) -> bool:
    """
    Check a candidate against the newest entries.

    Args:
        tag (ContentTag): Variant tag of the candidate.
        content_hash (str): Content hash of the candidate.
        recent (Iterable[HistoryEntry]): History, newest first. Only the first
            `window` entries are inspected.
        window (int): Size of the dedup window.

    Returns:
        bool: True if an entry in the window has the same tag and hash.
    """
    for index, entry in enumerate(recent):
        if index >= window:
            break
        if entry.tag == tag and entry.content_hash == content_hash:
            return True
    return False


__all__ = ["is_duplicate"]

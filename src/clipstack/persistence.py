# region Docstring
"""
clipstack.persistence
Durable storage of the clipboard history record in SQLite.
Overview:
- Stores the encoded history as a named, versioned record in a sqlite-utils key/value
    table, and keeps previous copies of the record as backups.
- Loading goes through the codec, so a corrupt record loads as an empty history.
Contents:
- Classes:
    - HistoryRepository:
        load() / save(entries) for the engine, verify() for integrity checks, and
        backups() / restore_latest_backup() / prune_backups() for recovery.
Tables:
- records: key (pk), version, payload (JSON text), updated_at (ISO 8601).
- backups: key, created_at (ISO 8601), payload.
Design Notes:
- Every save copies the record it replaces into `backups`, then drops backups older
    than the retention period. A retention of 0 disables backups.
- load() never falls back to a backup. Restoring is an explicit operation, so a corrupt
    record still starts the engine with an empty history.
"""
# endregion
# region Imports
import logging
from datetime import timedelta
from logging import Logger
from pathlib import Path
from typing import Optional, Union

from sqlite_utils import Database

from clipstack.codec import decode_history, decode_history_strict, encode_history
from clipstack.config import ClipboardSettings
from clipstack.constants import (
    BACKUPS_TABLE,
    RECORD_VERSION,
    RECORDS_TABLE,
    STORAGE_KEY,
)
from clipstack.exceptions import RecordDecodeError
from clipstack.models import HistoryEntry
from clipstack.utils import get_time

# endregion


class HistoryRepository:
    """
    Persist the clipboard history in a SQLite database.

    Attributes:
        db (sqlite_utils.Database): The database instance.
        key (str): Name of the history record.
        backup_retention_days (int): Days to keep backups; 0 disables them.
    """

    def __init__(
        self,
        db: Union[Database, Path, str],
        key: str = STORAGE_KEY,
        backup_retention_days: int = 7,
        logger: Optional[Logger] = None,
    ) -> None:
        """
        Initialize the repository.

        Arguments:
            db (Union[Database, Path, str]): Database instance or path to the database file.
            key (str): Name of the history record.
            backup_retention_days (int): Days to keep backups.
            logger (Optional[Logger]): The parent logger instance.
        """
        self.db = db if isinstance(db, Database) else Database(db)
        self.logger = (logger or logging.getLogger("clipstack")).getChild(
            self.__class__.__name__
        )
        self.key = key
        self.backup_retention_days = backup_retention_days

    @classmethod
    def from_settings(
        cls, settings: ClipboardSettings, logger: Optional[Logger] = None
    ) -> "HistoryRepository":
        """Open the database configured in the settings, creating its directory."""
        settings.database_path.parent.mkdir(parents=True, exist_ok=True)
        return cls(
            Database(settings.database_path),
            key=settings.storage_key,
            backup_retention_days=settings.backup_retention_days,
            logger=logger,
        )

    # region Raw record access
    def read_payload(self) -> Optional[str]:
        """
        Read the stored record.

        Returns:
            Optional[str]: The JSON document, or None if nothing was saved yet.
        """
        table = self.db[RECORDS_TABLE]
        if not table.exists():
            return None
        rows = list(table.rows_where("key = ?", [self.key]))
        if not rows:
            return None
        return rows[0]["payload"]

    def write_payload(self, payload: str) -> None:
        """Replace the stored record, backing up the previous one."""
        previous = self.read_payload()
        now = get_time()
        if (
            previous is not None
            and previous != payload
            and self.backup_retention_days > 0
        ):
            self.db[BACKUPS_TABLE].insert(
                {"key": self.key, "created_at": now.isoformat(), "payload": previous}
            )
        self.db[RECORDS_TABLE].upsert(
            {
                "key": self.key,
                "version": RECORD_VERSION,
                "payload": payload,
                "updated_at": now.isoformat(),
            },
            pk="key",
        )
        self.prune_backups()

    # endregion
    # region History access
    def load(self) -> list[HistoryEntry]:
        """
        Load the persisted history, newest first.

        Returns:
            list[HistoryEntry]: The entries, or [] if none are stored or the record is corrupt.
        """
        entries = decode_history(self.read_payload())
        self.logger.debug(f"Loaded {len(entries)} history entries")
        return entries

    def save(self, entries: list[HistoryEntry]) -> None:
        """Persist the full history."""
        self.write_payload(encode_history(entries))
        self.logger.debug(f"Saved {len(entries)} history entries")

    def verify(self) -> bool:
        """
        Check the integrity of the stored record.

        Returns:
            bool: True if the record decodes (or nothing is stored), False otherwise.
        """
        payload = self.read_payload()
        if payload is None:
            return True
        try:
            decode_history_strict(payload)
        except (RecordDecodeError, ValueError, TypeError, RecursionError) as e:
            self.logger.warning(f"Integrity check failed for '{self.key}': {e}")
            return False
        return True

    # endregion
    # region Backups
    def backups(self) -> list[dict]:
        """
        List the backups of the record, newest first.

        Returns:
            list[dict]: Rows with `created_at` and `payload`.
        """
        table = self.db[BACKUPS_TABLE]
        if not table.exists():
            return []
        return list(
            table.rows_where(
                "key = ?", [self.key], order_by="created_at desc, rowid desc"
            )
        )

    def restore_latest_backup(self) -> Optional[list[HistoryEntry]]:
        """
        Restore the newest backup that decodes cleanly.

        Returns:
            Optional[list[HistoryEntry]]: The restored entries, or None if no usable backup exists.
        """
        for row in self.backups():
            try:
                entries = decode_history_strict(row["payload"])
            except (RecordDecodeError, ValueError, TypeError, RecursionError) as e:
                self.logger.warning(
                    f"Skipping unreadable backup from {row['created_at']}: {e}"
                )
                continue
            self.write_payload(row["payload"])
            self.logger.info(
                f"Restored {len(entries)} entries from backup taken {row['created_at']}"
            )
            return entries
        return None

    def prune_backups(self) -> int:
        """
        Delete backups older than the retention period.

        Returns:
            int: Number of backups deleted.
        """
        table = self.db[BACKUPS_TABLE]
        if not table.exists():
            return 0
        cutoff = (get_time() - timedelta(days=self.backup_retention_days)).isoformat()
        stale = table.count_where("key = ? and created_at < ?", [self.key, cutoff])
        if stale:
            table.delete_where("key = ? and created_at < ?", [self.key, cutoff])
            self.logger.debug(f"Pruned {stale} old backups")
        return stale

    # endregion


__all__ = ["HistoryRepository"]

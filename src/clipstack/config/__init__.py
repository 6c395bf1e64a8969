"""
clipstack.config
Configuration and settings management for the clipboard history engine.
Overview:
- Provides Pydantic-based settings classes for the capture engine and its logging.
- Each settings class inherits from FactoryBaseSettings and supports environment variable
    overrides via Field aliases, `.env` files and YAML files in the application root.
Contents:
- Imports:
    - FactoryBaseSettings: Base settings class with YAML support.
    - get_settings: Factory function for retrieving cached settings instances (exported).
    - reload_settings, config_files: Cache reset and the YAML files consulted (exported).
- Settings Classes:
    - ClipboardSettings:
        The settings source consumed by the engine: max history size (with the unlimited
        sentinel), auto-activate flag, poll interval, thumbnail dimensions, database path,
        record name and backup retention.
    - LoggingSettings:
        Log level, log directory and number of archived log files to keep.
Design Notes:
- All settings classes use Pydantic Field with aliases to support environment variable
    configuration (e.g., CLIPSTACK_MAX_HISTORY_SIZE, CLIPSTACK_POLL_INTERVAL_MS).
- Defaults: 100 items, auto-activate on, 300 ms polling.
- Settings instances are mutable: the monitor reads `auto_activate_on_capture` and
    `effective_max_size` at capture time, so changes apply from the next capture on.
"""

from pathlib import Path

from pydantic import Field

from clipstack.config.base import APP_ROOT
from clipstack.config.factory import FactoryBaseSettings
from clipstack.config.factory import (  # noqa: F401  These are used externally
    config_files,
    get_settings,
    reload_settings,
)
from clipstack.constants import STORAGE_KEY, UNLIMITED_HISTORY_CEILING


class ClipboardSettings(FactoryBaseSettings):
    """
    Configuration for the clipboard capture engine.
    """

    max_history_size: int = Field(
        default=100,
        alias="CLIPSTACK_MAX_HISTORY_SIZE",
        description="Maximum number of history entries. -1 (or any value <= 0) means unlimited.",
    )
    auto_activate_on_capture: bool = Field(
        default=True,
        alias="CLIPSTACK_AUTO_ACTIVATE",
        description="Fire the new-content signal after every successful capture.",
    )
    poll_interval_ms: int = Field(
        default=300,
        ge=10,
        alias="CLIPSTACK_POLL_INTERVAL_MS",
        description="Interval for polling the clipboard. (Milliseconds) [Default: 300]",
    )
    thumbnail_dim: tuple[int, int] = Field(
        default=(200, 200),
        alias="CLIPSTACK_THUMBNAIL_SIZE",
        description="Size of the thumbnails to generate. (Width,Height) [Default: (200,200)]",
    )
    database_path: Path = Field(
        default=APP_ROOT / "clipstack.db",
        alias="CLIPSTACK_DB_PATH",
        description="Path to the SQLite database holding the persisted history.",
    )
    storage_key: str = Field(
        default=STORAGE_KEY,
        alias="CLIPSTACK_STORAGE_KEY",
        description="Name of the persisted history record.",
    )
    backup_retention_days: int = Field(
        default=7,
        ge=0,
        alias="CLIPSTACK_BACKUP_RETENTION_DAYS",
        description="Days to keep previous copies of the history record.",
    )

    @property
    def effective_max_size(self) -> int:
        """The cap the history store enforces, resolving the unlimited sentinel."""
        if self.max_history_size <= 0:
            return UNLIMITED_HISTORY_CEILING
        return self.max_history_size

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0

    def reset_to_defaults(self) -> None:
        """Restore every field to its declared default."""
        for name, field in type(self).model_fields.items():
            setattr(self, name, field.get_default(call_default_factory=True))


class LoggingSettings(FactoryBaseSettings):
    """
    Logging configuration settings.
    """

    log_level: str = Field(
        default="info",
        alias="CLIPSTACK_LOG_LEVEL",
        description="Log level for clipstack.",
    )
    log_dir: Path = Field(
        default=APP_ROOT / "logs",
        alias="CLIPSTACK_LOG_DIR",
        description="Directory for JSON log files.",
    )
    archive_days: int = Field(
        default=10,
        ge=1,
        alias="CLIPSTACK_LOG_ARCHIVE_DAYS",
        description="Number of archived log files to keep.",
    )


__all__ = [
    "ClipboardSettings",
    "LoggingSettings",
    "FactoryBaseSettings",
    "config_files",
    "get_settings",
    "reload_settings",
]

"""
clipstack.logger
Logging setup for the clipstack CLI and embedding applications.

configure_logging() installs a JSON-lines file handler and a plain console handler on
the "clipstack" logger, archives the previous log file once a day and keeps the newest
`archive_days` archives. Library modules never call it; they only log through
`logging.getLogger("clipstack")` children.
"""

import logging
from datetime import datetime, timezone
from logging import Logger as T_Logger
from logging.config import dictConfig
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter  # type: ignore # noqa F401

from clipstack.config import LoggingSettings
from clipstack.utils import get_time

LOGGER_NAME = "clipstack"
LOG_FILE_NAME = "clipstack.jsonl"
ARCHIVE_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def _logging_config(log_file_path: Path, log_level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_file_path),
                "formatter": "json",
                "level": log_level,
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": log_level,
            },
        },
        "loggers": {
            LOGGER_NAME: {
                "handlers": ["file", "console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }


def _archives(log_file_path: Path) -> list[Path]:
    return sorted(
        log_file_path.parent.glob(f"{log_file_path.stem}_*.jsonl"),
        key=lambda f: f.stat().st_mtime,
        reverse=True,
    )


def _archive_daily_log_file(log_file_path: Path, system_logger: T_Logger) -> None:
    """Archive the log file daily by renaming it with a timestamp."""
    system_logger.debug("Checking for log file to archive...")
    current_time = get_time()
    archive_files = _archives(log_file_path)
    if archive_files:
        latest_archive = archive_files[0]
        timestamp_str = latest_archive.stem.replace(f"{log_file_path.stem}_", "")
        try:
            timestamp = datetime.strptime(
                timestamp_str, ARCHIVE_TIMESTAMP_FORMAT
            ).replace(tzinfo=timezone.utc)
        except ValueError:
            system_logger.warning(
                f"Could not parse timestamp from archive file {latest_archive}, skipping archiving."
            )
            return
        if (current_time - timestamp).total_seconds() < 24 * 3600:
            system_logger.debug(
                f"Latest archive {latest_archive} is less than 24 hours old, skipping archiving."
            )
            return

    if log_file_path.exists() and log_file_path.stat().st_size > 0:
        timestamp = current_time.strftime(ARCHIVE_TIMESTAMP_FORMAT)
        archive_path = log_file_path.with_name(f"{log_file_path.stem}_{timestamp}.jsonl")
        system_logger.debug(f"Archiving log file {log_file_path} to {archive_path}")
        log_file_path.rename(archive_path)


def _manage_logfile_archives(
    log_file_path: Path, system_logger: T_Logger, days_to_keep: int = 10
) -> None:
    """Keep only the most recent log archives."""
    archive_files = _archives(log_file_path)
    if len(archive_files) <= days_to_keep:
        return
    for archive_file in archive_files[days_to_keep:]:
        system_logger.debug(f"Deleting old archive file: {archive_file}")
        archive_file.unlink()


def configure_logging(settings: LoggingSettings) -> T_Logger:
    """
    Configure the "clipstack" logger from the logging settings.

    Arguments:
        settings (LoggingSettings): Level, log directory and archive count.

    Returns:
        Logger: The configured "clipstack" logger.
    """
    log_file_path = settings.log_dir / LOG_FILE_NAME
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    # archive before the file handler reopens the log
    bootstrap = logging.getLogger(LOGGER_NAME).getChild("SYSTEM")
    _archive_daily_log_file(log_file_path, bootstrap)

    dictConfig(_logging_config(log_file_path, settings.log_level.upper()))
    logger = logging.getLogger(LOGGER_NAME)
    system_logger = logger.getChild("SYSTEM")
    _manage_logfile_archives(log_file_path, system_logger, settings.archive_days)
    system_logger.debug("Logger for clipstack initialized.")
    return logger


__all__ = ["configure_logging", "LOGGER_NAME", "LOG_FILE_NAME"]

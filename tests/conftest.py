import logging
import os
import tempfile
from io import BytesIO

# Point the app root at a scratch directory before clipstack computes APP_ROOT.
os.environ["CLIPSTACK_HOME"] = tempfile.mkdtemp(prefix="clipstack-tests-")
os.environ["CLIPSTACK_ENV"] = "test"

import pytest  # noqa: E402
from PIL import Image  # noqa: E402

from clipstack.clipboard import MemoryClipboard  # noqa: E402
from clipstack.config import ClipboardSettings, LoggingSettings, get_settings  # noqa: E402
from clipstack.engine import ClipboardEngine  # noqa: E402
from clipstack.persistence import HistoryRepository  # noqa: E402

SETTINGS_ENV_VARS = [
    "CLIPSTACK_MAX_HISTORY_SIZE",
    "CLIPSTACK_AUTO_ACTIVATE",
    "CLIPSTACK_POLL_INTERVAL_MS",
    "CLIPSTACK_THUMBNAIL_SIZE",
    "CLIPSTACK_DB_PATH",
    "CLIPSTACK_STORAGE_KEY",
    "CLIPSTACK_BACKUP_RETENTION_DAYS",
    "CLIPSTACK_LOG_LEVEL",
    "CLIPSTACK_LOG_DIR",
    "CLIPSTACK_LOG_ARCHIVE_DAYS",
]


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Remove settings overrides from the environment and reset the settings cache."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_clipstack_logger():
    """Undo configure_logging so log records propagate to caplog again."""
    yield
    logger = logging.getLogger("clipstack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "clipstack.db"


@pytest.fixture
def settings(db_path) -> ClipboardSettings:
    """Default settings backed by a per-test database."""
    return ClipboardSettings(database_path=db_path)


@pytest.fixture
def logging_settings(tmp_path) -> LoggingSettings:
    return LoggingSettings(log_dir=tmp_path / "logs", log_level="debug")


@pytest.fixture
def repository(db_path) -> HistoryRepository:
    return HistoryRepository(db_path)


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture
def engine(settings, clipboard, repository) -> ClipboardEngine:
    """A loaded engine over an in-memory clipboard."""
    engine = ClipboardEngine(settings, clipboard, repository=repository)
    engine.load()
    return engine


def make_png(size=(64, 32), color=(255, 0, 0), mode="RGB") -> bytes:
    image = Image.new(mode, size, color)
    buffered = BytesIO()
    image.save(buffered, format="PNG")
    return buffered.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()

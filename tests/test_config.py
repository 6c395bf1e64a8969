import pytest
from pydantic import ValidationError

from clipstack.config import (
    ClipboardSettings,
    LoggingSettings,
    config_files,
    get_settings,
    reload_settings,
)
from clipstack.config.base import APP_ENV, APP_ROOT, AppEnv
from clipstack.constants import UNLIMITED_HISTORY_CEILING


@pytest.fixture
def yaml_config():
    """Write an environment-specific YAML config into the app root."""
    path = APP_ROOT / f"config.{APP_ENV}.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("CLIPSTACK_MAX_HISTORY_SIZE: 42\nCLIPSTACK_AUTO_ACTIVATE: false\n")
    yield path
    path.unlink()


def test_defaults():
    settings = ClipboardSettings()
    assert settings.max_history_size == 100
    assert settings.auto_activate_on_capture is True
    assert settings.poll_interval_ms == 300
    assert settings.poll_interval == pytest.approx(0.3)
    assert settings.thumbnail_dim == (200, 200)
    assert settings.storage_key == "clipboardItems"
    assert settings.backup_retention_days == 7
    assert settings.database_path == APP_ROOT / "clipstack.db"


def test_test_environment_and_root_come_from_env():
    assert AppEnv.environment() == "test"
    assert APP_ENV == "test"
    assert APP_ROOT == AppEnv.app_root()


def test_environment_variables_override(monkeypatch):
    monkeypatch.setenv("CLIPSTACK_MAX_HISTORY_SIZE", "5")
    monkeypatch.setenv("CLIPSTACK_AUTO_ACTIVATE", "false")
    monkeypatch.setenv("CLIPSTACK_THUMBNAIL_SIZE", "[100, 50]")
    settings = ClipboardSettings(max_history_size=3)
    assert settings.max_history_size == 5
    assert settings.auto_activate_on_capture is False
    assert settings.thumbnail_dim == (100, 50)


def test_yaml_overrides_init_kwargs(yaml_config):
    settings = ClipboardSettings(max_history_size=3)
    assert settings.max_history_size == 42
    assert settings.auto_activate_on_capture is False


def test_poll_interval_lower_bound(monkeypatch):
    monkeypatch.setenv("CLIPSTACK_POLL_INTERVAL_MS", "5")
    with pytest.raises(ValidationError):
        ClipboardSettings()


@pytest.mark.parametrize(
    "value,expected",
    [(-1, UNLIMITED_HISTORY_CEILING), (0, UNLIMITED_HISTORY_CEILING), (1, 1), (250, 250)],
)
def test_effective_max_size(value, expected):
    assert ClipboardSettings(max_history_size=value).effective_max_size == expected


def test_reset_to_defaults():
    settings = ClipboardSettings(max_history_size=7, poll_interval_ms=50)
    settings.auto_activate_on_capture = False
    settings.reset_to_defaults()
    assert settings.max_history_size == 100
    assert settings.poll_interval_ms == 300
    assert settings.auto_activate_on_capture is True


def test_get_settings_is_cached():
    assert get_settings(ClipboardSettings) is get_settings(ClipboardSettings)
    get_settings.cache_clear()
    assert isinstance(get_settings(LoggingSettings), LoggingSettings)


def test_logging_defaults():
    settings = LoggingSettings()
    assert settings.log_level == "info"
    assert settings.log_dir == APP_ROOT / "logs"
    assert settings.archive_days == 10


def test_comma_separated_tuple_from_env(monkeypatch):
    monkeypatch.setenv("CLIPSTACK_THUMBNAIL_SIZE", "120, 80")
    assert ClipboardSettings().thumbnail_dim == (120, 80)


def test_config_files_are_in_app_root():
    assert config_files() == [APP_ROOT / "config.yaml", APP_ROOT / "config.test.yaml"]


def test_reload_settings_rereads_sources(monkeypatch):
    first = get_settings(ClipboardSettings)
    monkeypatch.setenv("CLIPSTACK_MAX_HISTORY_SIZE", "9")
    assert get_settings(ClipboardSettings) is first
    reloaded = reload_settings(ClipboardSettings)
    assert reloaded is not first
    assert reloaded.max_history_size == 9

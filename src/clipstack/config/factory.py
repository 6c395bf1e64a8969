# region Docstring
"""
clipstack.config.factory
Factory module for creating and managing application settings with multi-source configuration support.
Overview:
- Provides a custom Pydantic BaseSettings subclass that supports hierarchical configuration
    loading from YAML files, environment variables, and .env files.
- Implements a cached factory function for settings instantiation across the application.
Contents:
- Constants:
    - T: TypeVar bound to BaseSettings for generic typing support in the factory function.
- Functions:
    - config_files() -> list[Path]:
        The YAML files consulted, lowest priority first.
- Sources:
    - LenientEnvSettingsSource / LenientDotEnvSettingsSource:
        Environment and .env sources that accept comma separated values for list and
        tuple fields (e.g. CLIPSTACK_THUMBNAIL_SIZE=200,200) in addition to JSON.
- Classes:
    - FactoryBaseSettings:
        Custom BaseSettings subclass adding YAML configuration files to Pydantic's
        standard environment loading.
        Configuration Priority (highest to lowest):
            1. Environment variables
            2. .env file values
            3. YAML files (config.{env}.yaml, then config.yaml)
            4. Init kwargs
            5. Field defaults
- Functions:
    - get_settings(settings_cls: Type[T]) -> T:
        LRU-cached factory function that instantiates and returns settings objects.
    - reload_settings(settings_cls: Type[T]) -> T:
        Drops the cache and reads every source again.
Design notes:
- get_settings is a convenience for the CLI. Library code receives settings instances
    explicitly (see clipstack.engine.ClipboardEngine).
"""
# endregion
# region Imports
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Type, TypeVar

from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .base import APP_ENV, APP_ROOT

# endregion
# region Sources
T = TypeVar("T", bound=BaseSettings)


def config_files() -> list[Path]:
    """YAML configuration files, lowest priority first. Missing files are skipped."""
    return [APP_ROOT / "config.yaml", APP_ROOT / f"config.{APP_ENV}.yaml"]


class _LenientDecodeMixin:
    def decode_complex_value(
        self, field_name: str, field: FieldInfo, value: Any
    ) -> Any:
        """
        Decode list/tuple/dict values from JSON, falling back to comma separated items.
        Anything else is returned raw so field validation reports it.
        """
        if not isinstance(value, str):
            return value
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            if "," in value:
                return [part.strip() for part in value.split(",")]
            return value


class LenientEnvSettingsSource(_LenientDecodeMixin, EnvSettingsSource):
    pass


class LenientDotEnvSettingsSource(_LenientDecodeMixin, DotEnvSettingsSource):
    pass


# endregion
# region FactoryBaseSettings Class


class FactoryBaseSettings(BaseSettings):
    """
    Custom BaseSettings that supports YAML and Env Vars.
    Priority: Env Vars > .env > YAML (Env specific) > YAML (Default) > Init kwargs > Defaults
    """

    model_config = SettingsConfigDict(
        env_file=APP_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=config_files())
        return (
            LenientEnvSettingsSource(settings_cls),  # Environment variables (highest priority)
            LenientDotEnvSettingsSource(settings_cls),  # .env file
            yaml_settings,  # YAML files
            init_settings,  # Init kwargs
        )


# endregion
# region Factory Functions


@lru_cache
def get_settings(settings_cls: Type[T]) -> T:
    """
    Factory function to load any settings class.
    Results are cached so we don't re-read files every time.
    """
    return settings_cls()


def reload_settings(settings_cls: Type[T]) -> T:
    """Discard every cached settings instance and load `settings_cls` again."""
    get_settings.cache_clear()
    return get_settings(settings_cls)


# endregion

__all__ = [
    "FactoryBaseSettings",
    "LenientEnvSettingsSource",
    "LenientDotEnvSettingsSource",
    "config_files",
    "get_settings",
    "reload_settings",
]

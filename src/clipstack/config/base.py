# region Docstring
"""
clipstack.config.base

Environment detection and application directory resolution.

Overview:
- Provides a utility class for detecting the current application environment
    (production, development or test) from environment variables.
- Exposes module-level constants for the application data root and environment,
    which the settings factory uses to locate `.env` and YAML configuration files.

Contents:
- Classes:
    - AppEnv:
        A utility class for environment detection and path resolution. Provides
        class methods to determine the current environment and the application
        data root.

- Module-level Constants:
    - APP_ROOT (Path): The resolved application data root.
    - APP_ENV (Literal["prod", "dev", "test"]): The detected application environment.

Environment Detection Logic:
- Priority 1: The CLIPSTACK_ENV environment variable, when it names a known environment.
- Priority 2: Defaults to development.

Design Notes:
- Detection is performed at import time so every settings class sees the same root.
- The data root is CLIPSTACK_HOME when set, otherwise `~/.clipstack`.
"""
# endregion
# region Imports
import os
from pathlib import Path
from typing import Literal

# endregion
# region AppEnv Class


class AppEnv:
    """
    Application environment detection utility.

    Attributes:
        PROD (Literal["prod"]): Constant representing the production environment.
        DEV (Literal["dev"]): Constant representing the development environment.
        TEST (Literal["test"]): Constant representing the test environment.
    """

    PROD: Literal["prod"] = "prod"
    DEV: Literal["dev"] = "dev"
    TEST: Literal["test"] = "test"

    @classmethod
    def environment(cls) -> Literal["prod", "dev", "test"]:
        """Determine the current application environment."""
        env = os.getenv("CLIPSTACK_ENV")
        if env in {cls.PROD, cls.DEV, cls.TEST}:
            return env
        return cls.DEV

    @classmethod
    def app_root(cls) -> Path:
        """Get the application data root directory."""
        home = os.getenv("CLIPSTACK_HOME")
        if home:
            return Path(home).expanduser().resolve()
        return (Path.home() / ".clipstack").resolve()


# endregion
# region Module-level Constants

APP_ROOT: Path = AppEnv.app_root()
"""[Path] Root directory of the application data."""
APP_ENV: Literal["prod", "dev", "test"] = AppEnv.environment()
"""[Literal] Environment type."""
# endregion


__all__ = [
    "APP_ENV",
    "APP_ROOT",
    "AppEnv",
]

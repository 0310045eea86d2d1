"""Configuration service for managing tododesk configuration.

This module provides the ConfigService class, the single source of truth for
configuration management. It handles:

- Loading and saving config.json
- Config file initialization with sensible defaults
- Dotted-key access used by ``tododesk config get/set``
- Resolving the SQLite database location
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from tododesk.exceptions import ConfigError
from tododesk.models.config_models import AppConfig

APP_NAME = "tododesk"
DEFAULT_DATABASE_FILE = "tasks.db"


class ConfigService:
    """Service for managing application configuration.

    The configuration lives in a JSON file in the user config directory and
    is validated with the AppConfig model on load.
    """

    def __init__(self, config_dir: Path | None = None, data_dir: Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Override for the config directory (tests)
            data_dir: Override for the data directory holding the database
        """
        self.config_dir = Path(config_dir or user_config_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(data_dir or user_data_dir(APP_NAME))

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def database_path(self) -> Path:
        """Configured database file, defaulting to the user data directory."""
        if self.config.database_path:
            return Path(self.config.database_path).expanduser()
        return self.data_dir / DEFAULT_DATABASE_FILE

    def load_config(self) -> AppConfig:
        """Load configuration from storage.

        Raises:
            ConfigError: If the file exists but cannot be read or validated
        """
        if self._config is not None:
            return self._config  # Return cached config if already loaded

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            # Set file permissions
            self.config_path.chmod(0o600)
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Get a configuration value by dotted key, e.g. ``output.format``.

        Raises:
            KeyError: If the key does not exist
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, part)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dotted key and save.

        Raises:
            KeyError: If the key does not exist
            ConfigError: If the value is invalid for the key
        """
        *parents, leaf = key.split(".")
        data = self.config.model_dump()
        target = data
        for part in parents:
            if not isinstance(target.get(part), dict):
                raise KeyError(key)
            target = target[part]
        if leaf not in target or isinstance(target[leaf], dict):
            raise KeyError(key)

        target[leaf] = value
        try:
            self._config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for {key}: {value}") from e
        self.save_config()


@lru_cache
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService."""
    return ConfigService()

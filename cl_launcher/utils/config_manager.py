"""Configuration manager for persistent settings stored as JSON."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .errors import (
    ClError,
    ConfigurationError,
    FileSystemError,
    InvalidConfigError,
    MissingConfigError,
)
from .logging import get_logger, log_call
from .paths import get_commands_file_path, get_config_path, get_logs_dir

logger = get_logger(__name__)


class LogLevel(str, Enum):
    """Log levels accepted in the preferences."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class PreferencesConfig(BaseModel):
    """Pydantic model for user preferences."""

    quiet_mode: bool = False
    log_level: LogLevel = LogLevel.ERROR
    highlight_matches: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value


class PathsConfig(BaseModel):
    """Pydantic model for file locations."""

    command_file: str = Field(default_factory=lambda: str(get_commands_file_path()))
    log_dir: str = Field(default_factory=lambda: str(get_logs_dir()))


class AppConfig(BaseModel):
    """Pydantic model for overall application configuration."""

    version: str = "0.1.0"
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)


class ConfigManager:
    """Manages persistent application configuration.

    One instance is built by the entry point and handed to whatever needs
    it; there is no shared instance.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.path = Path(config_path) if config_path else get_config_path()
        self.config = self._load_or_create_config()
        logger.debug(f"Configuration loaded from {self.path}")

    @property
    def preferences(self) -> PreferencesConfig:
        return self.config.preferences

    @property
    def command_file_path(self) -> Path:
        return Path(self.config.paths.command_file).expanduser()

    @property
    def log_dir_path(self) -> Path:
        return Path(self.config.paths.log_dir).expanduser()

    def _load_or_create_config(self) -> AppConfig:
        """Load configuration from file or create default if not present."""

        from pydantic import ValidationError

        if not self.path.exists():
            logger.info("No config file found, creating default configuration.")
            config = AppConfig()
            self._save_config(config)
            return config

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            config = AppConfig(**data)
            logger.debug("Configuration successfully loaded and validated.")
            return config

        except json.JSONDecodeError as e:
            raise InvalidConfigError(f"Configuration file is not valid JSON: {str(e)}") from e
        except ValidationError as e:
            raise InvalidConfigError(f"Configuration data does not match expected schema: {str(e)}") from e
        except OSError as e:
            raise FileSystemError(f"Cannot read configuration file {self.path}: {e}") from e

    def _save_config(self, config: Optional[AppConfig] = None):
        """Save the current configuration to file."""

        config = config or self.config

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(
                    config.model_dump(mode="json"),
                    f,
                    indent=2,
                    ensure_ascii=False
                )
            logger.debug("Configuration successfully saved.")
        except OSError as e:
            raise FileSystemError(f"Failed to write configuration file: {str(e)}") from e

    def get_config(self, key_path: str, default: Any = None) -> Any:
        """Get a configuration value using a dot-separated key path."""

        obj: Any = self.config
        for key in key_path.split("."):
            if not hasattr(obj, key):
                return default
            obj = getattr(obj, key)

        if isinstance(obj, Enum):
            return obj.value
        return obj

    @log_call
    def set_config(self, key_path: str, value: Any, persist: bool = True):
        """Set a configuration value using dot-separated key path."""

        from pydantic import ValidationError

        keys = key_path.split(".")
        obj: Any = self.config

        for key in keys[:-1]:
            if not hasattr(obj, key):
                raise MissingConfigError(f"Configuration path '{key_path}' is invalid: '{key}' not found")
            obj = getattr(obj, key)

        if not isinstance(obj, BaseModel) or keys[-1] not in type(obj).model_fields:
            raise MissingConfigError(f"Configuration key '{keys[-1]}' does not exist in path '{key_path}'")

        try:
            updated = obj.model_validate({**obj.model_dump(), keys[-1]: value})
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid value for '{key_path}': {value!r}") from e

        setattr(obj, keys[-1], getattr(updated, keys[-1]))

        if persist:
            self._save_config()

        logger.info(f"Config key '{key_path}' updated.")

    @log_call
    def reset_to_defaults(self):
        """Reset configuration to default values."""

        try:
            logger.warning("Resetting configuration to default values.")
            self.config = AppConfig()
            self._save_config()
        except ClError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to reset configuration to defaults: {str(e)}") from e

    def printable(self) -> str:
        """Human readable summary of the configuration."""

        prefs = self.config.preferences
        return (
            f"command-file: {self.command_file_path}\n"
            "preferences:\n"
            f"  quiet-mode: {str(prefs.quiet_mode).lower()}\n"
            f"  log-level: {prefs.log_level.value.lower()}\n"
            f"  highlight-matches: {str(prefs.highlight_matches).lower()}\n"
        )

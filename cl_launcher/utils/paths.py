"""Centralized path definitions for the cl application.

This module provides a single source of truth for all application paths.
The base directory can be moved with the ``CL_CONFIG_DIR`` environment
variable, which is mostly useful for tests and portable setups. Paths are
resolved on every call so that the override is honoured after import.
"""

import os
from pathlib import Path

CONFIG_DIR_ENV = "CL_CONFIG_DIR"

CONFIG_FILE_NAME = "config.json"
COMMANDS_FILE_NAME = "commands.toml"
SHARED_FILE_NAME = "shared.toml"
LOGS_DIR_NAME = "logs"


def get_app_dir() -> Path:
    """Base application directory (``~/.config/cl`` unless overridden)."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "cl"


def get_config_path() -> Path:
    return get_app_dir() / CONFIG_FILE_NAME


def get_commands_file_path() -> Path:
    return get_app_dir() / COMMANDS_FILE_NAME


def get_logs_dir() -> Path:
    return get_app_dir() / LOGS_DIR_NAME

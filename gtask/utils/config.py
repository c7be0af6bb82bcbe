"""
Configuration utilities for the gtask tool.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_FILE_NAME = ".gtask.env"
DEFAULT_DIRECTORY_NAME = "G Task"
DEFAULT_FILE_NAME = "tasks.xml"


def load_env_vars() -> None:
    """
    Load environment variables from .gtask.env files in the following order:
    1. .gtask.env in the current directory
    2. .gtask.env in the user's home directory

    Variables already set in the environment win.
    """
    if os.path.exists(ENV_FILE_NAME):
        load_dotenv(ENV_FILE_NAME)

    home_env = Path.home() / ENV_FILE_NAME
    if home_env.exists():
        load_dotenv(home_env)


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get configuration value from environment variables."""
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value


def get_main_directory(create: bool = True) -> Path:
    """Return the directory holding the task file (GTASK_HOME or ./G Task)."""
    raw = get_config("GTASK_HOME")
    directory = Path(raw).expanduser() if raw else Path.cwd() / DEFAULT_DIRECTORY_NAME
    if create:
        directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_task_file_path(file: Optional[str] = None) -> Path:
    """Resolve the task file: explicit path, then GTASK_FILE, then the main directory."""
    if file:
        return Path(file).expanduser()
    configured = get_config("GTASK_FILE")
    if configured:
        return Path(configured).expanduser()
    return get_main_directory(create=False) / DEFAULT_FILE_NAME


def get_log_level(default: str = "WARNING") -> str:
    return get_config("GTASK_LOG_LEVEL", default)

"""Path utilities for devinfo configuration."""

import os
import sys
from pathlib import Path

from devinfo.constants import APP_DIR_NAME

DATA_DIR_ENV = "DEVINFO_HOME"


def get_data_dir() -> Path:
    """Get the user data directory for config.

    ``DEVINFO_HOME`` takes precedence; otherwise a per-user directory
    following platform conventions.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        data_dir = Path(override)
    elif sys.platform == 'darwin':
        data_dir = Path.home() / 'Library' / 'Application Support' / APP_DIR_NAME
    elif sys.platform == 'win32':
        data_dir = Path.home() / 'AppData' / 'Local' / APP_DIR_NAME
    else:
        data_dir = Path.home() / '.config' / APP_DIR_NAME

    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_config_path() -> Path:
    """Get the main config file path."""
    return get_data_dir() / 'config.json'

"""
Per-user directories for settings and annotation files.
"""
import os
import sys
from pathlib import Path

APP_NAME = "Jellymark"


def get_app_data_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the application data directory for storing user data.

    Args:
        app_name: Name of the application

    Returns:
        Path to the app data directory
    """
    if os.name == 'nt':  # Windows
        base_dir = os.environ.get('APPDATA', os.path.expanduser('~'))
    elif sys.platform == 'darwin':  # macOS
        base_dir = os.path.expanduser('~/Library/Application Support')
    else:  # Linux and others
        base_dir = os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share'))

    app_dir = Path(base_dir) / app_name
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_config_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the configuration directory for storing settings.

    Args:
        app_name: Name of the application

    Returns:
        Path to the config directory
    """
    if os.name == 'nt':
        config_dir = get_app_data_dir(app_name) / "config"
    elif sys.platform == 'darwin':
        config_dir = Path.home() / "Library" / "Preferences" / app_name
    else:
        base_dir = os.environ.get('XDG_CONFIG_HOME')
        config_dir = Path(base_dir) / app_name if base_dir else Path.home() / ".config" / app_name

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_annotations_dir(app_name: str = APP_NAME) -> Path:
    """Directory where exported annotation lists are looked up by default."""
    annotations_dir = get_app_data_dir(app_name) / "annotations"
    annotations_dir.mkdir(parents=True, exist_ok=True)
    return annotations_dir

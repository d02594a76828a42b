"""
Utility functions and helpers.
"""
from .logger import logger, set_level
from .resource_loader import (
    APP_NAME,
    get_app_data_dir,
    get_config_dir,
    get_annotations_dir,
)

__all__ = [
    # Logging
    'logger',
    'set_level',

    # Resource management
    'APP_NAME',
    'get_app_data_dir',
    'get_config_dir',
    'get_annotations_dir',
]

"""
jellymark - keeps highlight, underline and wavy annotation overlays in sync
with a reflowable page rendering.
"""
from .utils.logger import logger

__version__ = "0.3.0"

__all__ = ['logger', '__version__']

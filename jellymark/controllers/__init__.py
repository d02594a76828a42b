"""
Controllers connecting the overlay engine to the surrounding reader.
"""
from .overlay_controller import OverlayController

__all__ = ['OverlayController']

"""
Highlight palettes and viewer styling.
"""
from .models import HighlightPalette, PaletteTone, ReaderTheme, ShadowPreset, ThemeColors
from .theme_manager import ThemeManager

__all__ = [
    'HighlightPalette',
    'PaletteTone',
    'ReaderTheme',
    'ShadowPreset',
    'ThemeColors',
    'ThemeManager',
]

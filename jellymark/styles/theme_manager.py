"""
Highlight palettes, shadow presets and viewer styling.
"""
import logging
from typing import Dict, List

from PyQt5.QtWidgets import QWidget

from .models import HighlightPalette, PaletteTone, ReaderTheme, ShadowPreset, ThemeColors

log = logging.getLogger(__name__)


class ThemeManager:
    """Manages highlight palettes and the viewer chrome theme."""

    DEFAULT_PALETTE = "blue"
    NIGHT_LINE_COLOR = "#FFFFFF"

    PALETTES: Dict[str, HighlightPalette] = {
        "yellow": HighlightPalette(
            key="yellow", name="Classic Yellow",
            base=PaletteTone("#FFD60A", 0.15),
            hover=PaletteTone("#FFCA28", 0.30),
            active=PaletteTone("#FFB300", 0.24),
            accent="#FFB300", accent_light="#FFF3C4",
        ),
        "blue": HighlightPalette(
            key="blue", name="Clear Blue",
            base=PaletteTone("#5AC8FA", 0.16),
            hover=PaletteTone("#40B0FF", 0.30),
            active=PaletteTone("#007AFF", 0.22),
            accent="#007AFF", accent_light="#E3F2FF",
        ),
        "green": HighlightPalette(
            key="green", name="Eye-care Green",
            base=PaletteTone("#34C759", 0.14),
            hover=PaletteTone("#30B350", 0.28),
            active=PaletteTone("#248A3D", 0.22),
            accent="#248A3D", accent_light="#DFF5E3",
        ),
        "lavender": HighlightPalette(
            key="lavender", name="Lavender",
            base=PaletteTone("#BF5AF2", 0.12),
            hover=PaletteTone("#A855F7", 0.26),
            active=PaletteTone("#7C3AED", 0.20),
            accent="#7C3AED", accent_light="#F3E8FF",
        ),
        "rose": HighlightPalette(
            key="rose", name="Rose",
            base=PaletteTone("#FF6B8A", 0.14),
            hover=PaletteTone("#F43F5E", 0.28),
            active=PaletteTone("#E11D48", 0.22),
            accent="#E11D48", accent_light="#FFE4EA",
        ),
    }

    # Keyed by FilterKind.value
    SHADOW_PRESETS: Dict[str, ShadowPreset] = {
        "soft": ShadowPreset(blur_radius=3.6, offset_y=0.8, alpha=20),
        "light": ShadowPreset(blur_radius=2.0, offset_y=0.4, alpha=10),
        "deep": ShadowPreset(blur_radius=5.6, offset_y=1.4, alpha=46),
    }

    DAY_COLORS = ThemeColors(
        bg_primary="#f0f0f0",
        bg_secondary="#ffffff",
        text_primary="#2e2e2e",
        text_muted="#8899AA",
        accent_primary="#4a9eff",
        border_primary="#cccccc",
    )

    NIGHT_COLORS = ThemeColors(
        bg_primary="#1a1a1a",
        bg_secondary="#2e2e2e",
        text_primary="#f0f0f0",
        text_muted="#8899AA",
        accent_primary="#4a9eff",
        border_primary="#555555",
    )

    @classmethod
    def palette_keys(cls) -> List[str]:
        """Keys of all known highlight palettes, in display order."""
        return list(cls.PALETTES.keys())

    @classmethod
    def get_palette(cls, key: str) -> HighlightPalette:
        """
        Look up a highlight palette.

        Args:
            key: Palette key such as "blue"

        Returns:
            The palette, or the default palette when the key is unknown
        """
        palette = cls.PALETTES.get(key)
        if palette is None:
            log.warning("Unknown highlight palette %r, using %r", key, cls.DEFAULT_PALETTE)
            palette = cls.PALETTES[cls.DEFAULT_PALETTE]
        return palette

    @classmethod
    def line_color(cls, theme: ReaderTheme) -> str:
        """Color of underline bars and wavy strokes for a theme."""
        if theme.night_mode:
            return cls.NIGHT_LINE_COLOR
        return cls.get_palette(theme.palette_key).accent

    @classmethod
    def get_shadow(cls, filter_name: str) -> ShadowPreset:
        return cls.SHADOW_PRESETS[filter_name]

    @classmethod
    def get_theme_colors(cls, night_mode: bool) -> ThemeColors:
        return cls.NIGHT_COLORS if night_mode else cls.DAY_COLORS

    @classmethod
    def apply_theme(cls, widget: QWidget, theme: ReaderTheme) -> None:
        """
        Apply the chrome stylesheet for a theme to a widget and its children.

        Args:
            widget: Widget to style
            theme: Reader theme whose color mode selects the colors
        """
        colors = cls.get_theme_colors(theme.night_mode)
        widget.setStyleSheet(cls._generate_stylesheet(colors))

    @classmethod
    def _generate_stylesheet(cls, theme: ThemeColors) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {theme.bg_primary};
                color: {theme.text_primary};
                border: none;
            }}

            QGraphicsView {{
                background-color: {theme.bg_primary};
                border: none;
            }}

            QLabel[objectName="statusLabel"] {{
                color: {theme.text_muted};
            }}

            QMenu {{
                background-color: {theme.bg_secondary};
                border: 1px solid {theme.border_primary};
                border-radius: 4px;
                padding: 4px;
            }}
            QMenu::item {{
                padding: 6px 20px;
                border-radius: 4px;
            }}
            QMenu::item:selected {{
                background-color: {theme.accent_primary};
                color: white;
            }}
        """

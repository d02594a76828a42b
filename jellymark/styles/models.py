from dataclasses import dataclass


@dataclass(frozen=True)
class PaletteTone:
    """A fill color with its opacity (0.0 - 1.0)."""
    fill: str
    opacity: float


@dataclass(frozen=True)
class HighlightPalette:
    """Colors used to paint annotations for one highlight theme."""
    key: str
    name: str

    # Box fills per interaction state
    base: PaletteTone
    hover: PaletteTone
    active: PaletteTone

    # Line colors (underline bar, wavy stroke)
    accent: str
    accent_light: str


@dataclass(frozen=True)
class ShadowPreset:
    """Drop shadow parameters behind a filter kind."""
    blur_radius: float
    offset_y: float
    alpha: int  # 0-255


@dataclass(frozen=True)
class ReaderTheme:
    """
    The theme the overlays are painted against.

    Combines the selected highlight palette with the reader's color mode.
    """
    palette_key: str = "blue"
    night_mode: bool = False


@dataclass
class ThemeColors:
    """Color definitions for the viewer chrome."""
    # Background colors
    bg_primary: str
    bg_secondary: str

    # Text colors
    text_primary: str
    text_muted: str

    # Accent colors
    accent_primary: str

    # Border colors
    border_primary: str

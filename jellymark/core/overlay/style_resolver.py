"""
Resolution of annotation style and interaction state to a concrete paint.
"""
from ...styles.models import ReaderTheme
from ...styles.theme_manager import ThemeManager
from ..annotations.models import StyleKind
from .models import FilterKind, InteractionState, PaintMode, PaintSpec

TRANSPARENT = "transparent"

# Resting highlights keep the classic marker color whatever the palette
HIGHLIGHT_FILL = "#FFD60A"
HIGHLIGHT_OPACITY = 0.15

UNDERLINE_OPACITY = 0.9
WAVE_STROKE_WIDTH = 1.5
WAVE_HOVER_STROKE_WIDTH = 2.0
ROUNDED = 3.0

# Active ranges always use this palette so the action target stands out
ACTIVE_PALETTE = "blue"


class StyleResolver:
    """Maps (style kind, interaction state, theme) to a PaintSpec."""

    @staticmethod
    def resolve(style_kind: StyleKind, state: InteractionState,
                theme: ReaderTheme) -> PaintSpec:
        """
        Resolve the paint for a container.

        Args:
            style_kind: Style of the annotation
            state: Interaction state of the container
            theme: Current reader theme

        Returns:
            The paint to apply; equal inputs give equal specs
        """
        if state == InteractionState.ACTIVE:
            active = ThemeManager.get_palette(ACTIVE_PALETTE).active
            return PaintSpec(
                fill_color=active.fill,
                fill_opacity=active.opacity,
                corner_radius=ROUNDED,
                filter_kind=FilterKind.DEEP,
                mode=PaintMode.FILL,
            )

        palette = ThemeManager.get_palette(theme.palette_key)

        if state == InteractionState.HOVERED:
            if style_kind == StyleKind.WAVY:
                return PaintSpec(
                    fill_color=TRANSPARENT,
                    fill_opacity=0.0,
                    stroke_color=palette.hover.fill,
                    stroke_width=WAVE_HOVER_STROKE_WIDTH,
                    filter_kind=FilterKind.LIGHT,
                    mode=PaintMode.WAVE,
                )
            return PaintSpec(
                fill_color=palette.hover.fill,
                fill_opacity=palette.hover.opacity,
                corner_radius=ROUNDED,
                filter_kind=FilterKind.LIGHT,
                mode=PaintMode.FILL,
            )

        line_color = ThemeManager.line_color(theme)

        if style_kind == StyleKind.UNDERLINE:
            return PaintSpec(
                fill_color=line_color,
                fill_opacity=UNDERLINE_OPACITY,
                mode=PaintMode.BAR,
            )
        if style_kind == StyleKind.WAVY:
            return PaintSpec(
                fill_color=TRANSPARENT,
                fill_opacity=0.0,
                stroke_color=line_color,
                stroke_width=WAVE_STROKE_WIDTH,
                mode=PaintMode.WAVE,
            )
        return PaintSpec(
            fill_color=HIGHLIGHT_FILL,
            fill_opacity=HIGHLIGHT_OPACITY,
            corner_radius=ROUNDED,
            filter_kind=FilterKind.SOFT,
            mode=PaintMode.FILL,
        )

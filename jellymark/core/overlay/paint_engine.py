"""
Applies paint specs to the items of an overlay container.
"""
import logging
from typing import Optional

from PyQt5.QtCore import QRectF, Qt
from PyQt5.QtGui import QBrush, QColor, QPen
from PyQt5.QtWidgets import QGraphicsDropShadowEffect, QGraphicsItem

from ...styles.models import ReaderTheme
from ...styles.theme_manager import ThemeManager
from ..annotations.models import StyleKind
from .items import OverlayBoxItem, OverlayContainer
from .models import FilterKind, InteractionState, PaintMode, PaintSpec
from .style_resolver import StyleResolver
from .wavy import DEFAULT_AMPLITUDE, DEFAULT_STEP, generate_wavy_path

log = logging.getLogger(__name__)


def make_color(name: str, opacity: float = 1.0) -> QColor:
    if name in ("transparent", "none"):
        return QColor(Qt.transparent)
    color = QColor(name)
    if not color.isValid():
        log.warning("Invalid paint color %r", name)
        return QColor(Qt.transparent)
    color.setAlphaF(max(0.0, min(1.0, opacity)))
    return color


class PaintEngine:
    """
    Paints the boxes of one container at a time.

    The engine only touches visual attributes: brush, pen, visible rect,
    corner radius, shadow effect and the wavy stroke items. It never adds or
    removes containers or boxes.
    """

    def __init__(self, wave_step: float = DEFAULT_STEP,
                 wave_amplitude: float = DEFAULT_AMPLITUDE,
                 underline_thickness: float = 2.0):
        self.wave_step = wave_step
        self.wave_amplitude = wave_amplitude
        self.underline_thickness = underline_thickness

    def paint(self, container: OverlayContainer, spec: PaintSpec,
              style_kind: StyleKind) -> bool:
        """
        Apply a paint spec to every box of a container.

        Args:
            container: Container to paint
            spec: Paint to apply
            style_kind: Style the container currently stands for

        Returns:
            False if the container already showed exactly this paint
        """
        if container.paint_spec == spec and container.style_kind == style_kind:
            return False

        if spec.mode == PaintMode.WAVE:
            self._paint_wave(container, spec)
        else:
            container.clear_strokes()
            for item in container.boxes:
                if spec.mode == PaintMode.BAR:
                    self._set_visible_rect(item, self._bar_rect(item))
                else:
                    self._set_visible_rect(item, item.original.to_qrectf())
                self._fill(item, spec)

        container.paint_spec = spec
        container.style_kind = style_kind
        log.debug("Painted %s as %s/%s", container.range_id, style_kind.value, spec.mode.value)
        return True

    def paint_state(self, container: OverlayContainer, style_kind: StyleKind,
                    state: InteractionState, theme: ReaderTheme) -> bool:
        """Resolve the paint for a state, record the state and paint it."""
        container.interaction_state = state
        spec = StyleResolver.resolve(style_kind, state, theme)
        return self.paint(container, spec, style_kind)

    def _bar_rect(self, item: OverlayBoxItem) -> QRectF:
        # Always derived from the original geometry so repaints never compound
        box = item.original
        thickness = min(self.underline_thickness, box.height)
        return QRectF(box.x, box.y + box.height - thickness, box.width, thickness)

    def _paint_wave(self, container: OverlayContainer, spec: PaintSpec) -> None:
        pen = QPen(make_color(spec.stroke_color), spec.stroke_width)
        pen.setCapStyle(Qt.RoundCap)

        live = set()
        for item in container.boxes:
            self._set_visible_rect(item, item.original.to_qrectf())
            self._fill(item, spec, with_filter=False)

            stroke = container.stroke_for(item.index)
            stroke.set_wavy_path(generate_wavy_path(
                item.original,
                step=self.wave_step,
                amplitude=self.wave_amplitude,
                baseline_inset=self.underline_thickness,
            ))
            stroke.setPen(pen)
            self.apply_filter(stroke, spec.filter_kind)
            live.add(item.index)

        for index in list(container.aux_strokes):
            if index not in live:
                container.remove_stroke(index)

    def _set_visible_rect(self, item: OverlayBoxItem, rect: QRectF) -> None:
        if item.rect() != rect:
            item.setRect(rect)

    def _fill(self, item: OverlayBoxItem, spec: PaintSpec, with_filter: bool = True) -> None:
        item.setBrush(QBrush(make_color(spec.fill_color, spec.fill_opacity)))
        item.setPen(QPen(Qt.NoPen))
        item.corner_radius = spec.corner_radius
        self.apply_filter(item, spec.filter_kind if with_filter else FilterKind.NONE)
        item.update()

    def apply_filter(self, item: QGraphicsItem, filter_kind: FilterKind) -> None:
        """Set the drop shadow behind a filter kind on an item."""
        if filter_kind == FilterKind.NONE:
            if item.graphicsEffect() is not None:
                item.setGraphicsEffect(None)
            return

        preset = ThemeManager.get_shadow(filter_kind.value)
        effect: Optional[QGraphicsDropShadowEffect] = item.graphicsEffect()
        if not isinstance(effect, QGraphicsDropShadowEffect):
            effect = QGraphicsDropShadowEffect()
            item.setGraphicsEffect(effect)
        effect.setBlurRadius(preset.blur_radius)
        effect.setOffset(0, preset.offset_y)
        effect.setColor(QColor(0, 0, 0, preset.alpha))

"""
Graphics items that make up the overlay layer.
"""
from typing import Dict, List, Optional

from PyQt5.QtCore import QRectF, Qt
from PyQt5.QtGui import QBrush, QPainterPath, QPen
from PyQt5.QtWidgets import QGraphicsItemGroup, QGraphicsPathItem, QGraphicsRectItem

from ..annotations.models import StyleKind
from ..layout.models import RANGE_ID_ROLE, Box
from .models import InteractionState, PaintSpec
from .wavy import WavyPath


class OverlayBoxItem(QGraphicsRectItem):
    """
    One box of a container.

    ``rect()`` is the visible geometry; ``original`` is the geometry the box
    was created with and stays the hit-test area whatever the paint does.
    """

    def __init__(self, index: int, original: Box, parent=None):
        super().__init__(original.to_qrectf(), parent)
        self.index = index
        self.original = original
        self.corner_radius = 0.0
        self.setPen(QPen(Qt.NoPen))
        self.setCursor(Qt.PointingHandCursor)

    @property
    def visible_box(self) -> Box:
        return Box.from_qrectf(self.rect())

    def boundingRect(self) -> QRectF:
        return super().boundingRect().united(self.original.to_qrectf())

    def shape(self) -> QPainterPath:
        path = QPainterPath()
        path.addRect(self.original.to_qrectf())
        return path

    def paint(self, painter, option, widget=None):
        painter.setPen(self.pen())
        painter.setBrush(self.brush())
        if self.corner_radius > 0:
            painter.drawRoundedRect(self.rect(), self.corner_radius, self.corner_radius)
        else:
            painter.drawRect(self.rect())


class WavyStrokeItem(QGraphicsPathItem):
    """Generated wavy stroke drawn for one box; never a hit-test target."""

    def __init__(self, box_index: int, parent=None):
        super().__init__(parent)
        self.box_index = box_index
        self.wavy_path: Optional[WavyPath] = None
        self.setBrush(QBrush(Qt.NoBrush))
        self.setAcceptedMouseButtons(Qt.NoButton)

    def set_wavy_path(self, wavy_path: WavyPath) -> None:
        self.wavy_path = wavy_path
        self.setPath(wavy_path.to_painter_path())

    def shape(self) -> QPainterPath:
        return QPainterPath()


class OverlayContainer(QGraphicsItemGroup):
    """All boxes of one annotated range, with its paint and interaction state."""

    def __init__(self, range_id: str, style_kind: StyleKind = StyleKind.HIGHLIGHT,
                 epoch: int = 0, parent=None):
        super().__init__(parent)
        self.range_id = range_id
        self.style_kind = style_kind
        self.interaction_state = InteractionState.RESTING
        self.epoch = epoch
        self.paint_spec: Optional[PaintSpec] = None

        self.boxes: List[OverlayBoxItem] = []
        self.aux_strokes: Dict[int, WavyStrokeItem] = {}

        self.setData(RANGE_ID_ROLE, range_id)

    def shape(self) -> QPainterPath:
        # Only the boxes are pointer targets, never the gaps between them
        return QPainterPath()

    def __repr__(self):
        return (f"OverlayContainer({self.range_id!r}, {self.style_kind.value}, "
                f"{self.interaction_state.value}, boxes={len(self.boxes)})")

    def geometry(self) -> List[Box]:
        """Original geometry of all boxes, in order."""
        return [item.original for item in self.boxes]

    def set_boxes(self, boxes: List[Box]) -> None:
        """
        Replace the boxes with fresh items for new layout geometry.

        Strokes are dropped too; the next paint regenerates them.
        """
        self.clear_strokes()
        for item in self.boxes:
            self._discard(item)
        self.boxes = []
        for index, box in enumerate(boxes):
            item = OverlayBoxItem(index, box)
            self.addToGroup(item)
            self.boxes.append(item)
        # Paint must be reapplied to the new items
        self.paint_spec = None

    def stroke_for(self, index: int) -> WavyStrokeItem:
        """Get or create the stroke item of a box."""
        stroke = self.aux_strokes.get(index)
        if stroke is None:
            stroke = WavyStrokeItem(index)
            self.addToGroup(stroke)
            self.aux_strokes[index] = stroke
        return stroke

    def remove_stroke(self, index: int) -> None:
        stroke = self.aux_strokes.pop(index, None)
        if stroke is not None:
            self._discard(stroke)

    def clear_strokes(self) -> None:
        for index in list(self.aux_strokes):
            self.remove_stroke(index)

    def detach(self) -> None:
        """Take the container out of its scene."""
        scene = self.scene()
        if scene is not None:
            scene.removeItem(self)

    def _discard(self, item) -> None:
        self.removeFromGroup(item)
        scene = item.scene()
        if scene is not None:
            scene.removeItem(item)
        else:
            item.setParentItem(None)

import math
from dataclasses import dataclass

from PyQt5.QtCore import QRectF

# QGraphicsItem.data() key under which overlay containers store their range id
RANGE_ID_ROLE = 0


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle occupied by a range in the current layout."""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        for name in ('x', 'y', 'width', 'height'):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"Box.{name} must be finite, got {getattr(self, name)!r}")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Box size must not be negative: {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def scaled(self, factor: float) -> "Box":
        return Box(self.x * factor, self.y * factor,
                   self.width * factor, self.height * factor)

    def to_qrectf(self) -> QRectF:
        return QRectF(self.x, self.y, self.width, self.height)

    @staticmethod
    def from_qrectf(rect: QRectF) -> "Box":
        return Box(rect.x(), rect.y(), rect.width(), rect.height())

    @staticmethod
    def from_points(x0: float, y0: float, x1: float, y1: float) -> "Box":
        """Box spanning two corners given in any order."""
        return Box(min(x0, x1), min(y0, y1), abs(x1 - x0), abs(y1 - y0))

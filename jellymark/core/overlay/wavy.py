"""
Wavy stroke generation.

A wavy stroke is a chain of quadratic curves along the bottom of a box whose
control points alternate above and below the baseline.
"""
from dataclasses import dataclass
from typing import Tuple

from PyQt5.QtCore import QPointF
from PyQt5.QtGui import QPainterPath

from ..layout.models import Box

DEFAULT_STEP = 4.0
DEFAULT_AMPLITUDE = 1.5
DEFAULT_BASELINE_INSET = 2.0


@dataclass(frozen=True)
class WavySegment:
    """Quadratic curve to (x, y) with control point (cx, cy)."""
    cx: float
    cy: float
    x: float
    y: float


@dataclass(frozen=True)
class WavyPath:
    start: Tuple[float, float]
    segments: Tuple[WavySegment, ...]

    @property
    def end(self) -> Tuple[float, float]:
        last = self.segments[-1]
        return last.x, last.y

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) over all points, control points included."""
        xs = [self.start[0]]
        ys = [self.start[1]]
        for seg in self.segments:
            xs.extend((seg.cx, seg.x))
            ys.extend((seg.cy, seg.y))
        return min(xs), min(ys), max(xs), max(ys)

    def to_painter_path(self) -> QPainterPath:
        path = QPainterPath(QPointF(*self.start))
        for seg in self.segments:
            path.quadTo(QPointF(seg.cx, seg.cy), QPointF(seg.x, seg.y))
        return path


def generate_wavy_path(box: Box,
                       step: float = DEFAULT_STEP,
                       amplitude: float = DEFAULT_AMPLITUDE,
                       baseline_inset: float = DEFAULT_BASELINE_INSET) -> WavyPath:
    """
    Generate the wavy stroke for one box.

    The stroke starts at (x, y + height - inset) and advances ``step`` units
    per segment. The last segment ends exactly at the box's right edge, so
    neither end points nor control points leave the box's x-range.

    Args:
        box: Box to decorate
        step: Horizontal length of one full segment
        amplitude: Offset of the control points from the baseline
        baseline_inset: Distance of the baseline from the box bottom

    Returns:
        The generated path; a single flat segment for zero-width boxes
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    x = box.x
    baseline = box.y + box.height - baseline_inset
    right = box.x + box.width

    if box.width <= 0:
        return WavyPath(start=(x, baseline),
                        segments=(WavySegment(x, baseline, x, baseline),))

    segments = []
    k = 0
    seg_start = x
    while seg_start < right:
        seg_end = min(x + (k + 1) * step, right)
        cy = baseline + (amplitude if k % 2 == 0 else -amplitude)
        segments.append(WavySegment((seg_start + seg_end) / 2, cy, seg_end, baseline))
        seg_start = seg_end
        k += 1

    return WavyPath(start=(x, baseline), segments=tuple(segments))

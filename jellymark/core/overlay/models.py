from dataclasses import dataclass
from enum import Enum


class InteractionState(Enum):
    RESTING = "resting"
    HOVERED = "hovered"
    ACTIVE = "active"


class FilterKind(Enum):
    NONE = "none"
    SOFT = "soft"
    LIGHT = "light"
    DEEP = "deep"


class PaintMode(Enum):
    """How the boxes of a container are drawn."""
    FILL = "fill"  # whole box filled
    BAR = "bar"    # thin bar pinned to the bottom edge
    WAVE = "wave"  # transparent box plus a generated wavy stroke


@dataclass(frozen=True)
class PaintSpec:
    """Concrete paint for the boxes of one container."""
    fill_color: str
    fill_opacity: float
    stroke_color: str = "none"
    stroke_width: float = 0.0
    corner_radius: float = 0.0
    filter_kind: FilterKind = FilterKind.NONE
    mode: PaintMode = PaintMode.FILL

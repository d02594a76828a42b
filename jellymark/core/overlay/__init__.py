"""
Overlay engine: paint resolution, painting, container lifecycle and hover.
"""
from .models import FilterKind, InteractionState, PaintMode, PaintSpec
from .wavy import WavyPath, WavySegment, generate_wavy_path
from .items import OverlayBoxItem, OverlayContainer, WavyStrokeItem
from .style_resolver import StyleResolver
from .paint_engine import PaintEngine
from .lifecycle import OverlayLifecycleManager
from .hover import HoverController

__all__ = [
    'FilterKind',
    'InteractionState',
    'PaintMode',
    'PaintSpec',
    'WavyPath',
    'WavySegment',
    'generate_wavy_path',
    'OverlayBoxItem',
    'OverlayContainer',
    'WavyStrokeItem',
    'StyleResolver',
    'PaintEngine',
    'OverlayLifecycleManager',
    'HoverController',
]

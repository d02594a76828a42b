"""
Core overlay synchronization logic for jellymark.
"""
from .annotations import AnnotationRecord, StyleKind
from .layout import Box, BoxProvider, StaticBoxProvider
from .overlay import (
    HoverController,
    InteractionState,
    OverlayLifecycleManager,
    PaintEngine,
    StyleResolver,
)

__all__ = [
    'AnnotationRecord',
    'StyleKind',
    'Box',
    'BoxProvider',
    'StaticBoxProvider',
    'HoverController',
    'InteractionState',
    'OverlayLifecycleManager',
    'PaintEngine',
    'StyleResolver',
]

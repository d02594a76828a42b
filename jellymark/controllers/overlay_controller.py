"""
Controller connecting the overlay engine to the reader around it.
"""
import logging
from typing import Iterable, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtWidgets import QGraphicsScene

from ..config import EngineSettings
from ..core.annotations import AnnotationRecord, AnnotationSource, StyleKind
from ..core.layout import BoxProvider
from ..core.overlay import (
    HoverController,
    InteractionState,
    OverlayContainer,
    OverlayLifecycleManager,
    PaintEngine,
)
from ..styles.models import ReaderTheme

log = logging.getLogger(__name__)


class OverlayController(QObject):
    """Owns the overlay engine for one document view."""

    # Signals
    range_activated = pyqtSignal(str, str)  # rid, excerpt of a clicked range
    overlays_rebuilt = pyqtSignal(int)      # number of live containers
    active_changed = pyqtSignal(object)     # active rid or None

    def __init__(self, box_provider: BoxProvider,
                 scene: Optional[QGraphicsScene] = None,
                 settings: Optional[EngineSettings] = None):
        super().__init__()
        self.settings = settings or EngineSettings()
        self.box_provider = box_provider
        self.box_provider.ancestor_max_depth = self.settings.ancestor_max_depth

        self.paint_engine = PaintEngine(
            wave_step=self.settings.wave_step,
            wave_amplitude=self.settings.wave_amplitude,
            underline_thickness=self.settings.underline_thickness,
        )
        self.lifecycle = OverlayLifecycleManager(
            self.paint_engine,
            self.settings.theme,
            scene=scene,
            settle_delays_ms=self.settings.settle_delays_ms,
        )
        self.hover = HoverController(self.lifecycle)
        self.lifecycle.settled.connect(self._on_settled)

        self.annotations: List[AnnotationRecord] = []
        self.active_rid: Optional[str] = None

    @property
    def theme(self) -> ReaderTheme:
        return self.lifecycle.theme

    def set_box_provider(self, box_provider: BoxProvider) -> None:
        box_provider.ancestor_max_depth = self.settings.ancestor_max_depth
        self.box_provider = box_provider

    def load_annotations(self, source: AnnotationSource, document_id: str) -> int:
        """
        Load the annotation list of a document and rebuild the overlays.

        Args:
            source: Annotation source to read from
            document_id: Document whose annotations to load

        Returns:
            Number of annotations loaded
        """
        records = source.list_annotations(document_id)
        self.set_annotations(records)
        return len(records)

    def set_annotations(self, records: Iterable[AnnotationRecord]) -> None:
        """Replace the annotation list (after a create or delete) and rebuild."""
        self.annotations = list(records)
        self.on_rendered()

    def on_rendered(self) -> None:
        """
        Handle a content re-render (chapter change, resize, zoom, theme).

        The hovered container is about to be destroyed, so hover state is
        dropped before the rebuild.
        """
        self.hover.reset()
        self.lifecycle.rebuild(self.annotations, self.box_provider)
        self._reapply_active()
        self.overlays_rebuilt.emit(len(self.lifecycle))

    def on_layout_ready(self) -> None:
        self.lifecycle.on_layout_ready()

    def new_session(self) -> None:
        """Forget per-document input state (touch detection, hover, active)."""
        self.hover.new_session()
        self.active_rid = None

    def set_theme(self, theme: ReaderTheme) -> None:
        """Repaint all overlays for a new theme; geometry is left alone."""
        self.hover.clear_hover()
        self.lifecycle.set_theme(theme)

    def style_for(self, rid: str) -> StyleKind:
        return self.lifecycle.style_for(rid)

    def container_for(self, rid: str) -> Optional[OverlayContainer]:
        return self.lifecycle.container_for(rid)

    # --- Action collaborator API ---

    def set_active(self, rid: str) -> bool:
        """
        Mark a range as the current action target.

        Returns:
            True if a container for the range is currently shown
        """
        if self.active_rid is not None and self.active_rid != rid:
            self.clear_active()

        if self.hover.hovered is not None and self.hover.hovered.range_id == rid:
            self.hover.reset()

        self.active_rid = rid
        self.active_changed.emit(rid)
        return self._reapply_active()

    def clear_active(self) -> None:
        """Return the active range to its resting paint."""
        rid = self.active_rid
        if rid is None:
            return
        self.active_rid = None
        container = self.lifecycle.container_for(rid)
        if container is not None:
            self.paint_engine.paint_state(container, self.lifecycle.style_for(rid),
                                          InteractionState.RESTING, self.theme)
        self.active_changed.emit(None)

    def _on_settled(self, epoch: int, changed: bool) -> None:
        # Containers created or re-laid out by a settle pass start out resting
        if changed:
            self._reapply_active()

    def _reapply_active(self) -> bool:
        if self.active_rid is None:
            return False
        container = self.lifecycle.container_for(self.active_rid)
        if container is None:
            return False
        self.paint_engine.paint_state(container, self.lifecycle.style_for(self.active_rid),
                                      InteractionState.ACTIVE, self.theme)
        return True

    # --- Pointer input ---

    def pointer_moved(self, target, pointer_type: str = "mouse") -> None:
        self.hover.pointer_moved(target, pointer_type)

    def pointer_left(self, related_target=None) -> None:
        self.hover.pointer_left(related_target)

    def touch_observed(self) -> None:
        self.hover.touch_observed()

    def click(self, target) -> Optional[str]:
        """
        Handle a click on a scene item.

        Emits range_activated when the item belongs to a painted range.

        Returns:
            The clicked range id, or None
        """
        rid = self.box_provider.find_owning_range(target) if target is not None else None
        if rid is None or self.lifecycle.container_for(rid) is None:
            return None

        record = self.lifecycle.record_for(rid)
        excerpt = record.excerpt if record is not None else ""
        self.range_activated.emit(rid, excerpt)
        return rid

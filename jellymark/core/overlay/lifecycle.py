"""
Owner of the live overlay containers.

Containers are created and destroyed only here. Every content re-render
destroys all of them and rebuilds one container per annotated range that has
boxes in the new layout.

Box geometry may lag the render event by a frame, so each rebuild schedules
settle passes that re-read the boxes after a short delay. A settle pass that
finds unchanged geometry touches nothing. This is a workaround for box
providers that cannot report when their layout is ready; providers that can
should call ``on_layout_ready`` and run with ``settle_delays_ms=()``.
"""
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from PyQt5.QtCore import QObject, QTimer, pyqtSignal
from PyQt5.QtWidgets import QGraphicsScene

from ...styles.models import ReaderTheme
from ..annotations.models import AnnotationRecord, StyleKind
from ..layout.box_provider import BoxProvider
from ..layout.models import Box
from .items import OverlayContainer
from .models import InteractionState
from .paint_engine import PaintEngine

log = logging.getLogger(__name__)

OVERLAY_Z_VALUE = 10


class OverlayLifecycleManager(QObject):
    """Builds, settles and tears down the overlay containers."""

    # Signals
    rebuilt = pyqtSignal(int, int)   # epoch, number of containers
    settled = pyqtSignal(int, bool)  # epoch, whether anything changed

    def __init__(self, paint_engine: PaintEngine, theme: ReaderTheme,
                 scene: Optional[QGraphicsScene] = None,
                 settle_delays_ms: Sequence[int] = (200, 500)):
        super().__init__()
        self.paint_engine = paint_engine
        self.theme = theme
        self.scene = scene
        self.settle_delays_ms = tuple(settle_delays_ms)

        self.containers: Dict[str, OverlayContainer] = {}
        self.epoch: int = 0

        self.annotations: List[AnnotationRecord] = []
        self.box_provider: Optional[BoxProvider] = None

    def __len__(self) -> int:
        return len(self.containers)

    def __iter__(self) -> Iterator[OverlayContainer]:
        return iter(list(self.containers.values()))

    def container_for(self, rid: str) -> Optional[OverlayContainer]:
        return self.containers.get(rid)

    def style_for(self, rid: str) -> StyleKind:
        """
        Style of a range according to the current annotation list.

        Ranges that are no longer annotated fall back to highlight.
        """
        for record in self.annotations:
            if record.range_id == rid:
                return record.style_kind
        return StyleKind.HIGHLIGHT

    def record_for(self, rid: str) -> Optional[AnnotationRecord]:
        for record in self.annotations:
            if record.range_id == rid:
                return record
        return None

    def rebuild(self, annotations: Iterable[AnnotationRecord],
                box_provider: BoxProvider) -> int:
        """
        Destroy all containers and build them again from an annotation list.

        Args:
            annotations: Current annotation list
            box_provider: Source of the new layout geometry

        Returns:
            The epoch of this rebuild
        """
        self.epoch += 1
        self.annotations = list(annotations)
        self.box_provider = box_provider

        self.destroy_all()
        for record in self.annotations:
            if record.range_id in self.containers:
                continue
            boxes = self._boxes_for(record.range_id)
            if boxes:
                self._create(record.range_id, record.style_kind, boxes)

        log.debug("Rebuild %d: %d containers for %d annotations",
                  self.epoch, len(self.containers), len(self.annotations))
        self.rebuilt.emit(self.epoch, len(self.containers))
        self._schedule_settle(self.epoch)
        return self.epoch

    def settle(self, epoch: int) -> bool:
        """
        Re-read box geometry for the containers of a rebuild.

        Args:
            epoch: Epoch captured when the pass was scheduled

        Returns:
            True if any container was created, re-laid out or removed
        """
        if epoch != self.epoch:
            log.debug("Dropping settle pass of stale epoch %d (current %d)", epoch, self.epoch)
            return False
        if self.box_provider is None:
            return False

        changed = False
        seen = set()
        for record in self.annotations:
            rid = record.range_id
            if rid in seen:
                continue
            seen.add(rid)

            boxes = self._boxes_for(rid)
            container = self.containers.get(rid)
            if container is None:
                if boxes:
                    self._create(rid, record.style_kind, boxes)
                    changed = True
                continue

            if not boxes:
                self._destroy(container)
                changed = True
            elif boxes != container.geometry():
                container.set_boxes(boxes)
                self.paint_engine.paint_state(container, container.style_kind,
                                              container.interaction_state, self.theme)
                changed = True

        if changed:
            log.debug("Settle pass of epoch %d updated the layout", epoch)
        self.settled.emit(epoch, changed)
        return changed

    def on_layout_ready(self) -> bool:
        """Settle immediately because the provider reported its layout ready."""
        return self.settle(self.epoch)

    def set_theme(self, theme: ReaderTheme) -> None:
        self.theme = theme
        self.repaint_all()

    def repaint_all(self) -> None:
        """Repaint every container for its current style and state."""
        for container in self:
            self.paint_engine.paint_state(container, container.style_kind,
                                          container.interaction_state, self.theme)

    def destroy_all(self) -> None:
        for container in list(self.containers.values()):
            self._destroy(container)

    def _create(self, rid: str, style_kind: StyleKind, boxes: List[Box]) -> OverlayContainer:
        container = OverlayContainer(rid, style_kind, epoch=self.epoch)
        container.set_boxes(boxes)
        container.setZValue(OVERLAY_Z_VALUE)
        if self.scene is not None:
            self.scene.addItem(container)
        self.containers[rid] = container
        self.paint_engine.paint_state(container, style_kind, InteractionState.RESTING, self.theme)
        return container

    def _destroy(self, container: OverlayContainer) -> None:
        container.detach()
        self.containers.pop(container.range_id, None)

    def _boxes_for(self, rid: str) -> List[Box]:
        try:
            return list(self.box_provider.get_boxes_for_range(rid))
        except Exception as e:
            log.warning("Box provider failed for %r: %s", rid, e)
            return []

    def _schedule_settle(self, epoch: int) -> None:
        for delay in self.settle_delays_ms:
            QTimer.singleShot(delay, lambda e=epoch: self.settle(e))

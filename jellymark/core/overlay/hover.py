"""
Hover tracking for overlay containers.

At most one container is hovered at a time. Leaving a container always
repaints it through the same resolution path as a rebuild, so hover never
leaves residual styling behind.
"""
import logging
from typing import Optional

from .items import OverlayContainer
from .lifecycle import OverlayLifecycleManager
from .models import InteractionState

log = logging.getLogger(__name__)


class HoverController:
    """State machine: idle, or hovering exactly one container."""

    def __init__(self, lifecycle: OverlayLifecycleManager):
        self.lifecycle = lifecycle
        self.hovered: Optional[OverlayContainer] = None

        # Once touch input is seen, hover stays off until the next session
        self.touch_detected = False

    @property
    def is_idle(self) -> bool:
        return self.hovered is None

    def pointer_moved(self, target, pointer_type: str = "mouse") -> None:
        """
        Handle a pointer move over a scene item.

        Args:
            target: Item under the pointer, or None
            pointer_type: "mouse", "pen" or "touch"; only mice hover
        """
        if pointer_type != "mouse":
            return
        provider = self.lifecycle.box_provider
        rid = provider.find_owning_range(target) if provider is not None and target is not None else None
        self.hover_range(rid)

    def hover_range(self, rid: Optional[str]) -> None:
        """Move the hover to the container of a range (None to leave)."""
        if self.touch_detected:
            return

        current = self.lifecycle.container_for(rid) if rid else None
        if self.hovered is not None and current is self.hovered:
            return
        if self.hovered is not None:
            self.clear_hover()

        if current is not None and current.interaction_state != InteractionState.ACTIVE:
            self.lifecycle.paint_engine.paint_state(
                current, self.lifecycle.style_for(current.range_id),
                InteractionState.HOVERED, self.lifecycle.theme)
            self.hovered = current

    def pointer_left(self, related_target=None) -> None:
        """
        Handle the pointer leaving a container or the document.

        Args:
            related_target: What the pointer moved onto; None means it left
                the document altogether
        """
        if related_target is None:
            self.clear_hover()

    def clear_hover(self) -> None:
        """Restore the hovered container to its resting paint and go idle."""
        prev = self.hovered
        self.hovered = None
        if prev is None:
            return
        if self.lifecycle.container_for(prev.range_id) is not prev:
            # Destroyed by a rebuild or settle pass in the meantime
            return
        if prev.interaction_state == InteractionState.ACTIVE:
            return
        self.lifecycle.paint_engine.paint_state(
            prev, self.lifecycle.style_for(prev.range_id),
            InteractionState.RESTING, self.lifecycle.theme)

    def touch_observed(self) -> None:
        """Remember that this session uses touch input and drop any hover."""
        if not self.touch_detected:
            log.debug("Touch input observed, disabling hover for this session")
        self.clear_hover()
        self.touch_detected = True

    def reset(self) -> None:
        """Forget the hovered container without repainting it."""
        self.hovered = None

    def new_session(self) -> None:
        """Start a new document session."""
        self.reset()
        self.touch_detected = False

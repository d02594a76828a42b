"""
Box providers map range ids to the boxes they occupy in the current layout.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from PyQt5.QtWidgets import QGraphicsItem

from .models import RANGE_ID_ROLE, Box


def find_owning_range(target, max_depth: int = 10) -> Optional[str]:
    """
    Walk up the item tree from a pointer target to its overlay container.

    Args:
        target: The QGraphicsItem under the pointer, or None
        max_depth: Number of items (target included) to inspect

    Returns:
        The range id of the nearest container, or None
    """
    node = target
    for _ in range(max_depth):
        if not isinstance(node, QGraphicsItem):
            return None
        rid = node.data(RANGE_ID_ROLE)
        if rid:
            return str(rid)
        node = node.parentItem()
    return None


class BoxProvider(ABC):
    """Source of layout geometry for range ids."""

    ancestor_max_depth: int = 10

    @abstractmethod
    def get_boxes_for_range(self, rid: str) -> List[Box]:
        """
        Get the boxes a range currently occupies.

        Args:
            rid: Range id

        Returns:
            Boxes in layout order (top to bottom); empty if not laid out
        """

    def find_owning_range(self, target) -> Optional[str]:
        """Range id of the overlay container owning a pointer target."""
        return find_owning_range(target, self.ancestor_max_depth)


class StaticBoxProvider(BoxProvider):
    """Box provider backed by a dictionary, for embedding and tests."""

    def __init__(self, boxes: Optional[Dict[str, Iterable[Box]]] = None):
        self._boxes: Dict[str, List[Box]] = {
            rid: list(items) for rid, items in (boxes or {}).items()
        }

    def set_boxes(self, rid: str, boxes: Iterable[Box]) -> None:
        self._boxes[rid] = list(boxes)

    def clear(self) -> None:
        self._boxes.clear()

    def get_boxes_for_range(self, rid: str) -> List[Box]:
        return list(self._boxes.get(rid, []))

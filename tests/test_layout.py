import math

import pytest
from PyQt5.QtWidgets import QGraphicsItemGroup, QGraphicsRectItem

from jellymark.core.layout import RANGE_ID_ROLE, Box, StaticBoxProvider, find_owning_range


@pytest.mark.parametrize("args", [(0, 0, -1, 5), (0, 0, 5, -1), (math.nan, 0, 1, 1), (0, math.inf, 1, 1)])
def test_box_rejects_invalid_geometry(args):
    with pytest.raises(ValueError):
        Box(*args)


def test_box_helpers():
    box = Box.from_points(30, 40, 10, 20)

    assert box == Box(10, 20, 20, 20)
    assert (box.right, box.bottom) == (30, 40)
    assert box.scaled(0.5) == Box(5, 10, 10, 10)
    assert Box.from_qrectf(box.to_qrectf()) == box


def nested_chain(depth):
    """A container holding a leaf item `depth` levels below it."""
    container = QGraphicsItemGroup()
    container.setData(RANGE_ID_ROLE, "rid-7")
    parent = container
    for _ in range(depth):
        item = QGraphicsRectItem(0, 0, 1, 1, parent)
        parent = item
    return container, parent


def test_owning_range_found_through_ancestors():
    container, leaf = nested_chain(3)

    assert find_owning_range(leaf) == "rid-7"
    assert find_owning_range(container) == "rid-7"


def test_owning_range_lookup_is_bounded():
    container, leaf = nested_chain(10)

    assert find_owning_range(leaf, max_depth=10) is None
    assert find_owning_range(leaf, max_depth=11) == "rid-7"


def test_targets_outside_containers_have_no_range():
    assert find_owning_range(QGraphicsRectItem(0, 0, 1, 1)) is None
    assert find_owning_range(None) is None
    assert find_owning_range("not an item") is None


def test_static_provider_returns_copies():
    provider = StaticBoxProvider({"a": [Box(0, 0, 1, 1)]})

    boxes = provider.get_boxes_for_range("a")
    boxes.append(Box(5, 5, 1, 1))

    assert provider.get_boxes_for_range("a") == [Box(0, 0, 1, 1)]
    assert provider.get_boxes_for_range("b") == []

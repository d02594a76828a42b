import pytest

from jellymark.core.annotations import StyleKind
from jellymark.core.layout import Box
from jellymark.core.overlay import HoverController, InteractionState


@pytest.fixture
def hover(lifecycle, provider, make_record):
    lifecycle.rebuild([
        make_record("rid-a", StyleKind.UNDERLINE),
        make_record("rid-b"),
        make_record("rid-42", StyleKind.WAVY),
    ], provider)
    return HoverController(lifecycle)


def box_item(lifecycle, rid, index=0):
    return lifecycle.container_for(rid).boxes[index]


def test_hover_is_mutually_exclusive(hover, lifecycle, paint_engine):
    paint_engine.calls.clear()

    hover.pointer_moved(box_item(lifecycle, "rid-a"))
    hover.pointer_moved(box_item(lifecycle, "rid-b", 1))
    hover.pointer_left()

    assert paint_engine.calls == [
        ("rid-a", "hovered"),
        ("rid-a", "resting"),
        ("rid-b", "hovered"),
        ("rid-b", "resting"),
    ]
    assert hover.is_idle


def test_moving_within_same_container_does_nothing(hover, lifecycle, paint_engine):
    hover.pointer_moved(box_item(lifecycle, "rid-b", 0))
    paint_engine.calls.clear()

    hover.pointer_moved(box_item(lifecycle, "rid-b", 1))

    assert paint_engine.calls == []
    assert hover.hovered is lifecycle.container_for("rid-b")


def test_moving_off_overlays_clears_hover(hover, lifecycle):
    hover.pointer_moved(box_item(lifecycle, "rid-a"))

    hover.pointer_moved(None)

    container = lifecycle.container_for("rid-a")
    assert hover.is_idle
    assert container.interaction_state == InteractionState.RESTING
    assert container.boxes[0].visible_box == Box(10, 24, 50, 2)


def test_leaving_onto_another_element_keeps_hover(hover, lifecycle):
    container = lifecycle.container_for("rid-a")
    hover.pointer_moved(container.boxes[0])

    hover.pointer_left(related_target=object())

    assert hover.hovered is container


def test_hovered_underline_restores_bar(hover, lifecycle):
    container = lifecycle.container_for("rid-a")

    hover.pointer_moved(container.boxes[0])
    assert container.boxes[0].visible_box == Box(10, 10, 50, 16)

    hover.pointer_left()
    assert container.boxes[0].visible_box == Box(10, 24, 50, 2)


def test_hovered_wavy_keeps_its_stroke(hover, lifecycle):
    container = lifecycle.container_for("rid-42")

    hover.pointer_moved(container.boxes[0])

    assert len(container.aux_strokes) == 1
    assert container.boxes[0].brush().color().alpha() == 0
    assert container.aux_strokes[0].pen().widthF() > 1.5

    hover.pointer_left()
    assert container.aux_strokes[0].pen().widthF() == 1.5


def test_hovering_a_stroke_hovers_its_container(hover, lifecycle):
    container = lifecycle.container_for("rid-42")

    hover.pointer_moved(container.aux_strokes[0])

    assert hover.hovered is container


def test_style_comes_from_current_annotation_list(hover, lifecycle):
    container = lifecycle.container_for("rid-42")
    hover.pointer_moved(container.boxes[0])

    # The record was deleted but no rebuild has happened yet
    lifecycle.annotations = []
    hover.pointer_left()

    assert container.style_kind == StyleKind.HIGHLIGHT
    assert container.aux_strokes == {}
    assert container.boxes[0].brush().color().name() == "#ffd60a"


def test_active_container_is_never_hovered(hover, lifecycle, paint_engine, theme):
    container = lifecycle.container_for("rid-b")
    paint_engine.paint_state(container, StyleKind.HIGHLIGHT, InteractionState.ACTIVE, theme)
    paint_engine.calls.clear()

    hover.pointer_moved(container.boxes[0])
    hover.pointer_left()

    assert paint_engine.calls == []
    assert container.interaction_state == InteractionState.ACTIVE


def test_non_mouse_pointers_do_not_hover(hover, lifecycle, paint_engine):
    paint_engine.calls.clear()

    hover.pointer_moved(box_item(lifecycle, "rid-a"), pointer_type="pen")
    hover.pointer_moved(box_item(lifecycle, "rid-a"), pointer_type="touch")

    assert paint_engine.calls == []
    assert hover.is_idle


def test_touch_disables_hover_until_new_session(hover, lifecycle):
    hover.pointer_moved(box_item(lifecycle, "rid-a"))

    hover.touch_observed()
    assert hover.is_idle
    assert lifecycle.container_for("rid-a").interaction_state == InteractionState.RESTING

    hover.pointer_moved(box_item(lifecycle, "rid-b"))
    assert hover.is_idle

    hover.new_session()
    hover.pointer_moved(box_item(lifecycle, "rid-b"))
    assert hover.hovered is lifecycle.container_for("rid-b")


def test_clearing_a_destroyed_container_is_harmless(hover, lifecycle, provider, paint_engine, make_record):
    hover.pointer_moved(box_item(lifecycle, "rid-a"))
    lifecycle.rebuild([make_record("rid-b")], provider)
    paint_engine.calls.clear()

    hover.clear_hover()

    assert paint_engine.calls == []
    assert hover.is_idle


def test_hover_returns_to_rebuild_paint(hover, lifecycle):
    for rid in ("rid-a", "rid-b", "rid-42"):
        container = lifecycle.container_for(rid)
        spec = container.paint_spec

        hover.pointer_moved(container.boxes[0])
        hover.pointer_left()

        assert container.paint_spec == spec

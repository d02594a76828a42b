import pytest
from PyQt5.QtCore import QPointF
from PyQt5.QtGui import QTransform
from PyQt5.QtWidgets import QGraphicsRectItem

from jellymark.config import EngineSettings
from jellymark.controllers import OverlayController
from jellymark.core.annotations import AnnotationRecord, InMemoryAnnotationSource, StyleKind
from jellymark.core.layout import Box, StaticBoxProvider
from jellymark.core.overlay import InteractionState
from jellymark.styles import ReaderTheme


@pytest.fixture
def controller(provider, scene):
    settings = EngineSettings(settle_delays_ms=())
    return OverlayController(provider, scene=scene, settings=settings)


@pytest.fixture
def loaded(controller, make_record):
    controller.set_annotations([
        make_record("rid-a", StyleKind.UNDERLINE, excerpt="first line"),
        make_record("rid-42", StyleKind.WAVY, excerpt="a wavy span"),
    ])
    return controller


def test_set_annotations_builds_overlays(controller, make_record):
    counts = []
    controller.overlays_rebuilt.connect(counts.append)

    controller.set_annotations([make_record("rid-a"), make_record("missing")])

    assert counts == [1]
    assert controller.container_for("rid-a") is not None


def test_load_annotations_filters_by_document(controller):
    source = InMemoryAnnotationSource([
        AnnotationRecord(id="1", range_id="rid-a", document_id="doc-1", created="2024-01-01"),
        AnnotationRecord(id="2", range_id="rid-b", document_id="doc-2", created="2024-01-02"),
    ])

    assert controller.load_annotations(source, "doc-1") == 1
    assert controller.container_for("rid-a") is not None
    assert controller.container_for("rid-b") is None


def test_click_emits_range_and_excerpt(loaded):
    activated = []
    loaded.range_activated.connect(lambda rid, excerpt: activated.append((rid, excerpt)))

    rid = loaded.click(loaded.container_for("rid-42").boxes[0])

    assert rid == "rid-42"
    assert activated == [("rid-42", "a wavy span")]


def test_click_outside_overlays_is_ignored(loaded, scene):
    activated = []
    loaded.range_activated.connect(lambda rid, excerpt: activated.append(rid))
    page = QGraphicsRectItem(0, 0, 10, 10)
    scene.addItem(page)

    assert loaded.click(page) is None
    assert loaded.click(None) is None
    assert activated == []


def test_active_range_paints_active_and_clears_to_resting(loaded):
    changes = []
    loaded.active_changed.connect(changes.append)
    container = loaded.container_for("rid-a")

    assert loaded.set_active("rid-a") is True
    assert container.interaction_state == InteractionState.ACTIVE
    assert container.boxes[0].brush().color().name() == "#007aff"

    loaded.clear_active()
    assert container.interaction_state == InteractionState.RESTING
    assert container.boxes[0].visible_box.height == 2
    assert changes == ["rid-a", None]


def test_activating_another_range_releases_the_first(loaded):
    loaded.set_active("rid-a")
    loaded.set_active("rid-42")

    assert loaded.container_for("rid-a").interaction_state == InteractionState.RESTING
    assert loaded.container_for("rid-42").interaction_state == InteractionState.ACTIVE


def test_active_range_survives_rebuild(loaded):
    loaded.set_active("rid-42")

    loaded.on_rendered()

    container = loaded.container_for("rid-42")
    assert container.interaction_state == InteractionState.ACTIVE
    assert container.aux_strokes == {}


def test_hovered_range_becomes_active(loaded):
    container = loaded.container_for("rid-a")
    loaded.pointer_moved(container.boxes[0])

    loaded.set_active("rid-a")
    loaded.pointer_left()

    assert container.interaction_state == InteractionState.ACTIVE


def test_rebuild_drops_hover(loaded):
    loaded.pointer_moved(loaded.container_for("rid-a").boxes[0])

    loaded.on_rendered()

    assert loaded.hover.is_idle
    assert loaded.container_for("rid-a").interaction_state == InteractionState.RESTING


def test_theme_change_restores_hovered_overlay(loaded):
    container = loaded.container_for("rid-a")
    loaded.pointer_moved(container.boxes[0])

    loaded.set_theme(ReaderTheme("rose", True))

    assert loaded.hover.is_idle
    assert container.interaction_state == InteractionState.RESTING
    assert container.boxes[0].brush().color().name() == "#ffffff"


def test_settings_reach_the_engine(provider):
    settings = EngineSettings(settle_delays_ms=(), underline_thickness=4.0, ancestor_max_depth=3)

    controller = OverlayController(provider, settings=settings)

    assert controller.paint_engine.underline_thickness == 4.0
    assert provider.ancestor_max_depth == 3
    assert controller.lifecycle.settle_delays_ms == ()


def test_gaps_between_boxes_are_not_targets(controller, scene, make_record):
    # rid-b spans (10,40,80,16) and (10,60,30,16)
    controller.set_annotations([make_record("rid-b", excerpt="two lines")])
    container = controller.container_for("rid-b")

    gap = scene.itemAt(QPointF(60, 65), QTransform())
    controller.pointer_moved(gap)

    assert gap is None
    assert controller.hover.is_idle
    assert controller.click(gap) is None

    inside = scene.itemAt(QPointF(20, 65), QTransform())
    controller.pointer_moved(inside)

    assert inside is container.boxes[1]
    assert container.interaction_state == InteractionState.HOVERED
    assert controller.click(inside) == "rid-b"


def test_active_range_laid_out_late_is_painted_active(scene, make_record):
    provider = StaticBoxProvider()
    controller = OverlayController(provider, scene=scene, settings=EngineSettings(settle_delays_ms=()))
    controller.set_annotations([make_record("rid-late")])

    assert controller.set_active("rid-late") is False

    provider.set_boxes("rid-late", [Box(0, 0, 40, 12)])
    controller.lifecycle.settle(controller.lifecycle.epoch)

    container = controller.container_for("rid-late")
    assert container.interaction_state == InteractionState.ACTIVE
    assert container.boxes[0].brush().color().name() == "#007aff"

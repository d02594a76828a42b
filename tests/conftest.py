import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtWidgets import QApplication, QGraphicsScene

from jellymark.core.annotations import AnnotationRecord, StyleKind
from jellymark.core.layout import Box, StaticBoxProvider
from jellymark.core.overlay import OverlayLifecycleManager, PaintEngine
from jellymark.styles import ReaderTheme


_QAPP = None


@pytest.fixture(scope="session", autouse=True)
def qapp():
    global _QAPP
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    _QAPP = app
    return app


class RecordingPaintEngine(PaintEngine):
    """Paint engine that remembers every state paint it was asked for."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = []

    def paint_state(self, container, style_kind, state, theme):
        self.calls.append((container.range_id, state.value))
        return super().paint_state(container, style_kind, state, theme)


@pytest.fixture
def theme():
    return ReaderTheme("blue", False)


@pytest.fixture
def paint_engine():
    return RecordingPaintEngine()


@pytest.fixture
def scene():
    return QGraphicsScene()


@pytest.fixture
def provider():
    return StaticBoxProvider({
        "rid-42": [Box(10, 100, 120, 20)],
        "rid-a": [Box(10, 10, 50, 16)],
        "rid-b": [Box(10, 40, 80, 16), Box(10, 60, 30, 16)],
    })


@pytest.fixture
def lifecycle(paint_engine, theme, scene):
    return OverlayLifecycleManager(paint_engine, theme, scene=scene, settle_delays_ms=())


def record(rid, kind=StyleKind.HIGHLIGHT, record_id=None, excerpt="", created=""):
    return AnnotationRecord(
        id=record_id or f"m-{rid}",
        range_id=rid,
        style_kind=kind,
        excerpt=excerpt,
        created=created,
    )


@pytest.fixture
def make_record():
    return record

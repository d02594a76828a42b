import fitz
import pytest

from jellymark.config import EngineSettings
from jellymark.ui import MainWindow
from jellymark.ui import main_window as main_window_module


@pytest.fixture
def pdf_path(tmp_path):
    doc = fitz.open()
    doc.new_page(width=300, height=200).insert_text((40, 60), "Marked words here", fontsize=14)
    path = tmp_path / "sample.pdf"
    doc.save(str(path))
    doc.close()
    return str(path)


@pytest.fixture
def window(pdf_path, tmp_path):
    window = MainWindow(pdf_path, str(tmp_path / "annotations.json"), EngineSettings(settle_delays_ms=()))
    yield window
    window.close()


def test_marking_text_stores_page_excerpt(window, monkeypatch):
    monkeypatch.setattr(main_window_module.QInputDialog, "getText",
                        lambda *args, **kwargs: ("words", True))

    window.mark_text()

    assert len(window.annotations) == 1
    record = window.annotations[0]
    assert record.excerpt == window.view.box_provider.excerpt(record.range_id)
    assert record.excerpt == "words"
    assert window.controller.container_for(record.range_id) is not None


def test_restyle_and_delete(window, monkeypatch):
    monkeypatch.setattr(main_window_module.QInputDialog, "getText",
                        lambda *args, **kwargs: ("Marked", True))
    window.mark_text()
    rid = window.annotations[0].range_id

    window._restyle(rid, main_window_module.StyleKind.WAVY)
    assert len(window.controller.container_for(rid).aux_strokes) == 1

    window._delete(rid)
    assert window.controller.container_for(rid) is None

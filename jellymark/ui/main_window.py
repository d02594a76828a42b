import hashlib
import logging
import os
from typing import List, Optional

import fitz  # PyMuPDF
import pyperclip
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QCursor
from PyQt5.QtWidgets import (
    QAction, QComboBox, QFileDialog, QInputDialog, QLabel, QMainWindow,
    QMenu, QMessageBox, QToolBar
)

from ..config import EngineSettings, save_settings
from ..controllers.overlay_controller import OverlayController
from ..core.annotations import AnnotationRecord, JsonAnnotationSource, StyleKind
from ..core.layout import StaticBoxProvider
from ..styles.models import ReaderTheme
from ..styles.theme_manager import ThemeManager
from ..utils.resource_loader import get_annotations_dir
from .overlay_page_view import OverlayPageView

log = logging.getLogger(__name__)


def default_annotations_path(pdf_path: str) -> str:
    """Annotation file for a PDF in the app data directory, keyed by path hash."""
    path_hash = hashlib.md5(pdf_path.encode()).hexdigest()
    return str(get_annotations_dir() / f"{path_hash}.json")


class MainWindow(QMainWindow):
    def __init__(self, file_path=None, annotations_path=None,
                 settings: Optional[EngineSettings] = None):
        super().__init__()
        self.setWindowTitle("Jellymark")

        self.settings = settings or EngineSettings()
        self.document: Optional[fitz.Document] = None
        self.document_id = ""
        self.annotations: List[AnnotationRecord] = []

        self.view = OverlayPageView(self)
        self.controller = OverlayController(StaticBoxProvider(), self.view.scene(), self.settings)
        self.view.attach(self.controller)
        self.controller.range_activated.connect(self._show_range_menu)
        self.view.page_rendered.connect(self._update_status)

        self.setup_ui()
        ThemeManager.apply_theme(self, self.settings.theme)

        if file_path:
            self.load_pdf(file_path, annotations_path)

    def setup_ui(self):
        self.setCentralWidget(self.view)

        toolbar = QToolBar("Overlays", self)
        self.addToolBar(toolbar)

        open_action = QAction("Open…", self)
        open_action.triggered.connect(self.open_pdf)
        toolbar.addAction(open_action)

        mark_action = QAction("Mark Text…", self)
        mark_action.triggered.connect(self.mark_text)
        toolbar.addAction(mark_action)

        self.palette_box = QComboBox(self)
        for key in ThemeManager.palette_keys():
            self.palette_box.addItem(ThemeManager.get_palette(key).name, key)
        index = self.palette_box.findData(self.settings.palette)
        self.palette_box.setCurrentIndex(max(index, 0))
        self.palette_box.currentIndexChanged.connect(self._theme_controls_changed)
        toolbar.addWidget(self.palette_box)

        self.night_action = QAction("Night", self)
        self.night_action.setCheckable(True)
        self.night_action.setChecked(self.settings.night_mode)
        self.night_action.toggled.connect(self._theme_controls_changed)
        toolbar.addAction(self.night_action)

        self.status_label = QLabel(self)
        self.status_label.setObjectName("statusLabel")
        self.statusBar().addPermanentWidget(self.status_label)

    def open_pdf(self):
        file_path, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", "PDF Files (*.pdf)")
        if file_path:
            self.load_pdf(file_path)

    def load_pdf(self, file_path: str, annotations_path: Optional[str] = None) -> bool:
        try:
            document = fitz.open(file_path)
        except (RuntimeError, ValueError) as e:
            QMessageBox.critical(self, "Error", f"Error loading PDF: {e}")
            return False

        if self.document is not None:
            self.document.close()
        self.document = document
        self.document_id = os.path.basename(file_path)

        provider = self.view.set_document(document)
        self.controller.set_box_provider(provider)
        self.controller.new_session()

        source = JsonAnnotationSource(annotations_path or default_annotations_path(file_path))
        self.annotations = source.list_annotations(self.document_id)
        log.info("Loaded %d annotations for %s", len(self.annotations), self.document_id)

        self.controller.annotations = list(self.annotations)
        self.view.render_page()
        return True

    def mark_text(self):
        """Annotate the first occurrence of a text on the current page."""
        if self.document is None:
            return
        text, ok = QInputDialog.getText(self, "Mark Text", "Text on this page:")
        if not ok or not text:
            return

        provider = self.view.box_provider
        rid = provider.find_text_range(self.view.page_index, text)
        if rid is None:
            QMessageBox.information(self, "Not Found", "The text does not occur on this page.")
            return

        record = AnnotationRecord(
            id=f"local-{len(self.annotations) + 1}",
            range_id=rid,
            excerpt=provider.excerpt(rid),
            document_id=self.document_id,
        )
        self._set_annotations([record] + self.annotations)

    def _set_annotations(self, records: List[AnnotationRecord]) -> None:
        self.annotations = records
        self.controller.set_annotations(records)

    def _theme_controls_changed(self, *_):
        self.settings.palette = self.palette_box.currentData()
        self.settings.night_mode = self.night_action.isChecked()
        theme = ReaderTheme(self.settings.palette, self.settings.night_mode)

        ThemeManager.apply_theme(self, theme)
        self.controller.set_theme(theme)
        # Page colors follow the color mode
        self.view.render_page()
        save_settings(self.settings)

    def _show_range_menu(self, rid: str, excerpt: str):
        self.controller.set_active(rid)

        menu = QMenu(self)
        copy_action = menu.addAction("Copy Excerpt")
        copy_action.triggered.connect(lambda: pyperclip.copy(excerpt))
        menu.addSeparator()
        for kind in StyleKind:
            action = menu.addAction(kind.value.capitalize())
            action.setCheckable(True)
            action.setChecked(self.controller.style_for(rid) == kind)
            action.triggered.connect(lambda _, k=kind: self._restyle(rid, k))
        menu.addSeparator()
        delete_action = menu.addAction("Delete")
        delete_action.triggered.connect(lambda: self._delete(rid))

        menu.exec_(QCursor.pos())
        self.controller.clear_active()

    def _restyle(self, rid: str, kind: StyleKind):
        self._set_annotations([
            r.with_style(kind) if r.range_id == rid else r for r in self.annotations
        ])

    def _delete(self, rid: str):
        self._set_annotations([r for r in self.annotations if r.range_id != rid])

    def _update_status(self, page_index: int, zoom: float):
        total = len(self.document) if self.document is not None else 0
        self.status_label.setText(
            f"Page {page_index + 1}/{total}  ·  {zoom:.0%}  ·  "
            f"{len(self.controller.lifecycle)} marks shown"
        )

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.controller.clear_active()
            event.accept()
            return
        super().keyPressEvent(event)

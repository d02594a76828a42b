"""
Graphics view showing one PDF page with its annotation overlays.
"""
import logging
from typing import Optional

import fitz  # PyMuPDF
from PyQt5.QtCore import QEvent, Qt, pyqtSignal
from PyQt5.QtGui import QImage, QPainter, QPixmap
from PyQt5.QtWidgets import QGraphicsPixmapItem, QGraphicsScene, QGraphicsView

from ..controllers.overlay_controller import OverlayController
from ..core.layout import PdfBoxProvider

log = logging.getLogger(__name__)

MIN_ZOOM = 0.5
MAX_ZOOM = 5.0
ZOOM_STEP = 1.1


class OverlayPageView(QGraphicsView):
    """Renders a page with PyMuPDF and feeds pointer input to the overlays."""

    # Signals
    page_rendered = pyqtSignal(int, float)  # page index, zoom

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setScene(QGraphicsScene(self))
        self.setMouseTracking(True)
        self.viewport().setAttribute(Qt.WA_AcceptTouchEvents, True)
        self.setRenderHint(QPainter.Antialiasing)

        self.document: Optional[fitz.Document] = None
        self.page_index = 0
        self.zoom = 1.5
        self.page_item: Optional[QGraphicsPixmapItem] = None

        self.box_provider: Optional[PdfBoxProvider] = None
        self.controller: Optional[OverlayController] = None

    def attach(self, controller: OverlayController) -> None:
        self.controller = controller

    def set_document(self, document: fitz.Document) -> PdfBoxProvider:
        """
        Show a new document from its first page.

        Returns:
            The box provider for the document's text
        """
        self.document = document
        self.page_index = 0
        self.box_provider = PdfBoxProvider(document, self.zoom)
        return self.box_provider

    def show_page(self, page_index: int) -> None:
        if self.document is None or not 0 <= page_index < len(self.document):
            return
        self.page_index = page_index
        self.render_page()

    def set_zoom(self, zoom: float) -> None:
        zoom = max(MIN_ZOOM, min(MAX_ZOOM, zoom))
        if zoom == self.zoom:
            return
        self.zoom = zoom
        self.render_page()

    def render_page(self) -> None:
        """Render the current page and signal the overlays to rebuild."""
        if self.document is None:
            return

        page = self.document.load_page(self.page_index)
        mat = fitz.Matrix(self.zoom, self.zoom)
        pix = page.get_pixmap(matrix=mat, alpha=False)
        img = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)

        night_mode = self.controller is not None and self.controller.theme.night_mode
        if night_mode:
            img.invertPixels()

        pixmap = QPixmap.fromImage(img)
        if self.page_item is None:
            self.page_item = self.scene().addPixmap(pixmap)
            self.page_item.setZValue(0)
        else:
            self.page_item.setPixmap(pixmap)
        self.scene().setSceneRect(self.page_item.boundingRect())

        if self.box_provider is not None:
            self.box_provider.set_zoom(self.zoom)
        if self.controller is not None:
            self.controller.on_rendered()
        self.page_rendered.emit(self.page_index, self.zoom)

    def mouseMoveEvent(self, event):
        if self.controller is not None:
            self.controller.pointer_moved(self.itemAt(event.pos()), "mouse")
        super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        if self.controller is not None:
            self.controller.pointer_left(None)
        super().leaveEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton and self.controller is not None:
            if self.controller.click(self.itemAt(event.pos())) is None:
                self.controller.clear_active()
        super().mousePressEvent(event)

    def viewportEvent(self, event):
        if event.type() == QEvent.TouchBegin and self.controller is not None:
            self.controller.touch_observed()
        return super().viewportEvent(event)

    def wheelEvent(self, event):
        if event.modifiers() & Qt.ControlModifier:
            if event.angleDelta().y() > 0:
                self.set_zoom(self.zoom * ZOOM_STEP)
            else:
                self.set_zoom(self.zoom / ZOOM_STEP)
            event.accept()
            return
        super().wheelEvent(event)

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key_Right, Qt.Key_PageDown):
            self.show_page(self.page_index + 1)
        elif event.key() in (Qt.Key_Left, Qt.Key_PageUp):
            self.show_page(self.page_index - 1)
        else:
            super().keyPressEvent(event)

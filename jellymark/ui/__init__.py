"""
Demo viewer: a PDF page with live annotation overlays.
"""
from .main_window import MainWindow
from .overlay_page_view import OverlayPageView

__all__ = ['MainWindow', 'OverlayPageView']

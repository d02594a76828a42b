"""
Layout geometry consumed by the overlay engine.
"""
from .models import RANGE_ID_ROLE, Box
from .box_provider import BoxProvider, StaticBoxProvider, find_owning_range
from .pdf_box_provider import PdfBoxProvider, make_range_id, parse_range_id

__all__ = [
    'RANGE_ID_ROLE',
    'Box',
    'BoxProvider',
    'StaticBoxProvider',
    'find_owning_range',
    'PdfBoxProvider',
    'make_range_id',
    'parse_range_id',
]

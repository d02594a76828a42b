"""
Box provider for PDF documents rendered with PyMuPDF.

Range ids address a half-open character range in the raw text order of one
page, e.g. ``page:3/chars:120-180``. They do not depend on the zoom level,
so the same id maps to new boxes whenever the page is re-rendered larger or
smaller.
"""
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import fitz  # PyMuPDF

from .box_provider import BoxProvider
from .models import Box

log = logging.getLogger(__name__)

_RID_PATTERN = re.compile(r"^page:(\d+)/chars:(\d+)-(\d+)$")


def make_range_id(page_index: int, start: int, end: int) -> str:
    """Build a range id for characters [start, end) of a page."""
    if page_index < 0 or start < 0 or end < start:
        raise ValueError(f"invalid character range {start}-{end} on page {page_index}")
    return f"page:{page_index}/chars:{start}-{end}"


def parse_range_id(rid: str) -> Optional[Tuple[int, int, int]]:
    """
    Split a range id into its parts.

    Returns:
        (page_index, start, end), or None if the id is malformed
    """
    match = _RID_PATTERN.match(rid or "")
    if not match:
        return None
    page_index, start, end = (int(g) for g in match.groups())
    if end < start:
        return None
    return page_index, start, end


@dataclass
class _PageChar:
    char: str
    bbox: Tuple[float, float, float, float]
    line_key: Tuple[int, int]  # (block index, line index)


class PdfBoxProvider(BoxProvider):
    """Maps character-range ids to line boxes of a fitz document."""

    def __init__(self, document: fitz.Document, zoom: float = 1.0):
        self.document = document
        self.zoom = zoom
        self._pages: Dict[int, List[_PageChar]] = {}

    def set_zoom(self, zoom: float) -> None:
        if zoom <= 0:
            raise ValueError(f"zoom must be positive, got {zoom}")
        self.zoom = zoom

    def invalidate(self) -> None:
        """Drop cached text structure (after the document changed)."""
        self._pages.clear()

    def _page_chars(self, page_index: int) -> List[_PageChar]:
        if page_index in self._pages:
            return self._pages[page_index]

        chars: List[_PageChar] = []
        if 0 <= page_index < len(self.document):
            flags = fitz.TEXT_PRESERVE_WHITESPACE | fitz.TEXT_PRESERVE_LIGATURES
            try:
                text_dict = self.document[page_index].get_text("rawdict", flags=flags)
            except RuntimeError as e:
                log.warning("Failed to extract text of page %d: %s", page_index, e)
                text_dict = {}

            for block_idx, block_data in enumerate(text_dict.get("blocks", [])):
                # Skip image blocks
                if block_data.get("type") != 0:
                    continue
                for line_idx, line_data in enumerate(block_data.get("lines", [])):
                    for span_data in line_data.get("spans", []):
                        for char_data in span_data.get("chars", []):
                            chars.append(_PageChar(
                                char=char_data.get("c", ""),
                                bbox=tuple(char_data.get("bbox", (0, 0, 0, 0))),
                                line_key=(block_idx, line_idx),
                            ))

        self._pages[page_index] = chars
        return chars

    def page_text(self, page_index: int) -> str:
        """Raw text of a page in the character order range ids refer to."""
        return "".join(c.char for c in self._page_chars(page_index))

    def find_text_range(self, page_index: int, text: str) -> Optional[str]:
        """
        Range id of the first occurrence of a text on a page.

        Returns:
            The range id, or None if the text does not occur
        """
        if not text:
            return None
        start = self.page_text(page_index).find(text)
        if start < 0:
            return None
        return make_range_id(page_index, start, start + len(text))

    def excerpt(self, rid: str) -> str:
        parsed = parse_range_id(rid)
        if parsed is None:
            return ""
        page_index, start, end = parsed
        return self.page_text(page_index)[start:end]

    def get_boxes_for_range(self, rid: str) -> List[Box]:
        parsed = parse_range_id(rid)
        if parsed is None:
            log.debug("Not a PDF range id: %r", rid)
            return []

        page_index, start, end = parsed
        chars = self._page_chars(page_index)[start:end]

        # One box per text line, in layout order
        lines: Dict[Tuple[int, int], List[float]] = {}
        for char in chars:
            x0, y0, x1, y1 = char.bbox
            bounds = lines.get(char.line_key)
            if bounds is None:
                lines[char.line_key] = [x0, y0, x1, y1]
            else:
                bounds[0] = min(bounds[0], x0)
                bounds[1] = min(bounds[1], y0)
                bounds[2] = max(bounds[2], x1)
                bounds[3] = max(bounds[3], y1)

        boxes = [Box.from_points(*bounds).scaled(self.zoom) for bounds in lines.values()]
        boxes.sort(key=lambda b: (b.y, b.x))
        return boxes

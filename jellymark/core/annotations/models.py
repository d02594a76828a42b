import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

log = logging.getLogger(__name__)


class StyleKind(Enum):
    HIGHLIGHT = "highlight"
    UNDERLINE = "underline"
    WAVY = "wavy"

    @classmethod
    def parse(cls, value) -> "StyleKind":
        """
        Convert a stored style value to a StyleKind.

        Unknown or empty values fall back to HIGHLIGHT.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        if value:
            log.warning("Unknown annotation style %r, painting as highlight", value)
        return cls.HIGHLIGHT


@dataclass(frozen=True)
class AnnotationRecord:
    """A marked span of a document, as stored by the annotation source."""
    id: str
    range_id: str  # reflow-stable span locator
    style_kind: StyleKind = StyleKind.HIGHLIGHT
    excerpt: str = ""

    # Carried for the annotation list UI
    created: str = ""
    document_id: str = ""
    note: Optional[str] = None

    def with_style(self, style_kind: StyleKind) -> "AnnotationRecord":
        """Copy of this record with another style."""
        return AnnotationRecord(
            id=self.id,
            range_id=self.range_id,
            style_kind=style_kind,
            excerpt=self.excerpt,
            created=self.created,
            document_id=self.document_id,
            note=self.note,
        )

    def to_dict(self):
        """Convert record to dictionary for JSON serialization."""
        data = {
            'id': self.id,
            'range_id': self.range_id,
            'type': self.style_kind.value,
            'text_excerpt': self.excerpt,
            'created': self.created,
            'document_id': self.document_id,
        }

        if self.note is not None:
            data['note'] = self.note

        return data

    @staticmethod
    def from_dict(data):
        """
        Create record from dictionary.

        Accepts the flat shape written by to_dict, the flat shape of the
        markup store (cfi_range, type, text_excerpt, book_id) and the nested
        shape where those fields live under a "markup" key.

        Raises:
            ValueError: If no range locator can be found
        """
        if not isinstance(data, dict):
            raise ValueError(f"annotation entry is not an object: {data!r}")

        markup = data.get('markup') if isinstance(data.get('markup'), dict) else {}

        def pick(*keys, default=None):
            for source in (markup, data):
                for key in keys:
                    value = source.get(key)
                    if value not in (None, ""):
                        return value
            return default

        range_id = pick('range_id', 'cfi_range', 'cfi')
        if not range_id:
            raise ValueError(f"annotation {data.get('id')!r} has no range locator")

        note = data.get('note')
        if isinstance(note, dict):
            note = note.get('content')

        return AnnotationRecord(
            id=str(data.get('id') or markup.get('id') or range_id),
            range_id=str(range_id),
            style_kind=StyleKind.parse(pick('style', 'type')),
            excerpt=str(pick('text_excerpt', 'excerpt', 'text', default="")),
            created=str(pick('created', default="")),
            document_id=str(pick('document_id', 'book_id', default="")),
            note=note if note else None,
        )

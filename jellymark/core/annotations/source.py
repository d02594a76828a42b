"""
Read-only annotation sources consumed by the overlay engine.
"""
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .models import AnnotationRecord

log = logging.getLogger(__name__)


def sort_newest_first(records: Iterable[AnnotationRecord]) -> List[AnnotationRecord]:
    """Order records by creation time, newest first (stable for ties)."""
    return sorted(records, key=lambda r: r.created, reverse=True)


class AnnotationSource(ABC):
    """Provides the annotation list of a document."""

    @abstractmethod
    def list_annotations(self, document_id: str) -> List[AnnotationRecord]:
        """
        Get all annotations of a document.

        Args:
            document_id: Identifier of the document

        Returns:
            Records ordered by creation time, newest first
        """


class InMemoryAnnotationSource(AnnotationSource):
    """Annotation source backed by a plain list."""

    def __init__(self, records: Optional[Iterable[AnnotationRecord]] = None):
        self.records: List[AnnotationRecord] = list(records or [])

    def add(self, record: AnnotationRecord) -> None:
        self.records.append(record)

    def remove(self, record_id: str) -> bool:
        """
        Remove a record by id.

        Returns:
            True if a record was removed
        """
        before = len(self.records)
        self.records = [r for r in self.records if r.id != record_id]
        return len(self.records) != before

    def list_annotations(self, document_id: str) -> List[AnnotationRecord]:
        return sort_newest_first(
            r for r in self.records
            if not r.document_id or not document_id or r.document_id == document_id
        )


class JsonAnnotationSource(AnnotationSource):
    """
    Annotation source reading a JSON export from disk.

    The file holds either a bare list of records or an object with an
    "annotations" list. Entries that cannot be parsed are skipped.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path

    def _read_entries(self) -> list:
        if not os.path.exists(self.file_path):
            return []

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("Failed to load annotations from %s: %s", self.file_path, e)
            return []

        if isinstance(data, dict):
            data = data.get('annotations', [])
        if not isinstance(data, list):
            log.warning("Annotation file %s has no annotation list", self.file_path)
            return []
        return data

    def list_annotations(self, document_id: str) -> List[AnnotationRecord]:
        records = []
        for entry in self._read_entries():
            try:
                record = AnnotationRecord.from_dict(entry)
            except ValueError as e:
                log.warning("Skipping malformed annotation: %s", e)
                continue
            if document_id and record.document_id and record.document_id != document_id:
                continue
            records.append(record)
        return sort_newest_first(records)

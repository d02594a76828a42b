"""
Annotation records and the sources they are read from.
"""
from .models import AnnotationRecord, StyleKind
from .source import (
    AnnotationSource,
    InMemoryAnnotationSource,
    JsonAnnotationSource,
    sort_newest_first,
)

__all__ = [
    'AnnotationRecord',
    'StyleKind',
    'AnnotationSource',
    'InMemoryAnnotationSource',
    'JsonAnnotationSource',
    'sort_newest_first',
]

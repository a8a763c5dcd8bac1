"""Output location tracking and document persistence."""

from .scope import ScopeTracker
from .sink import DocumentSink, FileDocumentSink, MemoryDocumentSink

__all__ = [
    "ScopeTracker",
    "DocumentSink",
    "FileDocumentSink",
    "MemoryDocumentSink",
]

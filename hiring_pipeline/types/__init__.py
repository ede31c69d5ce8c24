"""Type definitions for external collaborators."""

from hiring_pipeline.types.collaborators import DocumentStore, RecordStore

__all__ = [
    "DocumentStore",
    "RecordStore",
]

"""
JurisBinder Gate

A single authoritative gate over a legal case-management record store.
"""

import importlib.metadata

__version__ = importlib.metadata.version("jurisbinder-gate")

from .domain import Case, Document, DocumentStatus, TraceEvent
from .gate import Gate, GateError
from .store import InMemoryRecordStore, RecordStore, create_record_store

__all__ = [
    "Case",
    "Document",
    "DocumentStatus",
    "Gate",
    "GateError",
    "InMemoryRecordStore",
    "RecordStore",
    "TraceEvent",
    "create_record_store",
]

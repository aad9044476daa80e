"""
Record store abstraction for the JurisBinder gate.

v0: in-memory maps (process lifetime only)
v1: SQL tables via SQLAlchemy (see ``jurisbinder_gate.db.store``)

The gate depends on storage only through this narrow CRUD interface.
Implementations return copies: callers mutate what they get back and hand it
to ``update_document`` to commit.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain import BranchCode, Case, Document, Link, TraceEvent


class RecordStore(ABC):
    """Abstract base class for case, document and trace storage."""

    # Cases

    @abstractmethod
    def get_case(self, case_id: str) -> Optional[Case]:
        """Return a copy of the case, or None if absent."""
        pass

    @abstractmethod
    def list_case_ids(self) -> List[str]:
        """Return the identities of all stored cases."""
        pass

    @abstractmethod
    def insert_case(self, case: Case) -> Case:
        """Store a new case. Raises ValueError if the id is taken."""
        pass

    @abstractmethod
    def add_link(self, case_id: str, link: Link) -> None:
        """Append a link to an existing case."""
        pass

    @abstractmethod
    def remove_link(self, case_id: str, link_id: str) -> None:
        """Drop a link from a case. Used to undo a link whose trace failed."""
        pass

    # Documents

    @abstractmethod
    def get_document(self, document_id: str) -> Optional[Document]:
        """Return a copy of the document, or None if absent."""
        pass

    @abstractmethod
    def find_documents(
        self, case_id: str, branch_code: Optional[BranchCode] = None
    ) -> List[Document]:
        """Return copies of the documents of a case, in insertion order."""
        pass

    @abstractmethod
    def insert_document(self, document: Document) -> Document:
        """Add a document to the flat index."""
        pass

    @abstractmethod
    def update_document(self, document: Document) -> Document:
        """Replace the stored document with the given state."""
        pass

    @abstractmethod
    def delete_document(self, document_id: str) -> None:
        """Remove a document from the index. Used to undo a failed ingest."""
        pass

    # Trace events

    @abstractmethod
    def append_trace(self, event: TraceEvent) -> TraceEvent:
        """Append a trace event. Trace events are never modified."""
        pass

    @abstractmethod
    def list_traces(self, case_id: str) -> List[TraceEvent]:
        """Return the trace events of a case in insertion order."""
        pass

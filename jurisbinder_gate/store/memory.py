"""In-memory record store."""
from __future__ import annotations

import threading
from typing import Dict, List, Optional

from ..domain import BranchCode, Case, Document, Link, TraceEvent
from .base import RecordStore


class InMemoryRecordStore(RecordStore):
    """Record store backed by index-keyed dicts.

    Structure:
        cases:     case_id -> Case
        documents: document_id -> Document (flat index, insertion ordered)
        traces:    case_id -> [TraceEvent, ...] (append-only)

    Reads hand out deep copies taken under the lock, so a reader never sees a
    structure while another thread is changing it.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._cases: Dict[str, Case] = {}
        self._documents: Dict[str, Document] = {}
        self._traces: Dict[str, List[TraceEvent]] = {}

    def get_case(self, case_id: str) -> Optional[Case]:
        with self._lock:
            case = self._cases.get(case_id)
            return case.model_copy(deep=True) if case else None

    def list_case_ids(self) -> List[str]:
        with self._lock:
            return list(self._cases)

    def insert_case(self, case: Case) -> Case:
        with self._lock:
            if case.case_id in self._cases:
                raise ValueError(f"Case {case.case_id} already exists")
            self._cases[case.case_id] = case.model_copy(deep=True)
            return case

    def add_link(self, case_id: str, link: Link) -> None:
        with self._lock:
            case = self._cases.get(case_id)
            if case is None:
                raise KeyError(case_id)
            case.links.append(link.model_copy(deep=True))

    def remove_link(self, case_id: str, link_id: str) -> None:
        with self._lock:
            case = self._cases.get(case_id)
            if case is None:
                raise KeyError(case_id)
            case.links = [link for link in case.links if link.link_id != link_id]

    def get_document(self, document_id: str) -> Optional[Document]:
        with self._lock:
            document = self._documents.get(document_id)
            return document.model_copy(deep=True) if document else None

    def find_documents(
        self, case_id: str, branch_code: Optional[BranchCode] = None
    ) -> List[Document]:
        with self._lock:
            return [
                document.model_copy(deep=True)
                for document in self._documents.values()
                if document.case_id == case_id
                and (branch_code is None or document.branch_code == branch_code)
            ]

    def insert_document(self, document: Document) -> Document:
        with self._lock:
            if document.document_id in self._documents:
                raise ValueError(f"Document {document.document_id} already exists")
            self._documents[document.document_id] = document.model_copy(deep=True)
            return document

    def update_document(self, document: Document) -> Document:
        with self._lock:
            if document.document_id not in self._documents:
                raise KeyError(document.document_id)
            self._documents[document.document_id] = document.model_copy(deep=True)
            return document

    def delete_document(self, document_id: str) -> None:
        with self._lock:
            self._documents.pop(document_id, None)

    def append_trace(self, event: TraceEvent) -> TraceEvent:
        with self._lock:
            self._traces.setdefault(event.case_id, []).append(event)
            return event

    def list_traces(self, case_id: str) -> List[TraceEvent]:
        with self._lock:
            return list(self._traces.get(case_id, []))

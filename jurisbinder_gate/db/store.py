"""SQL-backed record store."""

from __future__ import annotations

import threading
from typing import List, Optional

from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from ..domain import BranchCode, Case, Document, Link, TraceEvent
from ..store.base import RecordStore
from .base import create_db_engine, get_session_factory, init_database
from .models import CaseModel, DocumentModel, TraceEventModel


class SqlRecordStore(RecordStore):
    """Record store persisted through SQLAlchemy.

    Usage:
        store = SqlRecordStore.from_url("sqlite:///./jurisbinder.db")
        store.insert_case(case)
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory: sessionmaker = get_session_factory(engine)
        # SQLite shares one connection across threads
        self._lock = threading.RLock()

    @classmethod
    def from_url(cls, database_url: Optional[str] = None) -> "SqlRecordStore":
        """Create the engine and tables for a database URL."""
        engine = create_db_engine(database_url)
        init_database(engine)
        return cls(engine)

    # Cases

    def get_case(self, case_id: str) -> Optional[Case]:
        with self._lock, self._session_factory() as db:
            row = db.get(CaseModel, case_id)
            return row.to_domain() if row else None

    def list_case_ids(self) -> List[str]:
        with self._lock, self._session_factory() as db:
            return [
                case_id
                for (case_id,) in db.query(CaseModel.case_id).order_by(
                    CaseModel.created_at
                )
            ]

    def insert_case(self, case: Case) -> Case:
        with self._lock, self._session_factory() as db:
            if db.get(CaseModel, case.case_id) is not None:
                raise ValueError(f"Case {case.case_id} already exists")
            db.add(CaseModel.from_domain(case))
            db.commit()
            return case

    def add_link(self, case_id: str, link: Link) -> None:
        with self._lock, self._session_factory() as db:
            row = db.get(CaseModel, case_id)
            if row is None:
                raise KeyError(case_id)
            # Reassign so the JSON column is flagged dirty
            row.links = [*(row.links or []), link.model_dump(mode="json")]
            db.commit()

    def remove_link(self, case_id: str, link_id: str) -> None:
        with self._lock, self._session_factory() as db:
            row = db.get(CaseModel, case_id)
            if row is None:
                raise KeyError(case_id)
            row.links = [link for link in (row.links or []) if link.get("link_id") != link_id]
            db.commit()

    # Documents

    def get_document(self, document_id: str) -> Optional[Document]:
        with self._lock, self._session_factory() as db:
            row = (
                db.query(DocumentModel)
                .filter(DocumentModel.document_id == document_id)
                .first()
            )
            return row.to_domain() if row else None

    def find_documents(
        self, case_id: str, branch_code: Optional[BranchCode] = None
    ) -> List[Document]:
        with self._lock, self._session_factory() as db:
            query = db.query(DocumentModel).filter(DocumentModel.case_id == case_id)
            if branch_code is not None:
                query = query.filter(
                    DocumentModel.branch_code == BranchCode(branch_code).value
                )
            return [row.to_domain() for row in query.order_by(DocumentModel.id)]

    def insert_document(self, document: Document) -> Document:
        with self._lock, self._session_factory() as db:
            exists = (
                db.query(DocumentModel.id)
                .filter(DocumentModel.document_id == document.document_id)
                .first()
            )
            if exists is not None:
                raise ValueError(f"Document {document.document_id} already exists")
            row = DocumentModel()
            row.apply(document)
            db.add(row)
            db.commit()
            return document

    def update_document(self, document: Document) -> Document:
        with self._lock, self._session_factory() as db:
            row = (
                db.query(DocumentModel)
                .filter(DocumentModel.document_id == document.document_id)
                .first()
            )
            if row is None:
                raise KeyError(document.document_id)
            row.apply(document)
            db.commit()
            return document

    def delete_document(self, document_id: str) -> None:
        with self._lock, self._session_factory() as db:
            db.query(DocumentModel).filter(
                DocumentModel.document_id == document_id
            ).delete()
            db.commit()

    # Trace events

    def append_trace(self, event: TraceEvent) -> TraceEvent:
        with self._lock, self._session_factory() as db:
            db.add(TraceEventModel.from_domain(event))
            db.commit()
            return event

    def list_traces(self, case_id: str) -> List[TraceEvent]:
        with self._lock, self._session_factory() as db:
            rows = (
                db.query(TraceEventModel)
                .filter(TraceEventModel.case_id == case_id)
                .order_by(TraceEventModel.id)
            )
            return [row.to_domain() for row in rows]

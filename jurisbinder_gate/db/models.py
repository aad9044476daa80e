"""
SQLAlchemy models for the JurisBinder record store.

Nested structures (branches, parties, links, artifacts, trace objects) are
stored as JSON; the columns the gate filters on are first-class and indexed.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, Text

from ..domain import Case, Document, TraceEvent
from .base import Base


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored values are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CaseModel(Base):
    """SQLAlchemy model for cases."""

    __tablename__ = "cases"

    case_id = Column(String(128), primary_key=True)
    case_title = Column(String(512), nullable=False)
    jurisdiction = Column(String(256), nullable=False, default="")
    confidentiality_level = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    branches = Column(JSON, nullable=False, default=list)
    parties = Column(JSON, nullable=False, default=list)
    links = Column(JSON, nullable=False, default=list)

    @classmethod
    def from_domain(cls, case: Case) -> "CaseModel":
        data = case.model_dump(mode="json")
        for branch in data["branches"]:
            branch.pop("documents", None)
        return cls(
            case_id=case.case_id,
            case_title=case.case_title,
            jurisdiction=case.jurisdiction,
            confidentiality_level=case.confidentiality_level.value,
            created_at=case.created_at,
            branches=data["branches"],
            parties=data["parties"],
            links=data["links"],
        )

    def to_domain(self) -> Case:
        return Case.model_validate(
            {
                "case_id": self.case_id,
                "case_title": self.case_title,
                "jurisdiction": self.jurisdiction,
                "confidentiality_level": self.confidentiality_level,
                "created_at": _as_utc(self.created_at),
                "branches": self.branches or [],
                "parties": self.parties or [],
                "links": self.links or [],
            }
        )


class DocumentModel(Base):
    """SQLAlchemy model for the flat document index."""

    __tablename__ = "documents"

    # Surrogate key preserves insertion order
    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(128), nullable=False, unique=True)
    case_id = Column(String(128), nullable=False, index=True)
    branch_code = Column(String(16), nullable=False)
    status = Column(String(32), nullable=False, index=True)
    registered_at = Column(DateTime(timezone=True), nullable=False)

    # "metadata" is reserved on declarative classes
    doc_metadata = Column("metadata", JSON, nullable=False, default=dict)
    artifacts = Column(JSON, nullable=False, default=list)

    __table_args__ = (Index("ix_documents_case_branch", "case_id", "branch_code"),)

    def apply(self, document: Document) -> None:
        data = document.model_dump(mode="json")
        self.document_id = document.document_id
        self.case_id = document.case_id
        self.branch_code = document.branch_code.value
        self.status = document.status.value
        self.registered_at = document.registered_at
        self.doc_metadata = data["metadata"]
        self.artifacts = data["artifacts"]

    def to_domain(self) -> Document:
        return Document.model_validate(
            {
                "document_id": self.document_id,
                "case_id": self.case_id,
                "branch_code": self.branch_code,
                "status": self.status,
                "registered_at": _as_utc(self.registered_at),
                "metadata": self.doc_metadata or {},
                "artifacts": self.artifacts or [],
            }
        )


class TraceEventModel(Base):
    """SQLAlchemy model for append-only trace events."""

    __tablename__ = "trace_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(128), nullable=False, unique=True)
    case_id = Column(String(128), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    actor = Column(String(64), nullable=False)
    event_type = Column(String(128), nullable=False, index=True)
    objects = Column(JSON, nullable=False, default=list)
    details = Column(JSON, nullable=False, default=dict)
    summary = Column(Text, nullable=True)

    __table_args__ = (Index("ix_trace_events_case_timestamp", "case_id", "timestamp"),)

    @classmethod
    def from_domain(cls, event: TraceEvent) -> "TraceEventModel":
        data = event.model_dump(mode="json")
        return cls(
            event_id=event.event_id,
            case_id=event.case_id,
            timestamp=event.timestamp,
            actor=event.actor,
            event_type=event.event_type,
            objects=data["objects"],
            details=data["details"],
            summary=event.details.get("summary"),
        )

    def to_domain(self) -> TraceEvent:
        return TraceEvent.model_validate(
            {
                "event_id": self.event_id,
                "case_id": self.case_id,
                "timestamp": _as_utc(self.timestamp),
                "actor": self.actor,
                "event_type": self.event_type,
                "objects": self.objects or [],
                "details": self.details or {},
            }
        )

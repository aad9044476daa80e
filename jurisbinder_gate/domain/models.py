"""
JurisBinder record model.

Cases own a fixed set of branches, a set of parties and the links created
through the gate. Documents live in a flat index keyed by id; a branch's
documents are derived by filtering that index and are never stored on the
branch itself.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from .enums import (
    BranchCode,
    ConfidentialityLevel,
    DocumentStatus,
    IsolationLevel,
    ObjectType,
    PartyRole,
)

SYSTEM_CASE_ID = "SYSTEM"
DEFAULT_MIME_TYPE = "application/octet-stream"


def generate_id(prefix: str) -> str:
    """Generate a prefixed unique identifier, e.g. ``DOC-3f2a...``."""
    return f"{prefix}-{uuid.uuid4().hex}"


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class ObjectRef(BaseModel):
    """Reference to an addressable object (type + id)."""

    model_config = ConfigDict(extra="forbid")

    object_type: constr(min_length=1, max_length=64) = Field(
        ..., description="Kind of object, e.g. DOCUMENT"
    )
    object_id: constr(min_length=1, max_length=128) = Field(
        ..., description="Identifier of the referenced object"
    )

    @classmethod
    def document(cls, document_id: str) -> "ObjectRef":
        return cls(object_type=ObjectType.DOCUMENT.value, object_id=document_id)


class Artifact(BaseModel):
    """Pointer to externally stored content belonging to a document."""

    artifact_id: str = Field(default_factory=lambda: generate_id("ART"))
    document_id: str
    filename: constr(min_length=1, max_length=512)
    storage_ref: constr(min_length=1, max_length=2000)
    mime_type: str = DEFAULT_MIME_TYPE
    created_at: datetime = Field(default_factory=utc_now)


class Document(BaseModel):
    """A document registered in a case.

    Invariant: ``status`` is always a DocumentStatus and only changes along
    the transitions allowed by the state machine.
    """

    document_id: str = Field(default_factory=lambda: generate_id("DOC"))
    case_id: str
    branch_code: BranchCode
    status: DocumentStatus = DocumentStatus.INBOX
    registered_at: datetime = Field(default_factory=utc_now)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    artifacts: List[Artifact] = Field(default_factory=list)

    def ref(self) -> ObjectRef:
        return ObjectRef.document(self.document_id)


class Branch(BaseModel):
    """Logical partition of a case.

    ``documents`` is only filled in on enriched reads.
    """

    branch_id: str
    branch_code: BranchCode
    branch_label: str
    isolation_level: IsolationLevel = IsolationLevel.STRICT_WITH_REFERENCES
    documents: List[Document] = Field(default_factory=list)


class Party(BaseModel):
    """A person or organisation involved in a case."""

    model_config = ConfigDict(frozen=True)

    party_role: PartyRole
    display_label: constr(min_length=1, max_length=256)
    notes: str = ""


class Link(BaseModel):
    """A justified relation between two addressable objects of one case."""

    link_id: str = Field(default_factory=lambda: generate_id("LINK"))
    from_object: ObjectRef
    to_object: ObjectRef
    justification: str
    link_type: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class Case(BaseModel):
    """A legal matter with its fixed branches, parties and links."""

    case_id: constr(min_length=1, max_length=128)
    case_title: constr(min_length=1, max_length=512)
    jurisdiction: str = ""
    confidentiality_level: ConfidentialityLevel = ConfidentialityLevel.LEGAL_PRIVILEGED
    created_at: datetime = Field(default_factory=utc_now)
    branches: List[Branch] = Field(default_factory=list)
    parties: List[Party] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)


class TraceEvent(BaseModel):
    """Append-only audit record of one accepted mutation."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: generate_id("TRACE"))
    case_id: str = SYSTEM_CASE_ID
    timestamp: datetime = Field(default_factory=utc_now)
    actor: str
    event_type: str
    objects: List[ObjectRef] = Field(default_factory=list)
    details: Dict[str, Any] = Field(default_factory=dict)

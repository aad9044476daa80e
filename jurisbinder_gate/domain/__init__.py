"""Record model for cases, documents and trace events."""

from .enums import (
    BRANCH_LABELS,
    BranchCode,
    ConfidentialityLevel,
    DocumentStatus,
    IsolationLevel,
    ObjectType,
    PartyRole,
)
from .models import (
    DEFAULT_MIME_TYPE,
    SYSTEM_CASE_ID,
    Artifact,
    Branch,
    Case,
    Document,
    Link,
    ObjectRef,
    Party,
    TraceEvent,
    generate_id,
    utc_now,
)

__all__ = [
    "BRANCH_LABELS",
    "DEFAULT_MIME_TYPE",
    "SYSTEM_CASE_ID",
    "Artifact",
    "Branch",
    "BranchCode",
    "Case",
    "ConfidentialityLevel",
    "Document",
    "DocumentStatus",
    "IsolationLevel",
    "Link",
    "ObjectRef",
    "ObjectType",
    "Party",
    "PartyRole",
    "TraceEvent",
    "generate_id",
    "utc_now",
]

"""
Canonical enums for the JurisBinder record model.

Every case carries the full set of branch codes; documents move through the
statuses defined here only along the transitions in ``gate.state_machine``.
"""

from enum import Enum


class BranchCode(str, Enum):
    """Fixed logical partitions of a case's documents."""

    ADMIN = "ADMIN"
    FACT = "FACT"
    PEN = "PEN"
    CIV = "CIV"
    ADM = "ADM"
    MED = "MED"
    EXP = "EXP"
    COR = "COR"
    EVD = "EVD"
    ANA = "ANA"
    STR = "STR"
    PRC = "PRC"
    ARC = "ARC"


BRANCH_LABELS = {
    BranchCode.ADMIN: "Administration & governance",
    BranchCode.FACT: "Factual chronology & context",
    BranchCode.PEN: "Criminal",
    BranchCode.CIV: "Civil",
    BranchCode.ADM: "Administrative",
    BranchCode.MED: "Medical",
    BranchCode.EXP: "Expert reports / independent expertise",
    BranchCode.COR: "Correspondence (non-procedural)",
    BranchCode.EVD: "Evidence repository (digital/physical references)",
    BranchCode.ANA: "Analyses (legal/medical/factual syntheses)",
    BranchCode.STR: "Strategy (non-disclosable internal work product)",
    BranchCode.PRC: "Procedure (filings, deadlines, court steps)",
    BranchCode.ARC: "Archives (frozen/closed material)",
}


class DocumentStatus(str, Enum):
    """Lifecycle states of a document."""

    INBOX = "INBOX"
    REGISTERED = "REGISTERED"
    CLASSIFIED = "CLASSIFIED"
    QUALIFIED = "QUALIFIED"
    EXHIBIT_READY = "EXHIBIT_READY"
    FILED = "FILED"
    FROZEN = "FROZEN"
    ARCHIVED = "ARCHIVED"
    DUPLICATE = "DUPLICATE"
    DISPUTED = "DISPUTED"
    REDACTED = "REDACTED"
    ERROR = "ERROR"


class IsolationLevel(str, Enum):
    """How strictly a branch is walled off from the rest of the case."""

    STRICT = "STRICT"
    STRICT_WITH_REFERENCES = "STRICT_WITH_REFERENCES"
    SHARED = "SHARED"


class ConfidentialityLevel(str, Enum):
    """Confidentiality classification of a case."""

    PUBLIC = "PUBLIC"
    CONFIDENTIAL = "CONFIDENTIAL"
    LEGAL_PRIVILEGED = "LEGAL_PRIVILEGED"
    SEALED = "SEALED"


class PartyRole(str, Enum):
    """Role a party plays in a case."""

    SELF = "SELF"
    COUNTERPARTY = "COUNTERPARTY"
    THIRD_PARTY = "THIRD_PARTY"
    COUNSEL = "COUNSEL"
    COURT = "COURT"
    WITNESS = "WITNESS"


class ObjectType(str, Enum):
    """Kinds of addressable objects that trace events and links refer to."""

    CASE = "CASE"
    BRANCH = "BRANCH"
    DOCUMENT = "DOCUMENT"
    ARTIFACT = "ARTIFACT"
    PARTY = "PARTY"
    LINK = "LINK"

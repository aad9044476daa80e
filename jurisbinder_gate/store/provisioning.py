"""
Case provisioning.

Cases are created outside the gate; this module builds them with the full,
fixed set of branches so that every case exposes all branch codes.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

import structlog

from ..domain import (
    BRANCH_LABELS,
    Branch,
    BranchCode,
    Case,
    ConfidentialityLevel,
    IsolationLevel,
    Party,
    PartyRole,
)
from .base import RecordStore

logger = structlog.get_logger()

DEMO_CASE_ID = "CASE-2024-001"


def branch_id_for(case_id: str, code: BranchCode) -> str:
    """Derive a branch identity from its case identity and code.

    ``CASE-2024-001`` + ``EVD`` -> ``BRANCH-2024-001-EVD``
    """
    suffix = case_id[len("CASE-"):] if case_id.startswith("CASE-") else case_id
    return f"BRANCH-{suffix}-{code.value}"


def build_branches(
    case_id: str,
    isolation_level: IsolationLevel = IsolationLevel.STRICT_WITH_REFERENCES,
) -> List[Branch]:
    """Build one branch per branch code, in the canonical order."""
    return [
        Branch(
            branch_id=branch_id_for(case_id, code),
            branch_code=code,
            branch_label=BRANCH_LABELS[code],
            isolation_level=isolation_level,
        )
        for code in BranchCode
    ]


def build_case(
    case_id: str,
    case_title: str,
    jurisdiction: str = "",
    confidentiality_level: ConfidentialityLevel = ConfidentialityLevel.LEGAL_PRIVILEGED,
    parties: Optional[Iterable[Party]] = None,
) -> Case:
    """Build a new case carrying every fixed branch."""
    return Case(
        case_id=case_id,
        case_title=case_title,
        jurisdiction=jurisdiction,
        confidentiality_level=confidentiality_level,
        branches=build_branches(case_id),
        parties=list(parties or []),
    )


def provision_case(store: RecordStore, case: Case) -> Case:
    """Insert a case into the store."""
    store.insert_case(case)
    logger.info(
        "Case provisioned",
        case_id=case.case_id,
        branches=len(case.branches),
        parties=len(case.parties),
    )
    return case


def seed_demo_case(store: RecordStore) -> Case:
    """Provision the demonstration case if it is not already present."""
    existing = store.get_case(DEMO_CASE_ID)
    if existing is not None:
        return existing

    case = build_case(
        case_id=DEMO_CASE_ID,
        case_title="Smith v. Global Logistics Corp.",
        jurisdiction="High Court of Justice",
        parties=[
            Party(
                party_role=PartyRole.SELF,
                display_label="Alice Smith",
                notes="Lead Claimant",
            ),
            Party(
                party_role=PartyRole.COUNTERPARTY,
                display_label="Global Logistics Corp.",
                notes="Primary Defendant",
            ),
        ],
    )
    return provision_case(store, case)

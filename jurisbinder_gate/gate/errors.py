"""
Typed gate errors.

Every failure the gate reports is one of the variants below. Each carries a
stable ``code`` for programmatic handling, a human-readable ``message`` and
structured ``context``. The dispatcher is the only place that converts them
into the boundary response shape.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

NOT_FOUND_CODES = frozenset({"CASE_NOT_FOUND", "OBJECT_NOT_FOUND"})


class GateError(Exception):
    """
    Base class for failures raised while handling a gate operation.

    Attributes:
        code: Stable error code for programmatic handling
        message: Human-readable error description
        context: Structured details (ids, statuses) about the failure
    """

    code = "VALIDATION_FAILED"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(f"{self.code}: {message}")

    @property
    def http_status(self) -> int:
        return 404 if self.code in NOT_FOUND_CODES else 400

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {"code": self.code, "message": self.message}


class CaseNotFound(GateError):
    code = "CASE_NOT_FOUND"

    def __init__(self, case_id: Optional[str]):
        super().__init__(f"Case {case_id} not found.", {"case_id": case_id})


class ObjectNotFound(GateError):
    code = "OBJECT_NOT_FOUND"

    def __init__(self, document_id: Optional[str], case_id: Optional[str] = None):
        if case_id is None:
            message = f"Record {document_id} missing."
        else:
            message = f"Document {document_id} not found in case {case_id}."
        super().__init__(message, {"document_id": document_id, "case_id": case_id})


class IllegalTransition(GateError):
    code = "ILLEGAL_STATUS_TRANSITION"

    def __init__(self, from_status: str, to_status: str):
        super().__init__(
            f"Transition {from_status} -> {to_status} is a compliance breach.",
            {"from_status": from_status, "to_status": to_status},
        )


class NamingNonCompliant(GateError):
    code = "FILENAME_NON_COMPLIANT"

    def __init__(self, filename: str):
        super().__init__(
            f"Filename '{filename}' violates the naming standard "
            "(CCC_YYYY-MM-DD_LABEL_token.ext).",
            {"filename": filename},
        )


class MissingJustification(GateError):
    code = "MISSING_JUSTIFICATION"

    def __init__(self, min_length: int):
        super().__init__(
            f"Audit-grade justification (min {min_length} chars) required.",
            {"min_length": min_length},
        )


class IsolationViolation(GateError):
    code = "BRANCH_ISOLATION_VIOLATION"

    def __init__(self, from_case_id: str, to_case_id: str):
        super().__init__(
            "Cross-case linking prohibited by isolation policy.",
            {"from_case_id": from_case_id, "to_case_id": to_case_id},
        )


class ValidationFailed(GateError):
    """Fallback for failures that fit no other variant."""

    code = "VALIDATION_FAILED"

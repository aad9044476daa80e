from __future__ import annotations

from typing import Any, Dict, Optional, Type

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, constr, field_validator

from ..domain import BranchCode, DocumentStatus, ObjectRef

# Operation names recognised by the gate.
CASE_GET = "case_get"
DOC_GET = "doc_get"
TRACE_QUERY = "trace_query"
DOC_INGEST = "doc_ingest"
DOC_STATUS_TRANSITION = "doc_status_transition"
DOC_RENAME = "doc_rename"
DOC_LINK_CREATE = "doc_link_create"


class GateRequest(BaseModel):
    """Common shape of every operation payload.

    Unknown keys are kept so the trace log records the payload as submitted.
    """

    model_config = ConfigDict(extra="allow")

    request_id: Optional[constr(min_length=1, max_length=256)] = None


# Read requests


class CaseGetRequest(GateRequest):
    case_id: constr(min_length=1, max_length=128)


class DocGetRequest(GateRequest):
    case_id: constr(min_length=1, max_length=128)
    document_id: constr(min_length=1, max_length=128)


class TraceQueryRequest(GateRequest):
    case_id: constr(min_length=1, max_length=128)


# Write requests


class IngestSource(BaseModel):
    """Where the ingested content lives. Content itself is never stored."""

    filename: constr(min_length=1, max_length=512)
    storage_ref: constr(min_length=1, max_length=2000)
    mime_type: Optional[constr(min_length=1, max_length=128)] = None


class DocIngestRequest(GateRequest):
    branch_code: BranchCode
    source: IngestSource
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("metadata")
    @classmethod
    def check_initial_status(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        """A supplied initial status must be a known document status.

        An empty status means the default initial status.
        """
        status = value.get("status")
        if status and status not in DocumentStatus.__members__:
            raise ValueError(f"Unknown document status '{status}'")
        return value


class DocStatusTransitionRequest(GateRequest):
    document_id: constr(min_length=1, max_length=128)
    # Plain string: an unknown target is an illegal transition, not a schema error.
    to_status: constr(min_length=1, max_length=64)


class DocRenameRequest(GateRequest):
    document_id: Optional[constr(min_length=1, max_length=128)] = None
    new_name: str


class DocLinkCreateRequest(GateRequest):
    # Endpoints are checked by the validator, after the justification.
    from_object: Optional[ObjectRef] = None
    to_object: Optional[ObjectRef] = None
    justification: Optional[str] = None
    link_type: Optional[constr(min_length=1, max_length=64)] = None


class GenericWriteRequest(GateRequest):
    """Payload of a write operation without a dedicated schema."""

    document_id: Optional[constr(min_length=1, max_length=128)] = None


READ_REQUESTS: Dict[str, Type[GateRequest]] = {
    CASE_GET: CaseGetRequest,
    DOC_GET: DocGetRequest,
    TRACE_QUERY: TraceQueryRequest,
}

WRITE_REQUESTS: Dict[str, Type[GateRequest]] = {
    DOC_INGEST: DocIngestRequest,
    DOC_STATUS_TRANSITION: DocStatusTransitionRequest,
    DOC_RENAME: DocRenameRequest,
    DOC_LINK_CREATE: DocLinkCreateRequest,
}


def parse_request(operation_name: str, payload: Dict[str, Any]) -> GateRequest:
    """Validate a payload against the schema registered for the operation.

    Raises:
        pydantic.ValidationError: if required fields are missing or malformed
    """
    model = READ_REQUESTS.get(operation_name) or WRITE_REQUESTS.get(
        operation_name, GenericWriteRequest
    )
    return model.model_validate(payload)


# Boundary


class GateSubmission(BaseModel):
    """Body of ``POST /api/gate``.

    Accepts ``toolName`` or ``operationName`` for the operation and ``caseId``
    for the case context.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "toolName": "doc_status_transition",
                "caseId": "CASE-2024-001",
                "payload": {
                    "document_id": "DOC-0f6c1e",
                    "to_status": "REGISTERED",
                    "request_id": "REQ-demo-001",
                },
            }
        },
    )

    operation_name: constr(min_length=1, max_length=128) = Field(
        ...,
        validation_alias=AliasChoices("toolName", "operationName", "operation_name"),
    )
    payload: Optional[Dict[str, Any]] = None
    case_id: Optional[constr(min_length=1, max_length=128)] = Field(
        None, validation_alias=AliasChoices("caseId", "case_id")
    )


class GateErrorBody(BaseModel):
    code: str
    message: str


class GateResult(BaseModel):
    """Unified outcome of a gate submission."""

    ok: bool
    data: Any = None
    trace_event_id: Optional[str] = None
    error: Optional[GateErrorBody] = None
    http_status: int = Field(default=200, exclude=True)

    def to_response(self) -> Dict[str, Any]:
        """Render the boundary response shape."""
        if not self.ok:
            return {"ok": False, "error": self.error.model_dump()}
        body: Dict[str, Any] = {"ok": True, "data": self.data}
        if self.trace_event_id is not None:
            body["trace_event_id"] = self.trace_event_id
        return body

"""
Mutation executor.

Applies a write operation that has already passed its validator. Operations
without a dedicated branch are acknowledged by echoing their payload; the
trace logger still records them.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import structlog

from ..domain import (
    DEFAULT_MIME_TYPE,
    Artifact,
    Document,
    DocumentStatus,
    Link,
    ObjectRef,
)
from ..schemas.gate_v1 import (
    DOC_INGEST,
    DOC_LINK_CREATE,
    DOC_STATUS_TRANSITION,
    DocIngestRequest,
    DocLinkCreateRequest,
    DocStatusTransitionRequest,
    GateRequest,
)
from ..store.base import RecordStore
from . import state_machine
from .errors import CaseNotFound, ObjectNotFound

logger = structlog.get_logger()


@dataclass
class MutationOutcome:
    """What a mutation produced and which objects it touched.

    ``undo`` reverts the applied change when its trace event cannot be written.
    """

    data: Any
    objects: List[ObjectRef] = field(default_factory=list)
    undo: Optional[Callable[[], None]] = None


def ingest_document(
    request: DocIngestRequest, case_id: Optional[str], store: RecordStore
) -> MutationOutcome:
    """Register a new document with its single source artifact."""
    if not case_id or store.get_case(case_id) is None:
        raise CaseNotFound(case_id)

    metadata = copy.deepcopy(request.metadata)
    status = DocumentStatus(metadata.pop("status", None) or state_machine.INITIAL_STATUS)

    document = Document(
        case_id=case_id,
        branch_code=request.branch_code,
        status=status,
        metadata=metadata,
    )
    document.artifacts.append(
        Artifact(
            document_id=document.document_id,
            filename=request.source.filename,
            storage_ref=request.source.storage_ref,
            mime_type=request.source.mime_type or DEFAULT_MIME_TYPE,
        )
    )
    store.insert_document(document)

    logger.info(
        "Document ingested",
        case_id=case_id,
        document_id=document.document_id,
        branch_code=document.branch_code.value,
        status=document.status.value,
    )
    return MutationOutcome(
        data=document,
        objects=[document.ref()],
        undo=lambda: store.delete_document(document.document_id),
    )


def transition_status(
    request: DocStatusTransitionRequest, store: RecordStore
) -> MutationOutcome:
    """Move a document to its new status."""
    document = store.get_document(request.document_id)
    if document is None:
        raise ObjectNotFound(request.document_id)

    previous = document.model_copy(deep=True)
    old_status = document.status
    document.status = DocumentStatus(request.to_status)
    store.update_document(document)

    logger.info(
        "Document status changed",
        document_id=document.document_id,
        from_status=old_status.value,
        to_status=document.status.value,
    )
    return MutationOutcome(
        data=document,
        objects=[document.ref()],
        undo=lambda: store.update_document(previous),
    )


def record_link(
    request: DocLinkCreateRequest,
    payload: Dict[str, Any],
    case_id: Optional[str],
    store: RecordStore,
) -> MutationOutcome:
    """Attach the link to its case and acknowledge with the payload.

    The owning case is the case context, else the case of whichever endpoint
    resolves to a stored document. A link whose case cannot be determined is
    acknowledged without being attached.
    """
    owner = case_id if case_id and store.get_case(case_id) else None
    if owner is None:
        for ref in (request.from_object, request.to_object):
            document = store.get_document(ref.object_id)
            if document is not None:
                owner = document.case_id
                break

    if owner is not None and store.get_case(owner) is not None:
        link = Link(
            from_object=request.from_object,
            to_object=request.to_object,
            justification=request.justification,
            link_type=request.link_type,
        )
        store.add_link(owner, link)
        logger.info("Link recorded", case_id=owner, link_id=link.link_id)
        return MutationOutcome(
            data=copy.deepcopy(payload),
            undo=lambda: store.remove_link(owner, link.link_id),
        )

    logger.warning("Link not attached to any case", payload=payload)
    return MutationOutcome(data=copy.deepcopy(payload))


def execute(
    operation_name: str,
    request: GateRequest,
    payload: Dict[str, Any],
    case_id: Optional[str],
    store: RecordStore,
) -> MutationOutcome:
    """Apply a validated write operation to the store."""
    if operation_name == DOC_INGEST:
        return ingest_document(request, case_id, store)
    if operation_name == DOC_STATUS_TRANSITION:
        return transition_status(request, store)
    if operation_name == DOC_LINK_CREATE:
        return record_link(request, payload, case_id, store)
    return MutationOutcome(data=copy.deepcopy(payload))

"""
Read handlers.

Pure queries against the record store. None of them mutate state, and a
well-formed query over an empty case returns empty collections rather than
failing.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from ..domain import Case, Document, TraceEvent
from ..schemas.gate_v1 import (
    CASE_GET,
    DOC_GET,
    TRACE_QUERY,
    CaseGetRequest,
    DocGetRequest,
    GateRequest,
    TraceQueryRequest,
)
from ..store.base import RecordStore
from .errors import CaseNotFound, ObjectNotFound


def case_get(request: CaseGetRequest, store: RecordStore) -> Case:
    """Return the case with each branch's documents joined in.

    The join is recomputed from the document index on every call.
    """
    case = store.get_case(request.case_id)
    if case is None:
        raise CaseNotFound(request.case_id)

    documents = store.find_documents(request.case_id)
    for branch in case.branches:
        branch.documents = [
            doc for doc in documents if doc.branch_code == branch.branch_code
        ]
    return case


def doc_get(request: DocGetRequest, store: RecordStore) -> Document:
    document = store.get_document(request.document_id)
    if document is None or document.case_id != request.case_id:
        raise ObjectNotFound(request.document_id, request.case_id)
    return document


def trace_query(request: TraceQueryRequest, store: RecordStore) -> List[TraceEvent]:
    """Trace events of a case, most recent first.

    sorted() is stable, so equal timestamps keep insertion order.
    """
    events = store.list_traces(request.case_id)
    return sorted(events, key=lambda event: event.timestamp, reverse=True)


ReadHandler = Callable[[Any, RecordStore], Any]

READ_HANDLERS: Dict[str, ReadHandler] = {
    CASE_GET: case_get,
    DOC_GET: doc_get,
    TRACE_QUERY: trace_query,
}


def is_read_operation(operation_name: str) -> bool:
    return operation_name in READ_HANDLERS


def read(operation_name: str, request: GateRequest, store: RecordStore) -> Any:
    return READ_HANDLERS[operation_name](request, store)

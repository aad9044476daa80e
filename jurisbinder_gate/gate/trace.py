"""
Audit Trace Logger.

Records one TraceEvent for every mutation the gate accepts. Trace events are
the sole durable record of what changed and why; they are appended and never
modified.
"""

import copy
import threading
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from ..domain import SYSTEM_CASE_ID, ObjectRef, TraceEvent, generate_id, utc_now
from ..store.base import RecordStore

DEFAULT_ACTOR = "AUTHORITATIVE_GATE"


def generate_request_id() -> str:
    """Generate a correlation id for requests that did not supply one."""
    return generate_id("REQ")


class TraceLogger:
    """Appends trace events to a record store.

    Timestamps are strictly increasing per logger, so ordering events by
    timestamp descending is the same as reverse insertion order.

    Usage:
        tracer = TraceLogger(store)
        tracer.record("doc_ingest", payload, case_id="CASE-2024-001", request_id="REQ-1")
    """

    def __init__(self, store: RecordStore, actor: str = DEFAULT_ACTOR):
        self.store = store
        self.actor = actor
        self._clock_lock = threading.Lock()
        self._last_timestamp: Optional[datetime] = None

    def _next_timestamp(self) -> datetime:
        with self._clock_lock:
            now = utc_now()
            if self._last_timestamp is not None and now <= self._last_timestamp:
                now = self._last_timestamp + timedelta(microseconds=1)
            self._last_timestamp = now
            return now

    def record(
        self,
        operation_name: str,
        payload: Dict[str, Any],
        case_id: Optional[str] = None,
        request_id: Optional[str] = None,
        objects: Optional[List[ObjectRef]] = None,
    ) -> TraceEvent:
        """Append the trace event for an accepted mutation.

        Args:
            operation_name: Name of the write operation
            payload: The payload as submitted (copied into the event)
            case_id: Case context, or None for system-level events
            request_id: Correlation id echoed into the details
            objects: Objects the mutation touched; the payload's document_id
                     takes precedence when present

        Returns:
            The appended TraceEvent
        """
        document_id = payload.get("document_id")
        if document_id:
            refs = [ObjectRef.document(str(document_id))]
        else:
            refs = list(objects or [])

        event = TraceEvent(
            case_id=case_id or SYSTEM_CASE_ID,
            timestamp=self._next_timestamp(),
            actor=self.actor,
            event_type=operation_name.upper(),
            objects=refs,
            details={
                "summary": f"Validated tool execution: {operation_name}",
                "request_id": request_id or generate_request_id(),
                "payload": copy.deepcopy(payload),
            },
        )
        return self.store.append_trace(event)

"""Tests for the audit trace logger."""

from jurisbinder_gate.domain import SYSTEM_CASE_ID, ObjectRef
from jurisbinder_gate.gate.trace import DEFAULT_ACTOR, TraceLogger, generate_request_id
from jurisbinder_gate.store import InMemoryRecordStore


class TestRecord:
    def test_records_event_with_details(self):
        store = InMemoryRecordStore()
        tracer = TraceLogger(store)

        event = tracer.record(
            "doc_rename",
            {"document_id": "DOC-1", "new_name": "x"},
            case_id="CASE-1",
            request_id="REQ-1",
        )

        assert event.event_id.startswith("TRACE-")
        assert event.case_id == "CASE-1"
        assert event.actor == DEFAULT_ACTOR
        assert event.event_type == "DOC_RENAME"
        assert event.objects == [ObjectRef.document("DOC-1")]
        assert event.details == {
            "summary": "Validated tool execution: doc_rename",
            "request_id": "REQ-1",
            "payload": {"document_id": "DOC-1", "new_name": "x"},
        }
        assert store.list_traces("CASE-1") == [event]

    def test_missing_case_uses_system_sentinel(self):
        store = InMemoryRecordStore()
        event = TraceLogger(store).record("reindex", {})
        assert event.case_id == SYSTEM_CASE_ID
        assert store.list_traces(SYSTEM_CASE_ID) == [event]

    def test_request_id_generated_when_absent(self):
        event = TraceLogger(InMemoryRecordStore()).record("reindex", {})
        assert event.details["request_id"].startswith("REQ-")

    def test_payload_document_id_takes_precedence(self):
        event = TraceLogger(InMemoryRecordStore()).record(
            "doc_note", {"document_id": "DOC-1"}, objects=[ObjectRef.document("DOC-2")]
        )
        assert event.objects == [ObjectRef.document("DOC-1")]

    def test_objects_used_without_payload_document(self):
        event = TraceLogger(InMemoryRecordStore()).record(
            "doc_ingest", {"branch_code": "EVD"}, objects=[ObjectRef.document("DOC-9")]
        )
        assert event.objects == [ObjectRef.document("DOC-9")]

    def test_custom_actor(self):
        event = TraceLogger(InMemoryRecordStore(), actor="CLERK").record("x", {})
        assert event.actor == "CLERK"

    def test_payload_is_copied(self):
        payload = {"tags": ["a"]}
        event = TraceLogger(InMemoryRecordStore()).record("tag", payload)
        payload["tags"].append("b")
        assert event.details["payload"] == {"tags": ["a"]}


class TestTimestamps:
    def test_strictly_increasing(self):
        tracer = TraceLogger(InMemoryRecordStore())
        stamps = [tracer.record("x", {}).timestamp for _ in range(200)]
        assert all(a < b for a, b in zip(stamps, stamps[1:]))

    def test_timezone_aware(self):
        event = TraceLogger(InMemoryRecordStore()).record("x", {})
        assert event.timestamp.tzinfo is not None


def test_generate_request_id_is_unique():
    assert generate_request_id() != generate_request_id()

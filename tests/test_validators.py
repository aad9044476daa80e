"""Unit tests for the validator chain."""

import pytest

from jurisbinder_gate.domain import BranchCode, Document, DocumentStatus
from jurisbinder_gate.gate.errors import (
    IllegalTransition,
    IsolationViolation,
    MissingJustification,
    NamingNonCompliant,
    ObjectNotFound,
    ValidationFailed,
)
from jurisbinder_gate.gate.validators import (
    VALIDATORS,
    ValidatorConfig,
    is_compliant_filename,
    validate,
)
from jurisbinder_gate.schemas.gate_v1 import parse_request

CONFIG = ValidatorConfig(min_justification_length=10)


def add_document(store, case_id, status=DocumentStatus.INBOX, branch=BranchCode.EVD):
    document = Document(case_id=case_id, branch_code=branch, status=status)
    store.insert_document(document)
    return document


def run(name, payload, store, config=CONFIG):
    return validate(name, parse_request(name, payload), store, config)


class TestRegistry:
    def test_registered_operations(self):
        assert set(VALIDATORS) == {"doc_status_transition", "doc_rename", "doc_link_create"}

    def test_unregistered_operation_skips_validation(self, store):
        assert run("doc_ingest", {"branch_code": "EVD", "source": {
            "filename": "a.pdf", "storage_ref": "ref"}}, store) is False
        assert run("doc_annotate", {"note": "anything"}, store) is False


class TestStatusTransitionValidator:
    def test_missing_document_raises_object_not_found(self, store):
        with pytest.raises(ObjectNotFound) as exc_info:
            run("doc_status_transition", {"document_id": "DOC-missing", "to_status": "REGISTERED"}, store)
        assert exc_info.value.code == "OBJECT_NOT_FOUND"

    def test_allowed_transition_passes(self, store, case_id):
        doc = add_document(store, case_id, status=DocumentStatus.FILED)
        assert run("doc_status_transition", {"document_id": doc.document_id, "to_status": "FROZEN"}, store)

    def test_illegal_transition_names_both_states(self, store, case_id):
        doc = add_document(store, case_id, status=DocumentStatus.FILED)
        with pytest.raises(IllegalTransition) as exc_info:
            run("doc_status_transition", {"document_id": doc.document_id, "to_status": "ARCHIVED"}, store)
        assert exc_info.value.code == "ILLEGAL_STATUS_TRANSITION"
        assert "FILED" in exc_info.value.message
        assert "ARCHIVED" in exc_info.value.message
        assert exc_info.value.context == {"from_status": "FILED", "to_status": "ARCHIVED"}

    def test_unknown_target_status_is_illegal(self, store, case_id):
        doc = add_document(store, case_id)
        with pytest.raises(IllegalTransition):
            run("doc_status_transition", {"document_id": doc.document_id, "to_status": "SHREDDED"}, store)

    def test_validator_does_not_mutate(self, store, case_id):
        doc = add_document(store, case_id)
        run("doc_status_transition", {"document_id": doc.document_id, "to_status": "REGISTERED"}, store)
        assert store.get_document(doc.document_id).status == DocumentStatus.INBOX


class TestRenameValidator:
    @pytest.mark.parametrize(
        "name",
        [
            "EVD_2024-01-15_EXHIBIT_contract-v2.pdf",
            "PRC_2023-12-01_COURT_FILING_motion1.docx",
            "MED_2024-02-29_REPORT_A.txt",
        ],
    )
    def test_compliant_names_pass(self, store, name):
        assert run("doc_rename", {"document_id": "DOC-1", "new_name": name}, store)

    @pytest.mark.parametrize(
        "name",
        [
            "evidence.pdf",
            "",
            "EV_2024-01-15_EXHIBIT_contract.pdf",
            "EVD_2024-1-15_EXHIBIT_contract.pdf",
            "EVD_2024-01-15_exhibit_contract.pdf",
            "EVD_2024-01-15_EXHIBIT_contract.PDF",
            "EVD_2024-01-15_EXHIBIT_contract v2.pdf",
            "EVD_2024-01-15_EXHIBIT_contract.pdf.bak ",
        ],
    )
    def test_non_compliant_names_fail(self, store, name):
        with pytest.raises(NamingNonCompliant) as exc_info:
            run("doc_rename", {"document_id": "DOC-1", "new_name": name}, store)
        assert exc_info.value.code == "FILENAME_NON_COMPLIANT"

    def test_is_compliant_filename_handles_none(self):
        assert not is_compliant_filename(None)


class TestLinkCreateValidator:
    def link_payload(self, from_id, to_id, justification="Contract referenced in expert report"):
        return {
            "from_object": {"object_type": "DOCUMENT", "object_id": from_id},
            "to_object": {"object_type": "DOCUMENT", "object_id": to_id},
            "justification": justification,
        }

    @pytest.mark.parametrize("justification", [None, "", "ok", "123456789"])
    def test_short_or_missing_justification_fails(self, store, case_id, justification):
        a = add_document(store, case_id)
        b = add_document(store, case_id)
        with pytest.raises(MissingJustification) as exc_info:
            run("doc_link_create", self.link_payload(a.document_id, b.document_id, justification), store)
        assert exc_info.value.code == "MISSING_JUSTIFICATION"

    def test_ten_characters_is_enough(self, store, case_id):
        a = add_document(store, case_id)
        b = add_document(store, case_id)
        assert run("doc_link_create", self.link_payload(a.document_id, b.document_id, "1234567890"), store)

    def test_same_case_link_passes(self, store, case_id):
        a = add_document(store, case_id)
        b = add_document(store, case_id, branch=BranchCode.EXP)
        assert run("doc_link_create", self.link_payload(a.document_id, b.document_id), store)

    def test_cross_case_link_fails(self, store, case_id, other_case_id):
        a = add_document(store, case_id)
        b = add_document(store, other_case_id)
        with pytest.raises(IsolationViolation) as exc_info:
            run("doc_link_create", self.link_payload(a.document_id, b.document_id), store)
        assert exc_info.value.code == "BRANCH_ISOLATION_VIOLATION"

    def test_unresolved_endpoints_are_permitted(self, store, case_id):
        a = add_document(store, case_id)
        assert run("doc_link_create", self.link_payload(a.document_id, "EXT-court-registry-42"), store)
        assert run("doc_link_create", self.link_payload("EXT-1", "EXT-2"), store)

    def test_justification_checked_before_isolation(self, store, case_id, other_case_id):
        a = add_document(store, case_id)
        b = add_document(store, other_case_id)
        with pytest.raises(MissingJustification):
            run("doc_link_create", self.link_payload(a.document_id, b.document_id, "ok"), store)

    def test_missing_endpoints_after_justification(self, store):
        with pytest.raises(MissingJustification):
            run("doc_link_create", {"justification": "ok"}, store)
        with pytest.raises(ValidationFailed):
            run("doc_link_create", {"justification": "Long enough reason"}, store)

    def test_custom_minimum_length(self, store, case_id):
        config = ValidatorConfig(min_justification_length=3)
        assert run("doc_link_create", self.link_payload("EXT-1", "EXT-2", "yes"), store, config)

"""Tests for case provisioning and the record store factory."""

import pytest

from jurisbinder_gate.config import Settings
from jurisbinder_gate.db import SqlRecordStore
from jurisbinder_gate.domain import (
    BranchCode,
    Document,
    IsolationLevel,
    Link,
    ObjectRef,
    PartyRole,
)
from jurisbinder_gate.store import InMemoryRecordStore, create_record_store
from jurisbinder_gate.store.provisioning import (
    DEMO_CASE_ID,
    branch_id_for,
    build_case,
    provision_case,
    seed_demo_case,
)


class TestBuildCase:
    def test_every_branch_code_present(self):
        case = build_case("CASE-2025-007", "R v. Jones")

        assert [b.branch_code for b in case.branches] == list(BranchCode)
        assert all(
            b.isolation_level == IsolationLevel.STRICT_WITH_REFERENCES for b in case.branches
        )
        assert case.links == []

    def test_branch_ids_derive_from_case_id(self):
        assert branch_id_for("CASE-2024-001", BranchCode.EVD) == "BRANCH-2024-001-EVD"
        assert branch_id_for("MATTER-9", BranchCode.PRC) == "BRANCH-MATTER-9-PRC"


class TestDemoCase:
    def test_seeds_demo_case(self):
        store = InMemoryRecordStore()
        case = seed_demo_case(store)

        assert case.case_id == DEMO_CASE_ID
        assert case.jurisdiction == "High Court of Justice"
        assert [(p.party_role, p.notes) for p in case.parties] == [
            (PartyRole.SELF, "Lead Claimant"),
            (PartyRole.COUNTERPARTY, "Primary Defendant"),
        ]

    def test_seeding_twice_is_a_no_op(self):
        store = InMemoryRecordStore()
        seed_demo_case(store)
        seed_demo_case(store)
        assert store.list_case_ids() == [DEMO_CASE_ID]

    def test_provisioning_duplicate_raises(self):
        store = InMemoryRecordStore()
        provision_case(store, build_case("CASE-1", "A v. B"))
        with pytest.raises(ValueError):
            provision_case(store, build_case("CASE-1", "A v. B"))


class TestInMemoryIsolation:
    def test_reads_are_copies(self):
        store = InMemoryRecordStore()
        seed_demo_case(store)

        case = store.get_case(DEMO_CASE_ID)
        case.case_title = "tampered"
        case.branches.clear()

        stored = store.get_case(DEMO_CASE_ID)
        assert stored.case_title == "Smith v. Global Logistics Corp."
        assert len(stored.branches) == 13


    def test_delete_document(self):
        store = InMemoryRecordStore()
        doc = Document(case_id=DEMO_CASE_ID, branch_code=BranchCode.EVD)
        store.insert_document(doc)
        store.delete_document(doc.document_id)
        assert store.get_document(doc.document_id) is None

    def test_remove_link(self):
        store = InMemoryRecordStore()
        seed_demo_case(store)
        link = Link(
            from_object=ObjectRef.document("DOC-1"),
            to_object=ObjectRef.document("DOC-2"),
            justification="Same shipment, two invoices",
        )
        store.add_link(DEMO_CASE_ID, link)
        store.remove_link(DEMO_CASE_ID, link.link_id)
        assert store.get_case(DEMO_CASE_ID).links == []

class TestCreateRecordStore:
    def test_memory_backend(self):
        store = create_record_store(Settings(store_backend="memory"))
        assert isinstance(store, InMemoryRecordStore)

    def test_sql_backend(self):
        store = create_record_store(
            Settings(store_backend="sql", database_url="sqlite:///:memory:")
        )
        assert isinstance(store, SqlRecordStore)
        assert store.list_case_ids() == []

    def test_unknown_backend(self):
        settings = Settings()
        # Bypass Literal validation to reach the factory's own check
        object.__setattr__(settings, "store_backend", "redis")
        with pytest.raises(ValueError, match="Unsupported store backend"):
            create_record_store(settings)

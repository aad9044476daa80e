"""Test configuration and fixtures."""

from typing import Any, Callable, Dict, Optional

import pytest

from jurisbinder_gate.gate import Gate, ValidatorConfig
from jurisbinder_gate.store import InMemoryRecordStore
from jurisbinder_gate.store.provisioning import (
    DEMO_CASE_ID,
    build_case,
    provision_case,
    seed_demo_case,
)

OTHER_CASE_ID = "CASE-2024-002"


@pytest.fixture
def store() -> InMemoryRecordStore:
    """A fresh store holding the demo case and a second, empty case."""
    store = InMemoryRecordStore()
    seed_demo_case(store)
    provision_case(store, build_case(OTHER_CASE_ID, "Doe v. Doe"))
    return store


@pytest.fixture
def gate(store) -> Gate:
    return Gate(store, validator_config=ValidatorConfig(min_justification_length=10))


@pytest.fixture
def case_id() -> str:
    return DEMO_CASE_ID


@pytest.fixture
def other_case_id() -> str:
    return OTHER_CASE_ID


def make_ingest_payload(**overrides) -> Dict[str, Any]:
    """Create a valid doc_ingest payload with optional overrides."""
    defaults = {
        "branch_code": "EVD",
        "metadata": {"title": "Signed contract", "author": "Alice Smith"},
        "source": {
            "filename": "contract.pdf",
            "storage_ref": "s3://binder/cases/2024-001/contract.pdf",
        },
    }
    defaults.update(overrides)
    return defaults


@pytest.fixture
def ingest(gate) -> Callable[..., Dict[str, Any]]:
    """Ingest a document through the gate and return its data."""

    def _ingest(case_id: str = DEMO_CASE_ID, **overrides) -> Dict[str, Any]:
        result = gate.submit("doc_ingest", make_ingest_payload(**overrides), case_id)
        assert result.ok, result.error
        return result.data

    return _ingest


@pytest.fixture
def transition(gate) -> Callable[..., Any]:
    """Submit a doc_status_transition through the gate."""

    def _transition(document_id: str, to_status: str, case_id: Optional[str] = DEMO_CASE_ID):
        return gate.submit(
            "doc_status_transition",
            {"document_id": document_id, "to_status": to_status},
            case_id,
        )

    return _transition

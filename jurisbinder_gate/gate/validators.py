"""
Validator chain for JurisBinder gate mutations.

Each write operation may register a validator. A validator only reads the
record store: it either returns (the mutation may proceed) or raises a
GateError with a stable code. It never applies state.

Policy Rules:
- doc_status_transition: the document must exist, and the requested status
  must be reachable from its current status in the state machine.
- doc_rename: the new name must follow the naming standard
  ``CCC_YYYY-MM-DD_LABEL_token.ext`` (e.g. ``EVD_2024-01-15_EXHIBIT_contract-v2.pdf``).
- doc_link_create: the justification must be at least
  MIN_JUSTIFICATION_LENGTH characters, and the two endpoints must not resolve
  to documents of different cases. Endpoints that do not resolve are allowed.
  Both endpoints must be given; they are checked after the justification.

Configuration:
- MIN_JUSTIFICATION_LENGTH: minimum justification length (default 10).
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Optional

from pydantic import BaseModel

from ..schemas.gate_v1 import (
    DOC_LINK_CREATE,
    DOC_RENAME,
    DOC_STATUS_TRANSITION,
    DocLinkCreateRequest,
    DocRenameRequest,
    DocStatusTransitionRequest,
    GateRequest,
)
from ..store.base import RecordStore
from . import state_machine
from .errors import (
    IllegalTransition,
    IsolationViolation,
    MissingJustification,
    NamingNonCompliant,
    ObjectNotFound,
    ValidationFailed,
)

NAMING_PATTERN = re.compile(
    r"^[A-Z]{3}_\d{4}-\d{2}-\d{2}_[A-Z_]+_[a-zA-Z0-9-]+\.[a-z0-9]+$"
)

DEFAULT_MIN_JUSTIFICATION_LENGTH = 10


class ValidatorConfig(BaseModel):
    """Configuration for validator evaluation."""

    min_justification_length: int = DEFAULT_MIN_JUSTIFICATION_LENGTH


def _get_default_validator_config() -> ValidatorConfig:
    """
    Get default validator config from environment settings.

    Settings are loaded lazily to avoid circular imports.
    """
    from ..config import settings

    return ValidatorConfig(min_justification_length=settings.min_justification_length)


def is_compliant_filename(name: Optional[str]) -> bool:
    """Check a filename against the naming standard."""
    return bool(name) and NAMING_PATTERN.fullmatch(name) is not None


def validate_status_transition(
    request: DocStatusTransitionRequest, store: RecordStore, config: ValidatorConfig
) -> None:
    """The document must exist and the move must be in the transition table."""
    document = store.get_document(request.document_id)
    if document is None:
        raise ObjectNotFound(request.document_id)

    current = document.status.value
    if not state_machine.can_transition(current, request.to_status):
        raise IllegalTransition(current, request.to_status)


def validate_rename(
    request: DocRenameRequest, store: RecordStore, config: ValidatorConfig
) -> None:
    """The proposed name must follow the naming standard."""
    if not is_compliant_filename(request.new_name):
        raise NamingNonCompliant(request.new_name)


def validate_link_create(
    request: DocLinkCreateRequest, store: RecordStore, config: ValidatorConfig
) -> None:
    """Links need a justification and must stay within one case."""
    justification = request.justification
    if not justification or len(justification) < config.min_justification_length:
        raise MissingJustification(config.min_justification_length)

    if request.from_object is None or request.to_object is None:
        raise ValidationFailed("Link requires both from_object and to_object.")

    from_doc = store.get_document(request.from_object.object_id)
    to_doc = store.get_document(request.to_object.object_id)

    # Unresolved endpoints may point at external or not-yet-ingested objects.
    if from_doc and to_doc and from_doc.case_id != to_doc.case_id:
        raise IsolationViolation(from_doc.case_id, to_doc.case_id)


Validator = Callable[[GateRequest, RecordStore, ValidatorConfig], None]

VALIDATORS: Dict[str, Validator] = {
    DOC_STATUS_TRANSITION: validate_status_transition,
    DOC_RENAME: validate_rename,
    DOC_LINK_CREATE: validate_link_create,
}


def validate(
    operation_name: str,
    request: GateRequest,
    store: RecordStore,
    config: Optional[ValidatorConfig] = None,
) -> bool:
    """
    Run the validator registered for an operation.

    Args:
        operation_name: Name of the write operation
        request: The parsed operation payload
        store: Record store to check against (read only)
        config: Optional validator configuration. If not provided, reads
                from settings.

    Returns:
        True if a validator ran, False if none is registered for the name

    Raises:
        GateError: If the request violates a policy rule
    """
    validator = VALIDATORS.get(operation_name)
    if validator is None:
        return False

    if config is None:
        config = _get_default_validator_config()

    validator(request, store, config)
    return True

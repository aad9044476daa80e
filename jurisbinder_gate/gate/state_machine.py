"""
Document status state machine.

ALLOWED_TRANSITIONS is the single source of truth for which status changes
the gate accepts. INBOX is the initial state and ARCHIVED is terminal.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Union

from ..domain import DocumentStatus

S = DocumentStatus

INITIAL_STATUS = S.INBOX
TERMINAL_STATUSES: FrozenSet[DocumentStatus] = frozenset({S.ARCHIVED})

ALLOWED_TRANSITIONS: Dict[DocumentStatus, FrozenSet[DocumentStatus]] = {
    S.INBOX: frozenset({S.REGISTERED, S.DUPLICATE, S.ERROR, S.DISPUTED}),
    S.REGISTERED: frozenset({S.CLASSIFIED, S.DUPLICATE, S.ERROR, S.DISPUTED}),
    S.CLASSIFIED: frozenset({S.QUALIFIED, S.REDACTED, S.ERROR, S.DISPUTED}),
    S.QUALIFIED: frozenset({S.EXHIBIT_READY, S.ERROR, S.DISPUTED}),
    S.EXHIBIT_READY: frozenset({S.FILED, S.ERROR, S.DISPUTED}),
    S.FILED: frozenset({S.FROZEN, S.ERROR, S.DISPUTED}),
    S.FROZEN: frozenset({S.ARCHIVED, S.ERROR, S.DISPUTED}),
    S.ARCHIVED: frozenset(),
    S.DUPLICATE: frozenset({S.ARCHIVED, S.ERROR}),
    S.DISPUTED: frozenset({S.CLASSIFIED, S.ERROR, S.ARCHIVED}),
    S.REDACTED: frozenset({S.QUALIFIED, S.ERROR}),
    S.ERROR: frozenset({S.INBOX, S.ARCHIVED}),
}


def _coerce(status: Union[DocumentStatus, str, None]) -> Union[DocumentStatus, None]:
    if isinstance(status, DocumentStatus):
        return status
    try:
        return DocumentStatus(status)
    except ValueError:
        return None


def allowed_targets(status: Union[DocumentStatus, str, None]) -> FrozenSet[DocumentStatus]:
    """Statuses reachable in one step. Unknown statuses reach nothing."""
    current = _coerce(status)
    if current is None:
        return frozenset()
    return ALLOWED_TRANSITIONS.get(current, frozenset())


def can_transition(
    from_status: Union[DocumentStatus, str, None],
    to_status: Union[DocumentStatus, str, None],
) -> bool:
    target = _coerce(to_status)
    return target is not None and target in allowed_targets(from_status)


def is_terminal(status: Union[DocumentStatus, str]) -> bool:
    current = _coerce(status)
    return current in TERMINAL_STATUSES

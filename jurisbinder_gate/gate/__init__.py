"""The authoritative gate: dispatcher, validators, state machine and trace log."""

from .dispatcher import Gate
from .errors import (
    CaseNotFound,
    GateError,
    IllegalTransition,
    IsolationViolation,
    MissingJustification,
    NamingNonCompliant,
    ObjectNotFound,
    ValidationFailed,
)
from .state_machine import ALLOWED_TRANSITIONS, allowed_targets, can_transition
from .trace import TraceLogger
from .validators import ValidatorConfig, validate

__all__ = [
    "ALLOWED_TRANSITIONS",
    "CaseNotFound",
    "Gate",
    "GateError",
    "IllegalTransition",
    "IsolationViolation",
    "MissingJustification",
    "NamingNonCompliant",
    "ObjectNotFound",
    "TraceLogger",
    "ValidationFailed",
    "ValidatorConfig",
    "allowed_targets",
    "can_transition",
    "validate",
]

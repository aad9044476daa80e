"""
Gate dispatcher.

Single entry point for every operation on the record store. Read operations
go straight to their handler. Any other name is a mutation and runs
validator -> executor -> trace logger under the gate's write lock, so a
validator always sees the latest committed state.

Failures raised anywhere on these paths are converted here, once, into the
typed error response.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

import structlog
from pydantic import BaseModel, ValidationError

from ..schemas.gate_v1 import GateErrorBody, GateResult, parse_request
from ..store.base import RecordStore
from . import readers, validators
from .errors import GateError, ValidationFailed
from .executor import execute
from .trace import DEFAULT_ACTOR, TraceLogger, generate_request_id

logger = structlog.get_logger()


def _to_jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_to_jsonable(item) for item in data]
    return data


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "payload"
        problems.append(f"{location}: {error.get('msg')}")
    return "Invalid payload: " + "; ".join(problems)


class Gate:
    """The authoritative gate over a record store.

    Usage:
        gate = Gate(InMemoryRecordStore())
        result = gate.submit("doc_get", {"case_id": "CASE-2024-001", "document_id": "DOC-1"})
        result.to_response()  # {"ok": True, "data": {...}}
    """

    def __init__(
        self,
        store: RecordStore,
        validator_config: Optional[validators.ValidatorConfig] = None,
        actor: str = DEFAULT_ACTOR,
    ):
        self.store = store
        self.validator_config = validator_config
        self.tracer = TraceLogger(store, actor=actor)
        self._write_lock = threading.RLock()

    def submit(
        self,
        operation_name: str,
        payload: Optional[Dict[str, Any]] = None,
        case_id: Optional[str] = None,
    ) -> GateResult:
        """Handle one operation and return its success or typed failure."""
        request_id = None
        if isinstance(payload, dict):
            request_id = payload.get("request_id")
        request_id = request_id or generate_request_id()

        log = logger.bind(
            request_id=request_id, operation=operation_name, case_id=case_id
        )

        try:
            if readers.is_read_operation(operation_name):
                log.info("Gate read")
                return GateResult(
                    ok=True, data=self._read(operation_name, payload, case_id)
                )

            log.info("Gate mutation")
            return self._write(operation_name, payload, case_id, request_id)

        except GateError as exc:
            error = exc
        except ValidationError as exc:
            error = ValidationFailed(_describe_validation_error(exc))
        except Exception as exc:
            log.exception("Unexpected gate failure")
            error = ValidationFailed(str(exc) or exc.__class__.__name__)

        log.warning("Gate rejected request", code=error.code, message=error.message)
        return GateResult(
            ok=False,
            error=GateErrorBody(**error.to_dict()),
            http_status=error.http_status,
        )

    def _read(
        self,
        operation_name: str,
        payload: Optional[Dict[str, Any]],
        case_id: Optional[str],
    ) -> Any:
        if payload is None:
            payload = {"case_id": case_id}
        elif case_id and "case_id" not in payload:
            payload = {**payload, "case_id": case_id}

        request = parse_request(operation_name, payload)
        return _to_jsonable(readers.read(operation_name, request, self.store))

    def _write(
        self,
        operation_name: str,
        payload: Optional[Dict[str, Any]],
        case_id: Optional[str],
        request_id: str,
    ) -> GateResult:
        payload = payload if payload is not None else {}

        with self._write_lock:
            request = parse_request(operation_name, payload)
            validators.validate(
                operation_name, request, self.store, self.validator_config
            )
            outcome = execute(operation_name, request, payload, case_id, self.store)
            try:
                event = self.tracer.record(
                    operation_name,
                    payload,
                    case_id=case_id,
                    request_id=request_id,
                    objects=outcome.objects,
                )
            except Exception:
                # A mutation without its trace event must not stay applied
                if outcome.undo is not None:
                    outcome.undo()
                    logger.warning(
                        "Mutation reverted after trace failure",
                        request_id=request_id,
                        operation=operation_name,
                    )
                raise

        logger.info(
            "Mutation accepted",
            request_id=request_id,
            operation=operation_name,
            trace_event_id=event.event_id,
        )
        return GateResult(
            ok=True, data=_to_jsonable(outcome.data), trace_event_id=event.event_id
        )

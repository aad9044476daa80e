"""
FastAPI boundary for the JurisBinder gate.

Exposes a single operation-submission endpoint; every read and mutation of
the record store goes through ``POST /api/gate``.
"""

from __future__ import annotations

import importlib.metadata
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .gate import Gate, ValidatorConfig
from .logging_config import configure_logging
from .schemas.gate_v1 import GateSubmission
from .store import create_record_store
from .store.provisioning import seed_demo_case

logger = structlog.get_logger()

settings = get_settings()

# Lazily built so the app also works without running the lifespan
_gate: Optional[Gate] = None


def build_gate() -> Gate:
    """Construct the record store and the gate from settings."""
    store = create_record_store(settings)
    if settings.seed_demo_case:
        seed_demo_case(store)
    return Gate(
        store,
        validator_config=ValidatorConfig(
            min_justification_length=settings.min_justification_length
        ),
        actor=settings.gate_actor,
    )


def get_gate() -> Gate:
    """Dependency returning the process-wide gate."""
    global _gate
    if _gate is None:
        _gate = build_gate()
    return _gate


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    configure_logging(settings)
    logger.info(
        "Starting JurisBinder gate",
        environment=settings.environment,
        store_backend=settings.store_backend,
    )

    try:
        get_gate()
        logger.info("Gate initialized")
    except Exception as e:
        logger.error("Failed to start application", error=str(e))
        raise

    yield

    logger.info("Shutting down JurisBinder gate")


app = FastAPI(
    title=settings.app_name,
    description="Authoritative gate over the legal case-management record store",
    version=importlib.metadata.version("jurisbinder-gate"),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz", tags=["system"])
def healthz() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/version", tags=["system"])
def version() -> Dict[str, str]:
    """Return the version of the application."""
    return {"version": importlib.metadata.version("jurisbinder-gate")}


@app.post(
    "/api/gate",
    tags=["gate"],
    responses={
        200: {"description": "Operation accepted"},
        400: {"description": "Rejected by the validator chain or malformed payload"},
        404: {"description": "Case or document not found"},
        422: {"description": "Malformed submission envelope"},
    },
)
def submit(submission: GateSubmission, gate: Gate = Depends(get_gate)) -> JSONResponse:
    """
    Submit one operation to the gate.

    Read operations (case_get, doc_get, trace_query) return their data.
    Any other operation is a mutation: it is validated, applied and traced,
    and the response carries the trace event id.
    """
    result = gate.submit(
        submission.operation_name, submission.payload, submission.case_id
    )
    content: Dict[str, Any] = result.to_response()
    return JSONResponse(status_code=result.http_status, content=content)

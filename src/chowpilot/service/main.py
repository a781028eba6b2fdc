"""
ChowPilot API

HTTP surface for the CHOW action plan engine.

Environment: see chowpilot.config (CHOW_* variables).
"""
from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..exceptions import (
    CaseLoadError,
    ChowPilotError,
    InvalidCaseInputError,
    StateStoreError,
    TicketingNotConnectedError,
    TicketingRequestError,
    UnknownStageError,
)
from ..logs import configure_logging
from .routes import evaluate, state, tickets
from .schemas import HealthResponse

logger = logging.getLogger("chowpilot.service")

# Most specific first
ERROR_STATUS_CODES: tuple[tuple[type[ChowPilotError], int], ...] = (
    (InvalidCaseInputError, 422),
    (CaseLoadError, 422),
    (UnknownStageError, 404),
    (TicketingNotConnectedError, 409),
    (TicketingRequestError, 502),
    (StateStoreError, 500),
)


def status_for(error: ChowPilotError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application. Settings default to the environment."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="ChowPilot",
        description="""
**Change-of-ownership action plan engine.**

Turns the facts of a CHOW into a risk level, a staged checklist and
markdown ready to paste into a ticket.

## Quick Start

1. `POST /evaluate` - Evaluate a case
2. `POST /evaluate/stage/{stage}` - One checklist stage as markdown
3. `POST /tickets` - Create an issue from a case
        """,
        version=__version__,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start = time.time()

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "request_id": request_id,
                "duration_ms": round((time.time() - start) * 1000, 2),
            },
        )
        return response

    @app.exception_handler(ChowPilotError)
    async def chowpilot_error_handler(request: Request, exc: ChowPilotError):
        status_code = status_for(exc)
        request_id = getattr(request.state, "request_id", "unknown")
        if status_code >= 500:
            logger.warning("Request failed: %s", exc, extra={"request_id": request_id})
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder({"detail": exc.to_dict(), "request_id": request_id}),
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=__version__,
        )

    app.include_router(evaluate.router)
    app.include_router(state.router)
    app.include_router(tickets.router)

    return app

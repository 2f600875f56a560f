"""
Typed errors raised by the scheduling services.

Every error is an ``HTTPException`` so routers can let it propagate as-is;
``kind`` is the stable machine-readable code rendered next to ``detail``.
"""
from __future__ import annotations
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SchedulingError(HTTPException):
    status_code = 500
    kind = "internal_error"

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class NotFound(SchedulingError):
    status_code = 404
    kind = "not_found"


class InvalidInput(SchedulingError):
    status_code = 422
    kind = "invalid_input"


class InvariantViolation(SchedulingError):
    status_code = 400
    kind = "invariant_violation"


class MissingCompany(SchedulingError):
    status_code = 400
    kind = "missing_company"


class Conflict(SchedulingError):
    status_code = 409
    kind = "conflict"


class TransientStorageFailure(SchedulingError):
    status_code = 503
    kind = "transient_storage_failure"


async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "kind": exc.kind},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "kind": "internal_error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SchedulingError, scheduling_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

"""Maps domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lojasocial.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    InvalidTransitionError,
    InvariantViolationError,
    NotOwnerError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins.
STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (ValidationError, 400),
    (NotOwnerError, 403),
    (EntityNotFoundError, 404),
    (InsufficientStockError, 409),
    (InvalidTransitionError, 409),
    (InvariantViolationError, 500),
]


def status_code_for(exc: DomainException) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 400


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
        )
    else:
        logger.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)

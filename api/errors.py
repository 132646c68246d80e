"""
Exception handlers mapping service errors onto HTTP responses.

Every error body has the shape ``{"error": <message>}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import (
    AuthError,
    ConflictError,
    ServiceError,
    StorageError,
    TokenSigningError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    TokenSigningError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: ServiceError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, type(exc).__name__)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, code, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=code, content={"error": exc.message}, headers=headers)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # log field locations only; bodies may contain passwords
    locations = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
    logger.warning("Request validation error on %s: %s", request.url.path, locations)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid request parameters"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

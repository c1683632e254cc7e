"""Translation of domain errors into JSON error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainException,
    DuplicateEntityError,
    EntityNotFoundError,
    PaymentGatewayError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    EntityNotFoundError: 404,
    DuplicateEntityError: 409,
    PaymentGatewayError: 503,
    StorageError: 500,
}


def status_for(exc: DomainException) -> int:
    for klass in type(exc).__mro__:
        if klass in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[klass]
    return 500


def error_body(exc: DomainException) -> dict:
    body = {"error": str(exc)}
    code = getattr(exc, "code", None)
    if code:
        body["code"] = code
    return body


def first_validation_message(exc: RequestValidationError) -> str:
    """Render the first pydantic error as ``field.path: message``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    path = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{path}: {message}" if path else message


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content=error_body(exc))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": first_validation_message(exc)})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

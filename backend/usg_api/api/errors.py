"""Central error formatter.

Every failure leaving the API is rendered as
``{"success": false, "error": "<message>"}`` with a status derived from the
exception.  Outside production the formatted traceback is added as
``stack``.
"""

from __future__ import annotations

import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from usg_api.api.responses import failure
from usg_api.core.constants import (
    PG_CHECK_VIOLATION,
    PG_FOREIGN_KEY_VIOLATION,
    PG_INVALID_TEXT_REPRESENTATION,
    PG_NOT_NULL_VIOLATION,
    PG_UNIQUE_VIOLATION,
    PGRST_JWT_INVALID,
    PGRST_NO_ROWS,
)
from usg_api.core.exceptions import (
    AppError,
    DatabaseError,
    RecordNotFoundError,
    ValidationFailedError,
)
from usg_api.core.logging import get_logger

logger = get_logger(__name__)

_JWT_ERROR_CODES: dict[str, str] = {
    PGRST_JWT_INVALID: "Invalid token",
    "bad_jwt": "Invalid token",
    "invalid_jwt": "Invalid token",
    "token_expired": "Token expired",
}

# Rows the datastore refused because they break the table schema.
_SCHEMA_ERROR_CODES = frozenset(
    {PG_NOT_NULL_VIOLATION, PG_CHECK_VIOLATION, PG_INVALID_TEXT_REPRESENTATION}
)

# Leading location segments FastAPI adds to validation errors.
_LOCATION_ROOTS = frozenset({"body", "query", "path", "header", "cookie"})


def classify_error(exc: BaseException) -> tuple[int, str]:
    """Map an exception to ``(status_code, client message)``."""
    if isinstance(exc, AppError):
        return exc.status_code, exc.message

    if isinstance(exc, RecordNotFoundError):
        return 404, "Resource not found"

    if isinstance(exc, DatabaseError):
        code = exc.code or ""
        if code == PG_UNIQUE_VIOLATION:
            return 409, "Resource already exists"
        if code == PG_FOREIGN_KEY_VIOLATION:
            return 404, "Referenced resource not found"
        if code == PGRST_NO_ROWS:
            return 404, "Resource not found"
        if code in _JWT_ERROR_CODES:
            return 401, _JWT_ERROR_CODES[code]
        if code in _SCHEMA_ERROR_CODES:
            return 400, "Invalid data"
        return 500, exc.message or "Database error"

    if isinstance(exc, StarletteHTTPException):
        return exc.status_code, str(exc.detail)

    return 500, str(exc) or "Internal server error"


def validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    details: list[dict[str, str]] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        details.append({"field": ".".join(loc), "message": error.get("msg", "")})
    return details


def _stack(request: Request, exc: BaseException) -> Optional[str]:
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.is_production:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn exceptions into error envelopes."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = validation_details(exc)
        logger.warning(
            "Validation failed on %s %s: %d error(s)",
            request.method,
            request.url.path,
            len(details),
        )
        return failure(400, "Validation failed", details=details)

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(
        request: Request, exc: ValidationFailedError
    ) -> JSONResponse:
        return failure(400, exc.message, details=exc.details or None)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = f"Cannot {request.method} {request.url.path}"
        else:
            message = str(exc.detail)
        return failure(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        status, message = classify_error(exc)
        logger.info("%s %s -> %d: %s", request.method, request.url.path, status, message)
        return failure(status, message, stack=_stack(request, exc))

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
        status, message = classify_error(exc)
        if status >= 500:
            logger.error(
                "Datastore failure on %s %s (code=%s): %s",
                request.method,
                request.url.path,
                exc.code,
                exc.message,
            )
        else:
            logger.info("%s %s -> %d: %s", request.method, request.url.path, status, message)
        return failure(status, message, stack=_stack(request, exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s (%s)",
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        status, message = classify_error(exc)
        settings = getattr(request.app.state, "settings", None)
        if settings is not None and settings.is_production:
            message = "Internal server error"
        return failure(status, message, stack=_stack(request, exc))


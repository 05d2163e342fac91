"""Error Handlers — global exception handlers for the Users API.

Invariants:
    - UsersApiError → its own http_status and to_response() envelope
    - DatabaseError → 503; the failed operation is logged, never returned
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → 500, never leaks internal details
    - Every envelope has the shape {"error": {code, message, category, severity, ...}}

Design Decisions:
    - Log level follows ErrorSeverity: CRITICAL faults log at error, the rest at warning
    - Observability fields travel as logging extras so JSONFormatter surfaces them
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from users_api.core.errors import (
    DatabaseError, ErrorCategory, ErrorSeverity, UsersApiError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(UsersApiError, handle_users_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **fields,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **fields,
        },
    }


def _log_extras(request: Request, exc: UsersApiError) -> dict:
    extras = {
        "error_code": exc.code,
        "path": request.url.path,
        "user_id": exc.context.user_id,
    }
    if isinstance(exc, DatabaseError):
        extras["operation"] = exc.operation
    return extras


async def handle_users_api_error(request: Request, exc: UsersApiError):
    level = (
        logging.ERROR if exc.severity is ErrorSeverity.CRITICAL
        else logging.WARNING
    )
    logger.log(
        level, f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra=_log_extras(request, exc),
    )
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Validation error on {request.url.path}: {len(details)} field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    """Catch-all — never leaks internal details."""
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )

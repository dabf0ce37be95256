"""Error Handlers — every failure leaves the API in the same JSON envelope.

Invariants:
    - LessonsApiError → its own to_response() envelope and http_status
    - 401 responses carry `WWW-Authenticate: Bearer` so clients know which scheme to retry with
    - RequestValidationError → 400 VALIDATION_ERROR with field-level details
    - Framework HTTP errors (unknown route, wrong method) reuse the envelope
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Module-level handlers registered with add_exception_handler: testable without an app
    - Denials (4xx) logged at WARNING, upstream failures (5xx) at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lessons_api.core.errors import ErrorCategory, ErrorSeverity, LessonsApiError

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}

_HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "ROUTE_NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LessonsApiError, lessons_api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def _envelope(code: str, message: str, category: str, severity: ErrorSeverity, **extra) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category,
            "severity": severity.value,
            **extra,
        },
    }


async def lessons_api_error_handler(request: Request, exc: LessonsApiError):
    """Denials and collaborator failures."""
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "caller_email": exc.context.caller_email,
        },
    )
    headers = BEARER_CHALLENGE if exc.http_status == 401 else None
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(
        f"Validation error: {len(errors)} field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION.value, ErrorSeverity.ERROR,
            details=[
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in errors
            ],
        ),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            code, str(exc.detail), ErrorCategory.VALIDATION.value, ErrorSeverity.INFO,
        ),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    """Catch-all — never leaks internal details."""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL.value, ErrorSeverity.CRITICAL,
        ),
    )

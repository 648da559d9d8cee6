"""Error Handlers — global exception handlers for the user API.

Invariants:
    - UserDalError → its own http_status (400 / 404 / 410 / 500) with structured JSON
    - RequestValidationError → 400 with field-level error details
    - TimeoutError (request deadline) → 504
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Handlers registered once from main.py; routes never build error bodies themselves
"""

import asyncio
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from user_dal.core.errors import UserDalError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_store_error_handler(app)
    _register_validation_error_handler(app)
    _register_timeout_error_handler(app)
    _register_generic_error_handler(app)


def _register_store_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UserDalError)
    async def store_error_handler(request: Request, exc: UserDalError):
        """Handle all user store errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"UserDalError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "user_id": exc.context.user_id,
                "operation": exc.context.operation,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_timeout_error_handler(app: FastAPI) -> None:

    @app.exception_handler(asyncio.TimeoutError)
    async def timeout_error_handler(request: Request, exc: asyncio.TimeoutError):
        """Request deadline elapsed before the store answered."""
        logger.warning(
            f"Request deadline exceeded on {request.url.path}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            content={
                "error": {
                    "code": "REQUEST_TIMEOUT",
                    "message": "The request did not complete in time",
                    "category": ErrorCategory.TIMEOUT.value,
                    "severity": ErrorSeverity.ERROR.value,
                },
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }

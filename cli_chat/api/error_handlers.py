"""Error Handlers — global exception handlers mapping errors to RPC status codes.

Invariants:
    - CliChatError → its own code (NOT_FOUND, INVALID_ARGUMENT, INTERNAL, DEADLINE_EXCEEDED)
    - RequestValidationError → INVALID_ARGUMENT with field-level details
    - Exception (catch-all) → INTERNAL, never leaks internal details
    - Internal errors are logged with traceback at this boundary
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from cli_chat.core.errors import (
    INTERNAL_MESSAGE, CliChatError, ErrorCategory, ErrorSeverity, InternalError, StatusCode,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(CliChatError)
    async def domain_error_handler(request: Request, exc: CliChatError):
        """Handle all service errors."""
        extra = {
            "error_code": exc.code.value,
            "path": request.url.path,
            "rpc_method": exc.context.rpc_method,
        }
        if isinstance(exc, InternalError):
            logger.error(f"Internal error: {exc.message}", extra=extra, exc_info=exc)
        else:
            logger.info(f"{exc.code.value}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle malformed request bodies and headers."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
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
                    "code": StatusCode.INTERNAL.value,
                    "message": INTERNAL_MESSAGE,
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": StatusCode.INVALID_ARGUMENT.value,
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.WARNING.value,
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

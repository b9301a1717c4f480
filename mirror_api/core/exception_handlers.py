"""Global exception handlers for consistent error responses.

- AppError subclasses map to 400 (undecodable body), 500 (configuration)
  and 502 (upstream generation)
- Unexpected exceptions map to a generic 500 with no internals leaked

Every error body has the shape ``{"error": {"code", "message", "request_id"}}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mirror_api.core.errors import AppError, ConfigurationAppError, LLMAppError
from mirror_api.core.logging import get_request_id

logger = logging.getLogger(__name__)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, ConfigurationAppError):
        return 500
    if isinstance(exc, LLMAppError):
        return 502
    return 400


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    error_content = {
        "code": code,
        "message": message,
        "request_id": get_request_id(),
    }
    if details:
        error_content["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error_content})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Translate domain errors into JSON responses.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with the mapped status code.
    """
    status_code = _status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
        },
    )
    return _error_response(status_code, exc.code, exc.message, exc.details)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with a generic 500 error.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )
    return _error_response(
        500,
        "internal_server_error",
        "An unexpected error occurred. Please try again later.",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)

"""
API Error Translation

Maps the exception hierarchy onto HTTP responses with a flat {"error": ...}
body. Handlers are registered on the application in create_app().

| Exception              | Status                                  |
|------------------------|-----------------------------------------|
| ConfigurationError     | 503                                     |
| ProviderError          | upstream status clamped to 400-599, else 500 |
| CompletionTimeoutError | 500                                     |
| ToolArgumentsError     | 500                                     |
| TaskStoreError         | 500                                     |
| RequestValidationError | 422                                     |
| any other Exception    | 500 ("Internal server error")           |
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mcp_tasks.core.exceptions import (
    CompletionTimeoutError,
    ConfigurationError,
    ProviderError,
    TaskGatewayException,
)

logger = logging.getLogger(__name__)


def clamp_status(status_code: object) -> int:
    """Return `status_code` if it is an int in 400-599, else 500."""
    if isinstance(status_code, int) and not isinstance(status_code, bool):
        if 400 <= status_code <= 599:
            return status_code
    return 500


def status_for_exception(exc: TaskGatewayException) -> int:
    """Pick the HTTP status for a service exception."""
    if isinstance(exc, ConfigurationError):
        return 503
    if isinstance(exc, CompletionTimeoutError):
        return 500
    if isinstance(exc, ProviderError):
        return clamp_status(exc.status_code)
    return 500


async def service_exception_handler(
    request: Request, exc: TaskGatewayException
) -> JSONResponse:
    """Log the fault once and return {"error": message}."""
    status_code = status_for_exception(exc)
    logger.error(
        f"{request.method} {request.url.path} failed: "
        f"code={exc.error_code} status={status_code} message={exc.message}"
    )
    return JSONResponse(status_code=status_code, content={"error": exc.message})


def format_validation_errors(errors: list[dict]) -> str:
    """Flatten pydantic error entries into "loc: msg" pairs."""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return request validation failures in the same {"error": ...} shape."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"error": f"Invalid request: {format_validation_errors(exc.errors())}"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for faults outside the service hierarchy."""
    logger.exception(f"{request.method} {request.url.path} failed unexpectedly: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskGatewayException, service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

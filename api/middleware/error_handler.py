"""
Global Error Handling
=====================

Maps custom exceptions to HTTP status codes and formats error responses
as `{"error": "<message>"}`. Internal error detail is logged, never returned.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exceptions import (
    TaskTrackerError,
    AuthenticationError,
    ForbiddenError,
    RequestValidationFailed,
    InvalidRequestError,
    NotFoundError,
    StorageError,
    ConfigurationError,
)


logger = logging.getLogger(__name__)


# Map exceptions to HTTP status codes (most specific class wins via MRO)
EXCEPTION_STATUS_MAP = {
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    RequestValidationFailed: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: TaskTrackerError) -> int:
    """Resolve the HTTP status of an exception by walking its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def task_tracker_exception_handler(request: Request, exc: TaskTrackerError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.details}")
    else:
        logger.debug(f"{request.method} {request.url.path} rejected: {exc.message} {exc.details}")

    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict(),
        headers=headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed bodies and parameters with a 400."""
    return await task_tracker_exception_handler(
        request,
        InvalidRequestError(errors=[str(err.get("msg")) for err in exc.errors()])
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep framework-level errors (404 route, 405 method, 503) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


async def error_handler_middleware(request: Request, call_next):
    """
    Global error handling middleware.

    Anything that escapes the route handlers and the exception handlers
    above becomes a generic 500.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"}
        )


def setup_error_handling(app: FastAPI) -> None:
    """Register the exception handlers and the catch-all middleware."""
    app.add_exception_handler(TaskTrackerError, task_tracker_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(error_handler_middleware)

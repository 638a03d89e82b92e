"""
Global error mapping.

Every error raised while serving a request ends up in ``to_http_exception``,
which turns it into an HttpException, and is rendered by ``error_response``
as the JSON envelope:

    {"error": {"name": "HttpException", "message": "...", "status": 400}}

Framework errors (validation, unmatched routes) reach it through the
registered exception handlers; anything else is caught by
ErrorBoundaryMiddleware so that the 500 still passes through the outer
middleware (CORS, security headers, request logging).
"""

from http import HTTPStatus
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.api.schemas import ErrorDetail, ErrorResponse
from app.core.exceptions import BadRequestError, HttpException
from app.core.logging import get_logger
from app.utils.url_validator import first_error_message

logger = get_logger(__name__)


def to_http_exception(exc: Exception) -> HttpException:
    """Classify any exception as an HttpException with a client-safe message."""
    if isinstance(exc, HttpException):
        return exc

    if isinstance(exc, RequestValidationError):
        return BadRequestError(first_error_message(exc.errors()))

    if isinstance(exc, StarletteHTTPException):
        # Starlette fills detail with the reason phrase when none is given
        message = exc.detail if isinstance(exc.detail, str) else None
        return HttpException(exc.status_code, message)

    logger.error("Unhandled error: %r", exc, exc_info=exc)
    return HttpException(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
    )


def error_response(exc: Exception) -> JSONResponse:
    """Render any exception as the JSON error envelope."""
    http_exc = to_http_exception(exc)
    body = ErrorResponse(
        error=ErrorDetail(message=http_exc.message, status=http_exc.status_code)
    )

    headers = exc.headers if isinstance(exc, StarletteHTTPException) else None
    return JSONResponse(
        status_code=http_exc.status_code,
        content=body.model_dump(),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler shared by every registered exception type."""
    return error_response(exc)


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """Turn errors that escaped the exception handlers into a 500 envelope."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return error_response(exc)


def register_error_handlers(application: FastAPI) -> None:
    """Install the exception handlers and the error boundary on ``application``."""
    application.add_exception_handler(HttpException, http_exception_handler)
    application.add_exception_handler(
        RequestValidationError, http_exception_handler
    )
    application.add_exception_handler(
        StarletteHTTPException, http_exception_handler
    )
    application.add_middleware(ErrorBoundaryMiddleware)

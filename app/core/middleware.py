"""
HTTP middleware applied to every response.

  - SecureHeadersMiddleware: attaches a fixed set of security headers
  - RequestLoggingMiddleware: logs method, path, status and latency
"""

import time
from typing import Callable, Mapping, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SECURITY_HEADERS: dict[str, str] = {
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

# Headers that reveal implementation details
REMOVED_HEADERS = ("X-Powered-By",)


class SecureHeadersMiddleware(BaseHTTPMiddleware):
    """Attach the security header policy to every response.

    Usage:
        app.add_middleware(SecureHeadersMiddleware)
        app.add_middleware(SecureHeadersMiddleware, headers={"X-Frame-Options": "DENY"})
    """

    def __init__(self, app, headers: Optional[Mapping[str, str]] = None):
        super().__init__(app)
        self._headers = dict(DEFAULT_SECURITY_HEADERS)
        if headers:
            self._headers.update(headers)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for name, value in self._headers.items():
            response.headers[name] = value
        for name in REMOVED_HEADERS:
            if name in response.headers:
                del response.headers[name]

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log an incoming line and a completion line for each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        method = request.method
        path = request.url.path

        logger.info("<-- %s %s", method, path)
        start_time = time.perf_counter()

        # Errors are already rendered by the inner error boundary
        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "--> %s %s %d %dms", method, path, response.status_code, elapsed_ms
        )
        return response

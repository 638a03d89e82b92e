"""
Custom application exceptions.

Two families live here:
  - HttpException and its subclasses carry an explicit HTTP status
    and are rendered as the JSON error envelope.
  - ExtractionError and its subclasses are raised by the page
    metadata extractor and classified by the API layer.
"""

from http import HTTPStatus
from typing import Optional


class MetadataServiceError(Exception):
    """Base exception for the metadata service."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class HttpException(MetadataServiceError):
    """
    Structured error with an HTTP status and a client-facing message.

    When no message is given the standard reason phrase for the
    status is used.
    """

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = int(status_code)
        super().__init__(message or HTTPStatus(status_code).phrase)


class BadRequestError(HttpException):
    """400: the request could not be served as sent."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(HTTPStatus.BAD_REQUEST, message)


class NotFoundError(HttpException):
    """404: no route matches the request path."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(HTTPStatus.NOT_FOUND, message)


class ExtractionError(MetadataServiceError):
    """Raised when page metadata extraction fails."""

    def __init__(self, url: str, reason: str = "Unknown error"):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to extract metadata for '{url}': {reason}")


class HostError(ExtractionError):
    """
    Request-level failure: the target host could not be used.

    Examples: DNS resolution failure, connection refused, timeout,
    TLS error, redirect loop, 4xx/5xx from the target.
    """
    pass

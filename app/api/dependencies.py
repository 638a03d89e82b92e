"""
FastAPI dependency injection.

Provides request validation and shared instances for use across
API endpoints, keeping the route handlers thin and testable.
"""

from typing import Optional

from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.api.schemas import MetadataRequest
from app.domain.metadata_service import MetadataService


def get_metadata_request(
    url: Optional[str] = Query(
        None,
        description="The absolute URL to extract metadata from",
        examples=["https://example.com"],
    ),
) -> MetadataRequest:
    """
    Validate the ``url`` query parameter.

    Raises:
        RequestValidationError: When the parameter is missing, blank,
            too long or not an absolute URL. The error handler turns it
            into a 400 carrying the first validation message.
    """
    data = {} if url is None else {"url": url}
    try:
        return MetadataRequest.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


def get_metadata_service() -> MetadataService:
    """Provide a MetadataService instance."""
    return MetadataService()

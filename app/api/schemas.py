"""
API request/response schemas.

These Pydantic models define the contract between the API layer
and external clients. They are separate from domain models to
allow the API surface to evolve independently.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.core.config import settings
from app.domain.models import MetadataResult
from app.utils.url_validator import is_absolute_url


class MetadataRequest(BaseModel):
    """Query parameters for GET /."""

    url: str = Field(
        ...,
        max_length=settings.max_url_length,
        description="The absolute URL to extract metadata from",
        json_schema_extra={"example": "https://example.com"},
    )

    model_config = {"str_strip_whitespace": True}

    @field_validator("url")
    @classmethod
    def url_must_be_absolute(cls, value: str) -> str:
        if not is_absolute_url(value):
            raise ValueError("Invalid url")
        return value


class MetadataResponse(BaseModel):
    """Page metadata returned on successful extraction."""

    title: Optional[str] = Field(None, description="Page title")
    language: Optional[str] = Field(None, description="Primary language tag")
    keywords: Optional[list[str]] = Field(None, description="Meta keywords")
    description: Optional[str] = Field(None, description="Page description")
    icon: Optional[str] = Field(None, description="Absolute URL of the favicon")
    image: Optional[str] = Field(
        None, description="Absolute URL of the preview image"
    )

    @classmethod
    def from_result(cls, result: MetadataResult) -> "MetadataResponse":
        return cls(
            title=result.title,
            language=result.language,
            keywords=result.keywords,
            description=result.description,
            icon=result.icon,
            image=result.image,
        )


class ErrorDetail(BaseModel):
    """Body of the error envelope."""

    name: str = Field(default="HttpException", description="Error kind")
    message: str = Field(..., description="Human-readable error message")
    status: int = Field(..., description="HTTP status code")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: ErrorDetail

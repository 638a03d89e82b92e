"""
Domain models: pure data structures for the metadata service.

These models have no framework dependencies beyond Pydantic and
represent the core business entities shared across layers.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MetadataResult(BaseModel):
    """
    Metadata extracted from a single page.

    Every field is optional: a page that declares nothing yields a
    result with all fields set to None.
    """

    title: Optional[str] = Field(None, description="Page title")
    description: Optional[str] = Field(None, description="Page description")
    language: Optional[str] = Field(None, description="Primary language tag")
    keywords: Optional[list[str]] = Field(None, description="Meta keywords")
    icon: Optional[str] = Field(None, description="Absolute favicon URL")
    image: Optional[str] = Field(None, description="Absolute preview image URL")

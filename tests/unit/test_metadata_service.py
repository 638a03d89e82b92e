"""
Unit tests for the MetadataService domain logic.

Tests cover:
  - extract: fetch + parse on success
  - extract: relative links resolved against the final URL
  - extract: error propagation
"""

import pytest
from unittest.mock import AsyncMock, patch

from app.core.exceptions import HostError
from app.domain.metadata_service import MetadataService
from app.infrastructure.scraper.http_client import FetchedPage


@pytest.mark.asyncio
class TestExtract:
    """Tests for MetadataService.extract()."""

    async def test_extract_success(self, sample_page):
        """Should fetch the page and return the parsed metadata."""
        service = MetadataService()

        with patch(
            "app.domain.metadata_service.fetch_page",
            new_callable=AsyncMock,
            return_value=sample_page,
        ) as mock_fetch:
            result = await service.extract("https://example.com")

        assert result.title == "Example Domain"
        assert result.language == "en"
        mock_fetch.assert_awaited_once_with("https://example.com")

    async def test_extract_uses_final_url(self):
        """Should resolve relative links against the post-redirect URL."""
        service = MetadataService()
        page = FetchedPage(
            url="https://www.example.org/landing/",
            status_code=200,
            content=b'<html><head><link rel="icon" href="fav.png"></head></html>',
        )

        with patch(
            "app.domain.metadata_service.fetch_page",
            new_callable=AsyncMock,
            return_value=page,
        ):
            result = await service.extract("https://example.org")

        assert result.icon == "https://www.example.org/landing/fav.png"

    async def test_extract_host_error_propagates(self):
        """Should propagate HostError when the fetch fails."""
        service = MetadataService()

        with patch(
            "app.domain.metadata_service.fetch_page",
            new_callable=AsyncMock,
            side_effect=HostError("https://bad.invalid", "DNS resolution failed"),
        ):
            with pytest.raises(HostError):
                await service.extract("https://bad.invalid")

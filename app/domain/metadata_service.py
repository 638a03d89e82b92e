"""
Metadata service: core business logic.

Orchestrates page metadata extraction: fetch the page, then parse it.
This layer is framework-agnostic and depends only on the scraper
infrastructure.
"""

from app.core.logging import get_logger
from app.domain.models import MetadataResult
from app.infrastructure.scraper.http_client import fetch_page
from app.infrastructure.scraper.parser import parse_metadata

logger = get_logger(__name__)


class MetadataService:
    """Business logic for page metadata extraction."""

    async def extract(self, url: str) -> MetadataResult:
        """
        Extract metadata for a given URL.

        This is the GET / endpoint logic:
          1. Fetch the page (follows redirects)
          2. Parse title, description, keywords, language, icon, image
             relative to the final page URL

        Args:
            url: A validated absolute http(s) URL.

        Returns:
            The MetadataResult for the page.

        Raises:
            HostError: If the target host cannot be reached or errors.
        """
        logger.info("Extracting metadata for url=%s", url)

        page = await fetch_page(url)
        result = parse_metadata(
            page.content, page.url or url, page.headers, encoding=page.encoding
        )

        logger.info(
            "Extracted metadata for url=%s (final_url=%s, title=%r)",
            url,
            page.url,
            result.title,
        )
        return result

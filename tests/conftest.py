"""
Shared test fixtures for the page metadata service test suite.

Provides:
  - Async test client for FastAPI integration tests
  - Sample HTML documents and fetched pages
  - A factory for mocked httpx.AsyncClient instances
"""

from typing import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.infrastructure.scraper.http_client import FetchedPage
from app.main import app


@pytest_asyncio.fixture
async def async_client() -> AsyncIterator[AsyncClient]:
    """Provide an async HTTP test client bound to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client


@pytest.fixture
def sample_html() -> str:
    """Provide a page declaring every supported metadata field."""
    return """
    <!doctype html>
    <html lang="en-US">
      <head>
        <title>Example Domain</title>
        <meta name="description" content="This domain is for use in examples.">
        <meta name="keywords" content="example, domain, , documentation, example">
        <meta property="og:image" content="/images/preview.png">
        <link rel="icon" href="/static/favicon.png">
      </head>
      <body><h1>Example Domain</h1></body>
    </html>
    """


@pytest.fixture
def sample_page(sample_html: str) -> FetchedPage:
    """Provide a fetched page wrapping ``sample_html``."""
    return FetchedPage(
        url="https://example.com/",
        status_code=200,
        headers={"content-type": "text/html; charset=UTF-8"},
        content=sample_html.encode("utf-8"),
        encoding="utf-8",
    )


@pytest.fixture
def make_http_client():
    """
    Build a mocked httpx.AsyncClient usable as an async context manager.

    ``client.stream(...)`` yields ``response``; ``side_effect`` is raised
    when the stream is opened, as httpx does for connection failures.
    """

    def _make(response=None, side_effect=None):
        stream = MagicMock()
        stream.__aenter__ = AsyncMock(return_value=response, side_effect=side_effect)
        stream.__aexit__ = AsyncMock(return_value=False)

        mock_client = AsyncMock()
        mock_client.stream = MagicMock(return_value=stream)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        return mock_client

    return _make


@pytest.fixture
def make_response():
    """
    Build a mocked streaming httpx.Response.

    The body is served in ``chunk_size`` pieces; ``chunks_read`` counts
    how many were pulled from ``aiter_bytes()``.
    """

    def _make(
        body: bytes = b"<html><head><title>Hello</title></head></html>",
        status_code: int = 200,
        url: str = "https://example.com/",
        headers=None,
        charset=None,
        chunk_size: int = 1024,
    ):
        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.url = url
        mock_response.headers = headers or {"content-type": "text/html"}
        mock_response.charset_encoding = charset
        mock_response.chunks_read = 0

        async def aiter_bytes():
            for start in range(0, len(body), chunk_size):
                mock_response.chunks_read += 1
                yield body[start:start + chunk_size]

        mock_response.aiter_bytes = aiter_bytes
        return mock_response

    return _make

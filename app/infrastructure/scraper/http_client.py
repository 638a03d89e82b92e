"""
HTTP client for fetching pages.

Uses httpx.AsyncClient for non-blocking, streamed HTTP requests with
bounded timeouts, a redirect cap, a body size cap and classified error
handling. The body is returned as raw bytes; decoding is left to the
parser so a charset declared inside the document can be honoured.

Errors are classified as:
  - HostError: any request-level failure (DNS, refused connection,
    timeout, TLS, redirect loop, unusable URL) and any 4xx/5xx from
    the target
  - Everything else propagates unchanged
"""

import codecs
from dataclasses import dataclass, field
from typing import Optional

import httpx

from app.core.config import settings
from app.core.exceptions import HostError
from app.core.logging import get_logger

logger = get_logger(__name__)

# Substrings httpx/OS put in ConnectError messages for unknown hosts
DNS_FAILURE_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "no address associated",
    "getaddrinfo failed",
    "temporary failure in name resolution",
)


@dataclass
class FetchedPage:
    """Structured result of a page fetch."""

    url: str
    status_code: int = 0
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    # Charset from the Content-Type header, None when absent or unknown
    encoding: Optional[str] = None


def _declared_charset(response: httpx.Response) -> Optional[str]:
    """Return the Content-Type charset if Python knows the codec."""
    charset = response.charset_encoding
    if not charset:
        return None
    try:
        codecs.lookup(charset)
    except LookupError:
        logger.info("Ignoring unknown charset=%r", charset)
        return None
    return charset


async def _read_capped(response: httpx.Response, limit: int) -> bytes:
    """Read at most ``limit`` bytes of the body, then stop streaming."""
    buffer = bytearray()
    async for chunk in response.aiter_bytes():
        buffer.extend(chunk)
        if len(buffer) >= limit:
            logger.info(
                "Body of url=%s exceeds %d bytes, truncating", response.url, limit
            )
            break
    return bytes(buffer[:limit])


async def fetch_page(url: str) -> FetchedPage:
    """
    Fetch a page and return its final URL, status, headers and body.

    Args:
        url: The absolute http(s) URL to fetch.

    Returns:
        FetchedPage describing the final response after redirects.

    Raises:
        HostError: If the host cannot be reached or answers with an error.
    """
    timeout = httpx.Timeout(
        timeout=settings.http_timeout,
        connect=settings.http_connect_timeout,
    )

    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            max_redirects=settings.max_redirects,
            headers={
                "User-Agent": settings.user_agent,
                "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
            },
        ) as client:
            logger.info("Fetching url=%s", url)
            async with client.stream("GET", url) as response:
                if response.status_code >= 400:
                    raise HostError(
                        url, f"HTTP {response.status_code} from target host"
                    )

                content = await _read_capped(response, settings.max_content_bytes)

                logger.info(
                    "Fetched url=%s (status=%d, size=%d bytes)",
                    url,
                    response.status_code,
                    len(content),
                )

                return FetchedPage(
                    url=str(response.url),
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    content=content,
                    encoding=_declared_charset(response),
                )

    except HostError:
        raise

    except httpx.InvalidURL as exc:
        logger.warning("Unusable url=%s: %s", url, exc)
        raise HostError(url, f"Invalid URL: {exc}") from exc

    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching url=%s: %s", url, exc)
        raise HostError(
            url, f"Request timed out after {settings.http_timeout}s"
        ) from exc

    except httpx.TooManyRedirects as exc:
        logger.warning("Too many redirects for url=%s: %s", url, exc)
        raise HostError(url, "Too many redirects") from exc

    except httpx.ConnectError as exc:
        error_str = str(exc).lower()
        if any(marker in error_str for marker in DNS_FAILURE_MARKERS):
            logger.warning("DNS resolution failed for url=%s: %s", url, exc)
            raise HostError(url, f"DNS resolution failed: {exc}") from exc

        logger.warning("Connection failed for url=%s: %s", url, exc)
        raise HostError(url, f"Connection failed: {exc}") from exc

    except httpx.RequestError as exc:
        logger.warning("Request error for url=%s: %s", url, exc)
        raise HostError(url, str(exc) or exc.__class__.__name__) from exc

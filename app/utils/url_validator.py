"""
URL validation utilities.

Shared by the request schema and the page parser:
  - is_absolute_url: http(s) scheme plus a host
  - first_error_message: human-readable text of the first validation error
"""

from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlsplit

import httpx

ALLOWED_SCHEMES = frozenset({"http", "https"})

# Prefixes pydantic adds to messages raised from custom validators
_PYDANTIC_MESSAGE_PREFIXES = ("Value error, ", "Assertion failed, ")


def is_absolute_url(value: Optional[str]) -> bool:
    """
    Check whether ``value`` is a well-formed absolute http(s) URL.

    Rejects empty strings, relative references, other schemes,
    URLs without a host, URLs containing whitespace, URLs whose
    port is not a valid number and hosts httpx cannot IDNA-encode
    or decode (e.g. invalid A-labels).
    """
    if not value or any(ch.isspace() for ch in value):
        return False

    try:
        parsed = urlsplit(value)
        # Accessing .port validates it and raises ValueError otherwise
        parsed.port
        # IDNAError is a ValueError; .host decodes xn-- labels
        httpx.URL(value).host
    except (httpx.InvalidURL, ValueError):
        return False

    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(parsed.hostname)


def first_error_message(
    errors: Iterable[Mapping[str, Any]],
    default: str = "Invalid request",
) -> str:
    """
    Return the message of the first validation error.

    Accepts the list produced by ``ValidationError.errors()`` or
    ``RequestValidationError.errors()``.
    """
    for error in errors:
        message = str(error.get("msg") or "")
        for prefix in _PYDANTIC_MESSAGE_PREFIXES:
            if message.startswith(prefix):
                message = message[len(prefix):]
                break
        if message:
            return message
    return default

"""
HTML metadata parser.

Turns a fetched HTML document into a MetadataResult using BeautifulSoup.
Each field is looked up through an ordered list of sources (Open Graph,
Twitter cards, then plain HTML) and the first non-empty value wins.
URL-valued fields are resolved against the final page URL.
"""

import re
from typing import Mapping, Optional, Union
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from app.domain.models import MetadataResult
from app.utils.url_validator import is_absolute_url

_WHITESPACE_RE = re.compile(r"\s+")

TITLE_META = ("og:title", "twitter:title")
DESCRIPTION_META = ("og:description", "twitter:description", "description")
IMAGE_META = (
    "og:image",
    "og:image:url",
    "og:image:secure_url",
    "twitter:image",
    "twitter:image:src",
)

# Ordered by preference; matched against the tokens of <link rel>
ICON_RELS = (
    ("icon",),
    ("shortcut", "icon"),
    ("apple-touch-icon",),
    ("apple-touch-icon-precomposed",),
)


def _clean(value: Optional[str]) -> Optional[str]:
    """Collapse whitespace; empty strings become None."""
    if value is None:
        return None
    cleaned = _WHITESPACE_RE.sub(" ", value).strip()
    return cleaned or None


def _meta_content(soup: BeautifulSoup, *names: str) -> Optional[str]:
    """Return the first non-empty <meta> content among ``names``.

    Both ``property`` and ``name`` attributes are matched, case-insensitively.
    """
    wanted = [name.lower() for name in names]
    by_name: dict[str, str] = {}

    for tag in soup.find_all("meta"):
        key = tag.get("property") or tag.get("name") or tag.get("itemprop")
        content = _clean(tag.get("content"))
        if not key or not content:
            continue
        key = key.strip().lower()
        if key in wanted and key not in by_name:
            by_name[key] = content

    for name in wanted:
        if name in by_name:
            return by_name[name]
    return None


def _resolve_url(base_url: str, value: Optional[str]) -> Optional[str]:
    """Resolve ``value`` against ``base_url``, keeping only http(s) URLs."""
    value = _clean(value)
    if not value:
        return None
    resolved = urljoin(base_url, value)
    return resolved if is_absolute_url(resolved) else None


def _rel_tokens(tag: Tag) -> tuple[str, ...]:
    rel = tag.get("rel") or ()
    if isinstance(rel, str):
        rel = rel.split()
    return tuple(token.lower() for token in rel)


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    title = _meta_content(soup, *TITLE_META)
    if title:
        return title
    if soup.title and soup.title.string:
        return _clean(soup.title.string)
    return None


def extract_description(soup: BeautifulSoup) -> Optional[str]:
    return _meta_content(soup, *DESCRIPTION_META)


def extract_keywords(soup: BeautifulSoup) -> Optional[list[str]]:
    """Split <meta name="keywords"> on commas, dropping blanks and duplicates."""
    raw = _meta_content(soup, "keywords")
    if not raw:
        return None

    keywords: list[str] = []
    seen: set[str] = set()
    for part in raw.split(","):
        keyword = _clean(part)
        if keyword and keyword not in seen:
            seen.add(keyword)
            keywords.append(keyword)
    return keywords or None


def normalize_language(value: Optional[str]) -> Optional[str]:
    """Reduce a language tag to its lower-case primary subtag (en-US → en)."""
    value = _clean(value)
    if not value:
        return None
    # Content-Language may list several languages
    first = value.split(",")[0].strip()
    primary = re.split(r"[-_]", first, maxsplit=1)[0].lower()
    return primary if primary.isalpha() else None


def extract_language(
    soup: BeautifulSoup, headers: Mapping[str, str]
) -> Optional[str]:
    html_tag = soup.find("html")
    candidates: list[Optional[str]] = [
        html_tag.get("lang") if isinstance(html_tag, Tag) else None,
    ]

    for tag in soup.find_all("meta", attrs={"http-equiv": True}):
        if tag["http-equiv"].strip().lower() == "content-language":
            candidates.append(tag.get("content"))

    candidates.append(_meta_content(soup, "og:locale"))
    candidates.append(_header(headers, "content-language"))

    for candidate in candidates:
        language = normalize_language(candidate)
        if language:
            return language
    return None


def extract_icon(soup: BeautifulSoup, base_url: str) -> Optional[str]:
    links: list[tuple[tuple[str, ...], str]] = []
    for tag in soup.find_all("link", href=True):
        links.append((_rel_tokens(tag), tag["href"]))

    for wanted in ICON_RELS:
        for rel, href in links:
            if rel == wanted:
                icon = _resolve_url(base_url, href)
                if icon:
                    return icon

    # Any other rel mentioning "icon", e.g. "mask-icon"
    for rel, href in links:
        if any("icon" in token for token in rel):
            icon = _resolve_url(base_url, href)
            if icon:
                return icon

    parts = urlsplit(base_url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}/favicon.ico"


def extract_image(soup: BeautifulSoup, base_url: str) -> Optional[str]:
    image = _resolve_url(base_url, _meta_content(soup, *IMAGE_META))
    if image:
        return image

    for tag in soup.find_all("link", href=True):
        if "image_src" in _rel_tokens(tag):
            image = _resolve_url(base_url, tag["href"])
            if image:
                return image
    return None


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def parse_metadata(
    markup: Union[str, bytes],
    base_url: str,
    headers: Optional[Mapping[str, str]] = None,
    encoding: Optional[str] = None,
) -> MetadataResult:
    """
    Parse page metadata out of an HTML document.

    Args:
        markup: The document, as text or as raw bytes.
        base_url: The final URL of the page, used to resolve relative links.
        headers: Response headers, consulted for Content-Language.
        encoding: Charset declared by the server. When None, raw bytes
            are decoded from a BOM or <meta charset> in the document.

    Returns:
        MetadataResult with every field that could be found.
    """
    soup = BeautifulSoup(markup or "", "html.parser", from_encoding=encoding)

    return MetadataResult(
        title=extract_title(soup),
        description=extract_description(soup),
        language=extract_language(soup, headers or {}),
        keywords=extract_keywords(soup),
        icon=extract_icon(soup, base_url),
        image=extract_image(soup, base_url),
    )


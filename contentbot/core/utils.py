"""
Utility functions for ContentBot.

Provides text cleanup, slug generation, response unwrapping and
link safety helpers shared by the writer modules.
"""

import html
import re
import unicodedata
from typing import Optional
from urllib.parse import urlparse

# ```json ... ``` or ``` ... ``` anywhere in a model response
CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

SAFE_LINK_PREFIXES = ("/", "#", "mailto:", "tel:")


def slugify(text: str, max_length: int = 60) -> str:
    """
    Convert text to URL-safe slug.

    Punctuation is dropped (``"Joe's"`` becomes ``"joes"``), whitespace
    runs become single hyphens.

    Args:
        text: Text to convert
        max_length: Maximum slug length

    Returns:
        Slug matching ``^[a-z0-9-]*$``
    """
    if not text:
        return ""

    # Normalize unicode and remove accents
    normalized = unicodedata.normalize('NFKD', text)
    ascii_only = normalized.encode('ascii', 'ignore').decode('ascii')

    slug = ascii_only.lower()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)

    return slug[:max_length].strip('-')


def clean_text(text: str) -> str:
    """
    Clean text content by removing extra whitespace and normalizing.

    Args:
        text: Text to clean

    Returns:
        Cleaned text
    """
    if not text:
        return ""

    text = unicodedata.normalize('NFKC', text)
    text = re.sub(r'\s+', ' ', text)

    return text.strip()


def strip_code_fence(text: str) -> str:
    """
    Return the body of the first markdown code fence, or the text unchanged.

    Models frequently wrap JSON answers in ```json fences even when told not to.
    """
    match = CODE_FENCE_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return text


def escape_html(value: Optional[object]) -> str:
    """Escape ``& < > " '`` for safe interpolation into markup."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def is_safe_href(url: str) -> bool:
    """
    Check whether a link target can be rendered into an ``href``.

    Allows absolute http(s) URLs, site-relative paths, fragments and
    mailto/tel links. Everything else (``javascript:``, ``data:``...) is rejected.

    Args:
        url: Candidate link target

    Returns:
        True if the target is safe to render
    """
    if not url or not url.strip():
        return False

    candidate = url.strip()
    # browsers read a backslash like a slash, so "/\\host" is another host
    if candidate.startswith(("//", "/\\", "\\")):
        return False
    if candidate.lower().startswith(SAFE_LINK_PREFIXES):
        return True

    try:
        parsed = urlparse(candidate)
    except ValueError:
        return False

    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)

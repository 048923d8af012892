"""
Validating parsers for provider responses.

All default filling for model output lives here so it can be tested without
any network calls. Every failure is raised as ResponseParseError, which the
orchestrator treats as a failed provider attempt.
"""

import json
import time
from typing import Any, Dict

from pydantic import ValidationError

from contentbot.core.utils import slugify, strip_code_fence
from .models import ContentSection, GenerationDraft, SectionType


class ResponseParseError(ValueError):
    """Provider response was not the JSON shape we asked for."""
    pass


def _load_json_object(text: str) -> Dict[str, Any]:
    body = strip_code_fence(text or "")
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _text(value: Any, default: str = "") -> str:
    """Coerce an optional scalar from model output to a string."""
    if value is None or value == "":
        return default
    return value if isinstance(value, str) else str(value)


def normalize_section(raw: Any, index: int) -> ContentSection:
    """
    Map one element of the ``content`` array to a ContentSection.

    Missing ``id`` becomes ``section-{index}``, missing ``type`` becomes
    ``text``, missing ``content`` becomes ``{}`` and missing ``isLocked``
    becomes False.
    """
    if not isinstance(raw, dict):
        raise ResponseParseError(f"Section {index} is not an object")

    return ContentSection(
        id=_text(raw.get("id"), f"section-{index}"),
        type=_text(raw.get("type"), SectionType.TEXT.value),
        content=raw.get("content") or {},
        is_locked=raw.get("isLocked") is True,
    )


def parse_generation_response(text: str) -> GenerationDraft:
    """
    Parse a full document response.

    Args:
        text: Raw provider text, optionally wrapped in a code fence

    Returns:
        GenerationDraft with defaults filled in

    Raises:
        ResponseParseError: On invalid JSON or missing ``title``/``content``
    """
    parsed = _load_json_object(text)

    title = parsed.get("title")
    content = parsed.get("content")
    if not title or not isinstance(content, list):
        raise ResponseParseError("Missing required fields in response: title and content array")

    title = _text(title)
    sections = [normalize_section(raw, index) for index, raw in enumerate(content)]
    excerpt = _text(parsed.get("excerpt"))

    try:
        return GenerationDraft(
            title=title,
            meta_title=_text(parsed.get("metaTitle"), title[:60]),
            meta_description=_text(parsed.get("metaDescription"), excerpt),
            excerpt=excerpt,
            content=sections,
            suggested_slug=_text(parsed.get("suggestedSlug"), slugify(title)),
        )
    except ValidationError as e:
        raise ResponseParseError(f"Response failed validation: {e}") from e


def parse_section_response(text: str, section_type: str) -> ContentSection:
    """
    Parse a single-section regeneration response.

    The returned section always carries the requested ``section_type`` and is
    never locked, whatever the provider answered.

    Raises:
        ResponseParseError: On invalid JSON or a non-object answer
    """
    parsed = _load_json_object(text)

    return ContentSection(
        id=_text(parsed.get("id"), f"section-{int(time.time() * 1000)}"),
        type=section_type,
        content=parsed.get("content") or {},
        is_locked=False,
    )

"""
Validators for SEO scoring and compliance.

Everything here is deterministic and provider independent: the same document
always produces the same score, checklist and flags, so users can audit why
a post scored the way it did.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Sequence, Union

from contentbot.core.logging import get_logger
from .models import (
    ComplianceFlags,
    ContentSection,
    GenerationDraft,
    GenerationInput,
    SectionType,
    SeoChecklistItem,
    SeoScore,
)

logger = get_logger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

MIN_CONTENT_WORDS = 300
MAX_SLUG_LENGTH = 60

ABSOLUTE_CLAIM_WORDS = ("best", "guaranteed", "#1", "number one", "always", "never fails", "perfect")
SAFETY_WORDS = ("safety", "precaution", "professional", "licensed", "insured", "careful")
RESULTS_DISCLAIMER_PHRASES = ("results may vary", "individual results", "typical results", "based on")
CREDIBILITY_WORDS = ("years of experience", "certified", "licensed", "trained", "professional")


@dataclass(frozen=True)
class SeoCheck:
    """One weighted checklist criterion."""
    id: str
    label: str
    weight: int
    passes: Callable[[GenerationDraft, GenerationInput], bool]


def serialized_word_count(sections: Sequence[ContentSection]) -> int:
    """
    Whitespace-separated token count of the compact JSON form of ``sections``.

    This is a rough estimate (keys and punctuation count too), kept as is so
    scores stay comparable with previously saved posts.
    """
    serialized = json.dumps(
        [section.to_dict() for section in sections],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return len(re.split(r"\s+", serialized))


def _has_section(draft: GenerationDraft, section_type: SectionType) -> bool:
    return any(section.type == section_type.value for section in draft.content)


def _is_url_friendly(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug)) and len(slug) <= MAX_SLUG_LENGTH


SEO_CHECKS: List[SeoCheck] = [
    SeoCheck(
        "keyword-title", "Primary keyword in title", 15,
        lambda d, i: i.service_name.lower() in d.title.lower(),
    ),
    SeoCheck(
        "location-title", "Target location in title", 10,
        lambda d, i: i.target_city.lower() in d.title.lower(),
    ),
    SeoCheck(
        "meta-title-length", "Meta title 50-60 characters", 10,
        lambda d, i: 50 <= len(d.meta_title) <= 60,
    ),
    SeoCheck(
        "meta-desc-length", "Meta description 150-160 characters", 10,
        lambda d, i: 150 <= len(d.meta_description) <= 160,
    ),
    SeoCheck(
        "has-faq", "FAQ section present", 10,
        lambda d, i: _has_section(d, SectionType.FAQ),
    ),
    SeoCheck(
        "has-cta", "Call-to-action section present", 10,
        lambda d, i: _has_section(d, SectionType.CTA),
    ),
    SeoCheck(
        "word-count", "Sufficient content length", 15,
        lambda d, i: serialized_word_count(d.content) >= MIN_CONTENT_WORDS,
    ),
    SeoCheck(
        "has-excerpt", "Excerpt present (50+ chars)", 5,
        lambda d, i: len(d.excerpt) >= 50,
    ),
    SeoCheck(
        "good-slug", "URL-friendly slug", 5,
        lambda d, i: _is_url_friendly(d.suggested_slug),
    ),
    SeoCheck(
        "multiple-sections", "Multiple content sections (3+)", 10,
        lambda d, i: len(d.content) >= 3,
    ),
]


def calculate_seo_score(draft: GenerationDraft, data: GenerationInput) -> SeoScore:
    """
    Score a document against the weighted SEO checklist.

    Args:
        draft: Parsed document (a GenerationOutput works too)
        data: The request it was generated for

    Returns:
        SeoScore with ``round(100 * earned / total)`` and one item per check
    """
    checklist = []
    earned = 0
    total = 0

    for check in SEO_CHECKS:
        passed = bool(check.passes(draft, data))
        checklist.append(SeoChecklistItem(id=check.id, label=check.label, weight=check.weight, is_passed=passed))
        total += check.weight
        if passed:
            earned += check.weight

    score = round(100 * earned / total) if total else 0
    return SeoScore(score=score, checklist=checklist)


def _string_leaves(value: Any) -> Iterable[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from _string_leaves(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _string_leaves(item)


def flatten_document_text(document: Union[GenerationDraft, Sequence[ContentSection]]) -> str:
    """
    Join every piece of reader-visible text into one string.

    Accepts a whole document (title, meta description and excerpt are
    included) or just its sections.
    """
    if isinstance(document, GenerationDraft):
        parts = [document.title, document.meta_description, document.excerpt]
        sections = document.content
    else:
        parts = []
        sections = document

    for section in sections:
        parts.extend(_string_leaves(section.content))

    return "\n".join(part for part in parts if part)


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def check_compliance(text: str) -> ComplianceFlags:
    """
    Scan flattened document text for compliance signals.

    Args:
        text: Output of flatten_document_text (or any plain text)

    Returns:
        ComplianceFlags; each flag is "at least one keyword of its set present"
    """
    lowered = (text or "").lower()

    flags = ComplianceFlags(
        has_absolute_claims=_contains_any(lowered, ABSOLUTE_CLAIM_WORDS),
        has_safety_disclaimers=_contains_any(lowered, SAFETY_WORDS),
        has_results_disclaimer=_contains_any(lowered, RESULTS_DISCLAIMER_PHRASES),
        has_credibility_block=_contains_any(lowered, CREDIBILITY_WORDS),
    )

    if flags.has_absolute_claims:
        logger.debug("Compliance scan found absolute claim language")
    return flags

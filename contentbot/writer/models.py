"""
Core Pydantic models for the blog writer.

Defines the generation request, the section-based document produced by the
providers, and the SEO/compliance results computed over it. Python attributes
are snake_case; the wire format is camelCase because the blog editor and the
HTML renderer read those field names.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from contentbot.core.logging import get_logger

logger = get_logger(__name__)


class BlogType(str, Enum):
    """Blog archetypes; each drives prompt phrasing and default layout."""
    JOB_SHOWCASE = "job_showcase"
    EXPERT_OPINION = "expert_opinion"
    SEASONAL_TIP = "seasonal_tip"
    FAQ_EDUCATIONAL = "faq_educational"


class ContentGoal(str, Enum):
    """What the post is optimised for."""
    RANK_SEO = "rank_seo"
    EDUCATE = "educate"
    CONVERT = "convert"


class TonePreference(str, Enum):
    """Writing tone requested by the business."""
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    TECHNICAL = "technical"


class SectionType(str, Enum):
    """Section discriminants understood by the renderer and the editor."""
    HERO = "hero"
    TEXT = "text"
    JOB_SUMMARY = "job_summary"
    BEFORE_AFTER = "before_after"
    PROCESS_TIMELINE = "process_timeline"
    PRICING_FACTORS = "pricing_factors"
    FAQ = "faq"
    CTA = "cta"


KNOWN_SECTION_TYPES = frozenset(t.value for t in SectionType)

PRICING_IMPACT_LEVELS = ("low", "medium", "high")


class CamelModel(BaseModel):
    """Base model serialising to camelCase while accepting either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class LayoutSection(CamelModel):
    """One slot of a layout template."""
    id: str = Field(..., description="Slot identifier")
    type: str = Field(..., description="Section type to generate for this slot")
    label: str = Field(..., description="Human label shown to the model and the editor")
    required: bool = Field(default=False, description="Whether the model must produce this section")


class JobRecord(CamelModel):
    """Completed job referenced by job showcase posts."""
    title: str
    customer_address: str
    completed_date: str
    notes: Optional[str] = None
    images: List[str] = Field(default_factory=list, description="Image references")


class GenerationInput(CamelModel):
    """Parameters for one blog generation call."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    blog_type: BlogType
    service_name: str = Field(..., min_length=1)
    service_description: Optional[str] = None
    target_city: str = Field(..., min_length=1)
    target_neighborhood: Optional[str] = None
    goal: ContentGoal = ContentGoal.RANK_SEO
    job_data: Optional[JobRecord] = None
    talking_points: List[str] = Field(default_factory=list)
    tone_preference: TonePreference = TonePreference.PROFESSIONAL
    layout_template: List[LayoutSection] = Field(default_factory=list)


class SectionRegenerateInput(CamelModel):
    """Parameters for regenerating one section of an existing post."""

    model_config = ConfigDict(use_enum_values=True)

    section_type: str = Field(..., min_length=1)
    existing_content: List["ContentSection"] = Field(default_factory=list)
    blog_type: BlogType
    service_name: str = Field(..., min_length=1)
    target_city: str = Field(..., min_length=1)
    tone_preference: TonePreference = TonePreference.PROFESSIONAL
    context: Optional[str] = None


# ---------------------------------------------------------------------------
# Typed section payloads
# ---------------------------------------------------------------------------

class SectionContent(CamelModel):
    """
    Base for typed section payloads.

    Model output is loose: fields go missing, come back as null or as numbers.
    Nulls (also inside lists) are dropped so defaults apply, numbers are
    coerced to strings and unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, list):
                value = [item for item in value if item is not None]
            cleaned[key] = value
        return cleaned


class HeroContent(SectionContent):
    headline: str = ""
    subheadline: str = ""
    image_url: Optional[str] = None


class TextContent(SectionContent):
    heading: str = ""
    body: str = ""


class JobSummaryContent(SectionContent):
    project_type: str = ""
    location: str = ""
    duration: str = ""
    highlights: List[str] = Field(default_factory=list)


class BeforeAfterContent(SectionContent):
    before_description: str = ""
    after_description: str = ""
    improvements: List[str] = Field(default_factory=list)


class TimelineStep(SectionContent):
    title: str = ""
    description: str = ""
    duration: str = ""


class ProcessTimelineContent(SectionContent):
    steps: List[TimelineStep] = Field(default_factory=list)


class PricingFactor(SectionContent):
    name: str = ""
    description: str = ""
    impact: str = "medium"

    @property
    def impact_level(self) -> str:
        """Impact normalised to low/medium/high."""
        level = self.impact.strip().lower()
        return level if level in PRICING_IMPACT_LEVELS else "medium"


class PricingFactorsContent(SectionContent):
    intro: str = ""
    factors: List[PricingFactor] = Field(default_factory=list)


class FaqItem(SectionContent):
    question: str = ""
    answer: str = ""


class FaqContent(SectionContent):
    questions: List[FaqItem] = Field(default_factory=list)


class CtaContent(SectionContent):
    heading: str = ""
    body: str = ""
    button_text: str = ""
    button_url: Optional[str] = None


def _field_key(name: str) -> str:
    """Match snake_case and camelCase spellings of the same field."""
    return name.replace("_", "").lower()


SECTION_CONTENT_MODELS: Dict[str, Type[SectionContent]] = {
    SectionType.HERO.value: HeroContent,
    SectionType.TEXT.value: TextContent,
    SectionType.JOB_SUMMARY.value: JobSummaryContent,
    SectionType.BEFORE_AFTER.value: BeforeAfterContent,
    SectionType.PROCESS_TIMELINE.value: ProcessTimelineContent,
    SectionType.PRICING_FACTORS.value: PricingFactorsContent,
    SectionType.FAQ.value: FaqContent,
    SectionType.CTA.value: CtaContent,
}


# ---------------------------------------------------------------------------
# Document models
# ---------------------------------------------------------------------------

class ContentSection(CamelModel):
    """
    One block of a generated post.

    ``content`` is kept exactly as the provider produced it so the editor
    round-trips unknown keys; use :meth:`typed_content` for a validated view.
    """
    id: str
    type: str = SectionType.TEXT.value
    content: Any = Field(default_factory=dict)
    is_locked: bool = False

    @property
    def is_known_type(self) -> bool:
        return self.type in KNOWN_SECTION_TYPES

    def typed_content(self) -> Optional[SectionContent]:
        """
        Validate ``content`` against the payload model for ``type``.

        Returns None for unknown types or non-object payloads. Top-level keys
        that fail validation are dropped so the remaining fields still render.
        """
        model = SECTION_CONTENT_MODELS.get(self.type)
        if model is None or not isinstance(self.content, dict):
            return None
        try:
            return model.model_validate(self.content)
        except ValidationError as e:
            bad_keys = {_field_key(str(error["loc"][0])) for error in e.errors() if error["loc"]}
            logger.warning(f"Section '{self.id}' ({self.type}) has malformed fields: {sorted(bad_keys)}")

        salvaged = {
            key: value for key, value in self.content.items()
            if _field_key(key) not in bad_keys
        }
        try:
            return model.model_validate(salvaged)
        except ValidationError:
            return model()


class SeoChecklistItem(CamelModel):
    """A weighted pass/fail SEO criterion."""
    id: str
    label: str
    weight: int = Field(..., ge=0)
    is_passed: bool


class SeoScore(CamelModel):
    """Deterministic SEO score with the checklist that produced it."""
    score: int = Field(..., ge=0, le=100)
    checklist: List[SeoChecklistItem]


class GenerationDraft(CamelModel):
    """Parsed provider output before scoring."""
    title: str
    meta_title: str = ""
    meta_description: str = ""
    excerpt: str = ""
    content: List[ContentSection] = Field(default_factory=list)
    suggested_slug: str = ""


class GenerationOutput(GenerationDraft):
    """Scored, immutable result of one generation call."""

    model_config = ConfigDict(frozen=True)

    seo_score: int = Field(..., ge=0, le=100)
    seo_checklist: List[SeoChecklistItem] = Field(default_factory=list)


class ComplianceFlags(CamelModel):
    """
    Lexical compliance signals.

    ``has_absolute_claims`` is a negative signal (forbidden language found);
    the other three are positive signals.
    """
    has_absolute_claims: bool = False
    has_safety_disclaimers: bool = False
    has_results_disclaimer: bool = False
    has_credibility_block: bool = False


class LayoutTemplate(CamelModel):
    """Named default layout for a blog archetype."""
    name: str
    blog_type: BlogType
    sections: List[LayoutSection]


SectionRegenerateInput.model_rebuild()

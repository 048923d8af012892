"""
Template renderer for converting blog sections to embeddable HTML.

Produces a fragment (no <html>/<head>) for the external page builder. Every
interpolated value is escaped: section text is untrusted model output.
"""

from typing import Callable, Dict, Optional, Sequence

from contentbot.core.logging import get_logger
from contentbot.core.utils import escape_html, is_safe_href
from .models import (
    BeforeAfterContent,
    ContentSection,
    CtaContent,
    FaqContent,
    HeroContent,
    JobSummaryContent,
    PricingFactorsContent,
    ProcessTimelineContent,
    SectionType,
    TextContent,
)

logger = get_logger(__name__)

DEFAULT_CTA_HEADING = "Ready to Get Started?"
DEFAULT_CTA_BUTTON = "Contact Us"
DEFAULT_CTA_URL = "#contact"


def _list_items(values: Sequence[str]) -> str:
    return "".join(f"<li>{escape_html(value)}</li>" for value in values)


class TemplateRenderer:
    """
    Renders ContentSection sequences to HTML.

    One render method per known section type. Unknown types render a plain
    paragraph when their content is a string and nothing otherwise.
    """

    def __init__(self):
        self._renderers: Dict[str, Callable[[ContentSection], str]] = {
            SectionType.HERO.value: self._render_hero,
            SectionType.TEXT.value: self._render_text,
            SectionType.JOB_SUMMARY.value: self._render_job_summary,
            SectionType.BEFORE_AFTER.value: self._render_before_after,
            SectionType.PROCESS_TIMELINE.value: self._render_process_timeline,
            SectionType.PRICING_FACTORS.value: self._render_pricing_factors,
            SectionType.FAQ.value: self._render_faq,
            SectionType.CTA.value: self._render_cta,
        }

    def render_sections(self, sections: Sequence[ContentSection]) -> str:
        """
        Render sections in order.

        Args:
            sections: Document sections

        Returns:
            HTML fragment, one block per rendered section
        """
        parts = []
        for section in sections:
            block = self._render_section(section)
            if block:
                parts.append(block)
        return "\n".join(parts)

    def _render_section(self, section: ContentSection) -> Optional[str]:
        renderer = self._renderers.get(section.type)
        if renderer is None or not isinstance(section.content, dict):
            return self._render_fallback(section)
        return renderer(section)

    def _render_fallback(self, section: ContentSection) -> Optional[str]:
        if isinstance(section.content, str):
            return f"<section><p>{escape_html(section.content)}</p></section>"
        logger.debug(f"Skipping section '{section.id}' with unrenderable type '{section.type}'")
        return None

    def _render_hero(self, section: ContentSection) -> str:
        content: HeroContent = section.typed_content()
        lead = f'<p class="lead">{escape_html(content.subheadline)}</p>' if content.subheadline else ""
        return f"""<header class="blog-hero">
  <h1>{escape_html(content.headline)}</h1>
  {lead}
</header>"""

    def _render_text(self, section: ContentSection) -> str:
        content: TextContent = section.typed_content()
        heading = f"<h2>{escape_html(content.heading)}</h2>" if content.heading else ""
        return f"""<section class="blog-text">
  {heading}
  <p>{escape_html(content.body)}</p>
</section>"""

    def _render_job_summary(self, section: ContentSection) -> str:
        content: JobSummaryContent = section.typed_content()
        highlights = ""
        if content.highlights:
            highlights = f"<h3>Highlights</h3><ul>{_list_items(content.highlights)}</ul>"
        return f"""<section class="blog-job-summary">
  <h2>Project Overview</h2>
  <ul>
    <li><strong>Project Type:</strong> {escape_html(content.project_type)}</li>
    <li><strong>Location:</strong> {escape_html(content.location)}</li>
    <li><strong>Duration:</strong> {escape_html(content.duration)}</li>
  </ul>
  {highlights}
</section>"""

    def _render_before_after(self, section: ContentSection) -> str:
        content: BeforeAfterContent = section.typed_content()
        improvements = ""
        if content.improvements:
            improvements = f"<h3>Key Improvements</h3><ul>{_list_items(content.improvements)}</ul>"
        return f"""<section class="blog-before-after">
  <h2>Before &amp; After</h2>
  <div class="before">
    <h3>Before</h3>
    <p>{escape_html(content.before_description)}</p>
  </div>
  <div class="after">
    <h3>After</h3>
    <p>{escape_html(content.after_description)}</p>
  </div>
  {improvements}
</section>"""

    def _render_process_timeline(self, section: ContentSection) -> str:
        content: ProcessTimelineContent = section.typed_content()
        steps = []
        for number, step in enumerate(content.steps, 1):
            duration = f'<span class="duration">{escape_html(step.duration)}</span>' if step.duration else ""
            steps.append(
                f"<li><h3>Step {number}: {escape_html(step.title)}</h3>"
                f"<p>{escape_html(step.description)}</p>{duration}</li>"
            )
        return f"""<section class="blog-process">
  <h2>Our Process</h2>
  <ol class="process-steps">{''.join(steps)}</ol>
</section>"""

    def _render_pricing_factors(self, section: ContentSection) -> str:
        content: PricingFactorsContent = section.typed_content()
        intro = f"<p>{escape_html(content.intro)}</p>" if content.intro else ""
        factors = []
        for factor in content.factors:
            level = factor.impact_level
            factors.append(
                f"<li><strong>{escape_html(factor.name)}</strong>"
                f"<p>{escape_html(factor.description)}</p>"
                f'<span class="impact impact-{level}">Impact: {level}</span></li>'
            )
        return f"""<section class="blog-pricing-factors">
  <h2>What Affects Pricing</h2>
  {intro}
  <ul>{''.join(factors)}</ul>
</section>"""

    def _render_faq(self, section: ContentSection) -> str:
        content: FaqContent = section.typed_content()
        entries = "".join(
            f"<dt>{escape_html(item.question)}</dt><dd>{escape_html(item.answer)}</dd>"
            for item in content.questions
        )
        return f"""<section class="blog-faq">
  <h2>Frequently Asked Questions</h2>
  <dl>{entries}</dl>
</section>"""

    def _render_cta(self, section: ContentSection) -> str:
        content: CtaContent = section.typed_content()
        href = content.button_url if content.button_url and is_safe_href(content.button_url) else DEFAULT_CTA_URL
        return f"""<section class="blog-cta">
  <h2>{escape_html(content.heading or DEFAULT_CTA_HEADING)}</h2>
  <p>{escape_html(content.body)}</p>
  <a href="{escape_html(href.strip())}" class="cta-button">{escape_html(content.button_text or DEFAULT_CTA_BUTTON)}</a>
</section>"""


def blog_content_to_html(sections: Sequence[ContentSection]) -> str:
    """
    Convenience function to render blog sections to an HTML fragment.

    Args:
        sections: Document sections in display order

    Returns:
        Escaped HTML fragment
    """
    return TemplateRenderer().render_sections(sections)

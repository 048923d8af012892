"""Default layout templates, one per blog archetype."""

from typing import List, Optional

from .models import BlogType, LayoutSection, LayoutTemplate


def _slot(id: str, type: str, label: str, required: bool) -> LayoutSection:
    return LayoutSection(id=id, type=type, label=label, required=required)


DEFAULT_LAYOUT_TEMPLATES: List[LayoutTemplate] = [
    LayoutTemplate(
        name="Job Showcase Template",
        blog_type=BlogType.JOB_SHOWCASE,
        sections=[
            _slot("hero", "hero", "Hero Section", True),
            _slot("job-summary", "job_summary", "Project Summary", True),
            _slot("before-after", "before_after", "Before & After", True),
            _slot("process", "process_timeline", "Our Process", False),
            _slot("faq", "faq", "FAQ", False),
            _slot("cta", "cta", "Call to Action", True),
        ],
    ),
    LayoutTemplate(
        name="Expert Opinion Template",
        blog_type=BlogType.EXPERT_OPINION,
        sections=[
            _slot("hero", "hero", "Hero Section", True),
            _slot("intro", "text", "Introduction", True),
            _slot("main-points", "text", "Main Points", True),
            _slot("pricing-factors", "pricing_factors", "Cost Factors", False),
            _slot("faq", "faq", "FAQ", True),
            _slot("cta", "cta", "Call to Action", True),
        ],
    ),
    LayoutTemplate(
        name="Seasonal Tips Template",
        blog_type=BlogType.SEASONAL_TIP,
        sections=[
            _slot("hero", "hero", "Hero Section", True),
            _slot("intro", "text", "Seasonal Overview", True),
            _slot("tips", "process_timeline", "Tips & Steps", True),
            _slot("faq", "faq", "FAQ", False),
            _slot("cta", "cta", "Call to Action", True),
        ],
    ),
    LayoutTemplate(
        name="FAQ Educational Template",
        blog_type=BlogType.FAQ_EDUCATIONAL,
        sections=[
            _slot("hero", "hero", "Hero Section", True),
            _slot("intro", "text", "Introduction", True),
            _slot("faq", "faq", "Comprehensive FAQ", True),
            _slot("pricing-factors", "pricing_factors", "Pricing Guide", False),
            _slot("cta", "cta", "Call to Action", True),
        ],
    ),
]


def get_default_layout(blog_type: str) -> Optional[LayoutTemplate]:
    """Return the shipped template for ``blog_type`` (enum or value), if any."""
    value = blog_type.value if isinstance(blog_type, BlogType) else blog_type
    for template in DEFAULT_LAYOUT_TEMPLATES:
        if template.blog_type == value:
            return template
    return None

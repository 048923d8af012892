"""
Prompt builders for blog generation, section regeneration and alt text.

The JSON contracts and per-section content formats written here are the
same field names the parser, the renderer and the editor read.
"""

import json
from typing import Dict, List, Optional

from .models import ContentSection, GenerationInput, SectionRegenerateInput

BLOG_TYPE_DESCRIPTIONS: Dict[str, str] = {
    "job_showcase": "a case study showcasing a completed job with before/after details and results",
    "expert_opinion": "an expert opinion piece establishing authority on a topic in your industry",
    "seasonal_tip": "seasonal tips and advice relevant to homeowners in the area",
    "faq_educational": "an educational FAQ-style post answering common customer questions",
}

TONE_DESCRIPTIONS: Dict[str, str] = {
    "professional": "professional, authoritative, and trustworthy",
    "friendly": "warm, approachable, and conversational",
    "technical": "detailed, technical, and informative",
}

GOAL_DESCRIPTIONS: Dict[str, str] = {
    "rank_seo": "ranking well in local search results for the target location",
    "educate": "educating potential customers about the service",
    "convert": "converting readers into leads with strong calls to action",
}

SECTION_FORMATS: Dict[str, str] = {
    "hero": '{ "headline": "...", "subheadline": "...", "imageUrl": null }',
    "text": '{ "heading": "...", "body": "..." }',
    "job_summary": '{ "projectType": "...", "location": "...", "duration": "...", "highlights": ["..."] }',
    "before_after": '{ "beforeDescription": "...", "afterDescription": "...", "improvements": ["..."] }',
    "process_timeline": '{ "steps": [{ "title": "...", "description": "...", "duration": "..." }] }',
    "pricing_factors": '{ "intro": "...", "factors": [{ "name": "...", "description": "...", "impact": "low|medium|high" }] }',
    "faq": '{ "questions": [{ "question": "...", "answer": "..." }] }',
    "cta": '{ "heading": "...", "body": "...", "buttonText": "...", "buttonUrl": null }',
}

DOCUMENT_CONTRACT = """{
  "title": "Blog post title",
  "metaTitle": "SEO meta title (50-60 chars)",
  "metaDescription": "SEO meta description (150-160 chars)",
  "excerpt": "Brief excerpt for previews (100-150 chars)",
  "suggestedSlug": "url-friendly-slug",
  "content": [
    {
      "id": "unique-id",
      "type": "section-type",
      "content": { section-specific content },
      "isLocked": false
    }
  ]
}"""

SEO_REQUIREMENTS = """SEO REQUIREMENTS:
1. Include the target city/location naturally throughout the content (2-4 times)
2. Use the service name in the title and first paragraph
3. Include relevant keywords naturally
4. Write a compelling meta title (50-60 characters) and meta description (150-160 characters)
5. Create a URL-friendly slug
6. Aim for 800-1500 words total"""

COMPLIANCE_REQUIREMENTS = """COMPLIANCE REQUIREMENTS:
- Avoid absolute claims like "best", "guaranteed", "always works"
- Include appropriate disclaimers for results
- Add safety warnings where relevant to the service
- Include credibility indicators (experience, certifications mentioned if relevant)"""

ALT_TEXT_PROMPT = """Generate SEO-friendly alt text for an image. The image is from a service business blog post.
{context_line}
Requirements:
- Keep it under 125 characters
- Be descriptive but concise
- Include relevant keywords naturally
- Describe what's visible in the image

Respond with only the alt text, no quotes or additional formatting."""


def section_formats_block(section_types: Optional[List[str]] = None) -> str:
    """Render the content format lines for the given (or all) section types."""
    types = section_types or list(SECTION_FORMATS)
    lines = [f"- {t}: {SECTION_FORMATS[t]}" for t in types if t in SECTION_FORMATS]
    return "SECTION CONTENT FORMATS:\n" + "\n".join(lines)


def build_blog_prompt(data: GenerationInput) -> str:
    """
    Render the full generation prompt.

    Args:
        data: Generation request

    Returns:
        Prompt text including the JSON response contract
    """
    location = data.target_city
    if data.target_neighborhood:
        location += f", specifically the {data.target_neighborhood} area"

    parts = [
        "You are an expert SEO content writer specializing in local service businesses.",
        f"Create {BLOG_TYPE_DESCRIPTIONS.get(data.blog_type, 'a blog post')} for a {data.service_name} business.",
        "",
        f"TARGET LOCATION: {location}",
        "",
        f"TONE: Write in a {TONE_DESCRIPTIONS.get(data.tone_preference, 'professional')} tone.",
        "",
        f"PRIMARY GOAL: The content should focus on {GOAL_DESCRIPTIONS.get(data.goal, 'providing value to readers')}.",
    ]

    if data.service_description:
        parts += ["", f"SERVICE DESCRIPTION: {data.service_description}"]

    if data.job_data:
        job = data.job_data
        parts += [
            "",
            "JOB DETAILS TO REFERENCE:",
            f"- Job Title: {job.title}",
            f"- Location: {job.customer_address}",
            f"- Completed: {job.completed_date}",
        ]
        if job.notes:
            parts.append(f"- Notes: {job.notes}")
        if job.images:
            parts.append(f"- Images available: {len(job.images)} photos")

    if data.talking_points:
        parts += ["", "KEY TALKING POINTS TO INCLUDE:"]
        parts += [f"{i}. {point}" for i, point in enumerate(data.talking_points, 1)]

    parts += ["", "REQUIRED SECTIONS (based on template):"]
    for section in data.layout_template:
        marker = " [REQUIRED]" if section.required else ""
        parts.append(f"- {section.label} ({section.type}){marker}")

    parts += [
        "",
        SEO_REQUIREMENTS,
        "",
        COMPLIANCE_REQUIREMENTS,
        "",
        "Respond with a JSON object containing:",
        DOCUMENT_CONTRACT,
        "",
        section_formats_block(),
    ]

    return "\n".join(parts)


def build_section_prompt(data: SectionRegenerateInput) -> str:
    """
    Render the single-section regeneration prompt.

    Only the ``{type, id}`` skeleton of the existing post is sent as context.
    """
    skeleton = json.dumps(
        [{"type": section.type, "id": section.id} for section in data.existing_content],
        indent=2,
    )

    parts = [
        f"You are an expert SEO content writer. Regenerate ONLY the {data.section_type} section "
        f"for a {data.blog_type} blog post about {data.service_name} in {data.target_city}.",
        "",
        f"TONE: {data.tone_preference}",
    ]

    if data.context:
        parts += ["", f"ADDITIONAL CONTEXT: {data.context}"]

    parts += [
        "",
        "Current content structure:",
        skeleton,
        "",
        f"Generate a new version of the {data.section_type} section. Respond with a JSON object:",
        "{",
        '  "id": "unique-id",',
        f'  "type": "{data.section_type}",',
        '  "content": { section-specific content },',
        '  "isLocked": false',
        "}",
    ]

    if data.section_type in SECTION_FORMATS:
        parts += ["", section_formats_block([data.section_type])]

    return "\n".join(parts)


def build_alt_text_prompt(context: Optional[str] = None) -> str:
    """Render the image description prompt."""
    context_line = f"Context: {context}\n" if context else ""
    return ALT_TEXT_PROMPT.format(context_line=context_line)


def describe_layout(sections: List[ContentSection]) -> str:
    """Short ``type#id`` summary used in log lines."""
    return ", ".join(f"{s.type}#{s.id}" for s in sections)

"""
ContentBot Blog Writer Module

Generates SEO-optimized, section-based blog posts for service businesses
using Claude, Gemini or OpenAI with ordered fallback.

Main Components:
- models: Pydantic models for requests, sections and scored documents
- llm_provider: Provider adapters, shared client registry and factory
- prompts: Prompt builders for posts, sections and alt text
- parsers: Validating parsers for provider responses
- validators: Deterministic SEO scoring and compliance flags
- blog_generator: Fallback orchestration
- template_renderer: Escaped HTML rendering of sections
- layouts: Default layout templates per blog type
- app: FastAPI application with REST endpoints

Key Features:
- One provider at a time, in fixed priority order, no retries
- Auditable SEO checklist independent of the provider used
- Untrusted model text is always escaped before rendering
"""

from .models import (
    BlogType,
    ContentSection,
    GenerationDraft,
    GenerationInput,
    GenerationOutput,
    SectionRegenerateInput,
    ComplianceFlags,
    LayoutTemplate,
)
from .llm_provider import LLMProvider, LLMProviderFactory, ClientRegistry, ProviderResult
from .blog_generator import (
    BlogContentGenerator,
    ContentGenerationError,
    ProvidersExhaustedError,
    generate_blog_content,
    regenerate_section,
    generate_alt_text,
)
from .validators import calculate_seo_score, check_compliance, flatten_document_text
from .template_renderer import TemplateRenderer, blog_content_to_html
from .layouts import DEFAULT_LAYOUT_TEMPLATES, get_default_layout

# Main exports
__all__ = [
    # Models
    "BlogType",
    "ContentSection",
    "GenerationDraft",
    "GenerationInput",
    "GenerationOutput",
    "SectionRegenerateInput",
    "ComplianceFlags",
    "LayoutTemplate",

    # LLM Providers
    "LLMProvider",
    "LLMProviderFactory",
    "ClientRegistry",
    "ProviderResult",

    # Generation
    "BlogContentGenerator",
    "ContentGenerationError",
    "ProvidersExhaustedError",
    "generate_blog_content",
    "regenerate_section",
    "generate_alt_text",

    # Validation
    "calculate_seo_score",
    "check_compliance",
    "flatten_document_text",

    # Rendering
    "TemplateRenderer",
    "blog_content_to_html",
    "DEFAULT_LAYOUT_TEMPLATES",
    "get_default_layout",
]

"""
FastAPI application for the blog writer service.

Thin HTTP wrapper the admin blog editor uses to call the generation
pipeline: full post generation, single-section regeneration, alt text,
compliance flags, SEO scoring and HTML rendering.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import Field, model_validator

from contentbot import __version__
from contentbot.core.logging import get_logger, setup_logging
from contentbot.core.settings import get_settings
from .blog_generator import BlogContentGenerator, ContentGenerationError, ProvidersExhaustedError, get_blog_generator
from .layouts import DEFAULT_LAYOUT_TEMPLATES
from .llm_provider import LLMProviderFactory
from .models import (
    CamelModel,
    ComplianceFlags,
    ContentSection,
    GenerationDraft,
    GenerationInput,
    GenerationOutput,
    LayoutTemplate,
    SectionRegenerateInput,
    SeoChecklistItem,
)
from .template_renderer import blog_content_to_html
from .validators import calculate_seo_score, check_compliance, flatten_document_text

setup_logging("writer")
logger = get_logger(__name__)


# Request/Response Models
class AltTextRequest(CamelModel):
    image_url: str = Field(..., min_length=1, description="Image to describe")
    context: Optional[str] = Field(None, description="Post context for the description")


class AltTextResponse(CamelModel):
    alt_text: str


class ComplianceRequest(CamelModel):
    """Either raw text or a list of sections to scan."""
    text: Optional[str] = None
    sections: Optional[List[ContentSection]] = None

    @model_validator(mode="after")
    def require_text_or_sections(self):
        if self.text is None and self.sections is None:
            raise ValueError("Provide either text or sections")
        return self


class SeoScoreRequest(CamelModel):
    output: GenerationDraft
    data: GenerationInput = Field(..., alias="input")


class SeoScoreResponse(CamelModel):
    seo_score: int
    seo_checklist: List[SeoChecklistItem]


class RenderRequest(CamelModel):
    sections: List[ContentSection]


class RenderResponse(CamelModel):
    html: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared generator (and its SDK clients) once at startup."""
    generator = get_blog_generator()
    logger.info(f"Starting writer service, providers available: {generator.available_providers or 'none'}")
    yield


# FastAPI app initialization
app = FastAPI(
    title="Blog Writer API",
    description="Generate, score and render SEO blog content for service businesses",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# The editor is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_generator() -> BlogContentGenerator:
    """Dependency returning the process-wide generator."""
    return get_blog_generator()


@app.exception_handler(ProvidersExhaustedError)
async def providers_exhausted_handler(request, exc: ProvidersExhaustedError):
    """No provider could serve the request; the editor can retry."""
    return JSONResponse(
        status_code=502,
        content={"error": "Generation failed", "detail": str(exc)}
    )


@app.exception_handler(ContentGenerationError)
async def generation_error_handler(request, exc: ContentGenerationError):
    logger.error(f"Content generation error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Generation error", "detail": str(exc)}
    )


@app.get("/", tags=["System"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "ContentBot Blog Writer API",
        "service": "writer",
        "version": __version__,
        "provider_types": LLMProviderFactory.list_providers(),
    }


@app.get("/healthz", tags=["System"])
async def health_check(generator: BlogContentGenerator = Depends(get_generator)):
    """Health check; reports which providers have credentials."""
    return {
        "status": "healthy",
        "service": "writer",
        "providers": generator.available_providers,
        "provider_status": [await provider.health_check() for provider in generator.providers],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/layout-templates", response_model=List[LayoutTemplate], tags=["Templates"])
async def layout_templates():
    """Default layout template per blog type."""
    return DEFAULT_LAYOUT_TEMPLATES


@app.post("/generate", response_model=GenerationOutput, tags=["Generation"])
async def generate_content(
    request: GenerationInput,
    generator: BlogContentGenerator = Depends(get_generator)
):
    """Generate and score a full blog post."""
    return await generator.generate_blog_content(request)


@app.post("/sections/regenerate", response_model=ContentSection, tags=["Generation"])
async def regenerate_section(
    request: SectionRegenerateInput,
    generator: BlogContentGenerator = Depends(get_generator)
):
    """Regenerate a single section of an existing post."""
    return await generator.regenerate_section(request)


@app.post("/alt-text", response_model=AltTextResponse, tags=["Generation"])
async def alt_text(
    request: AltTextRequest,
    generator: BlogContentGenerator = Depends(get_generator)
):
    """Describe an image for alt text; falls back to a generic description."""
    text = await generator.generate_alt_text(request.image_url, request.context)
    return AltTextResponse(alt_text=text)


@app.post("/compliance", response_model=ComplianceFlags, tags=["Validation"])
async def compliance(request: ComplianceRequest):
    """Lexical compliance flags for text or sections."""
    text = request.text if request.text is not None else flatten_document_text(request.sections)
    return check_compliance(text)


@app.post("/seo-score", response_model=SeoScoreResponse, tags=["Validation"])
async def seo_score(request: SeoScoreRequest):
    """Recompute the SEO score after the editor changed a post."""
    seo = calculate_seo_score(request.output, request.data)
    return SeoScoreResponse(seo_score=seo.score, seo_checklist=seo.checklist)


@app.post("/render/html", response_model=RenderResponse, tags=["Rendering"])
async def render_html(request: RenderRequest):
    """Render sections to an escaped HTML fragment."""
    return RenderResponse(html=blog_content_to_html(request.sections))


def run_server(host: str = "0.0.0.0", port: int = 8004, reload: bool = False):
    """
    Run the FastAPI server.

    Args:
        host: Host address
        port: Port number
        reload: Enable auto-reload for development
    """
    uvicorn.run(
        "contentbot.writer.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


if __name__ == "__main__":
    settings = get_settings()
    logger.info("Starting writer service via uvicorn")
    run_server(
        host=settings.service_host,
        port=settings.service_port or 8004,
        reload=settings.debug,
    )

"""
Blog content generator - orchestrates providers, parsing and scoring.

This module turns a generation request into a scored document:
1. Renders the prompt for the request
2. Tries each provider in fixed priority order, strictly one at a time
3. Parses the first successful answer into typed sections
4. Scores the document against the SEO checklist

A provider that is unconfigured is skipped silently; a provider that fails
(transport error, empty answer, unparseable answer) is logged and the next
one is tried. Only when every provider has been exhausted does the call fail.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from contentbot.core.logging import get_logger
from contentbot.core.utils import clean_text
from contentbot.core.settings import Settings, get_settings
from .llm_provider import (
    ClientRegistry,
    LLMProvider,
    LLMProviderFactory,
    ProviderStatus,
    get_client_registry,
)
from .models import ContentSection, GenerationDraft, GenerationInput, GenerationOutput, SectionRegenerateInput
from .parsers import ResponseParseError, parse_generation_response, parse_section_response
from .prompts import build_alt_text_prompt, build_blog_prompt, build_section_prompt, describe_layout
from .validators import calculate_seo_score

logger = get_logger(__name__)

T = TypeVar("T")


class ContentGenerationError(Exception):
    """Base exception for the content generation pipeline."""
    pass


@dataclass(frozen=True)
class ProviderAttempt:
    """What happened when one provider was tried."""
    provider: str
    status: ProviderStatus
    error: Optional[Exception] = None


class ProvidersExhaustedError(ContentGenerationError):
    """
    Every provider was unavailable or failed.

    The last failure, if any provider was actually called, is chained as
    ``__cause__`` and repeated in the message.
    """

    def __init__(self, operation: str, attempts: Sequence[ProviderAttempt]):
        self.operation = operation
        self.attempts = list(attempts)
        failures = [a for a in self.attempts if a.status == ProviderStatus.ERROR]
        self.last_error = failures[-1].error if failures else None

        if self.last_error is None:
            message = f"No AI provider is configured to {operation}"
        else:
            tried = ", ".join(a.provider for a in failures)
            message = f"All AI providers failed to {operation} (tried: {tried}); last error: {self.last_error}"
        super().__init__(message)


class BlogContentGenerator:
    """
    Generates blog posts, single sections and alt text with provider fallback.

    Providers are tried in list order; the list is fixed for the lifetime of
    the generator. Nothing is retried beyond moving to the next provider.
    """

    def __init__(self, providers: Sequence[LLMProvider], settings: Optional[Settings] = None):
        """
        Initialize the generator.

        Args:
            providers: Providers in fallback order
            settings: Settings with token limits (cached settings if None)
        """
        self.providers = list(providers)
        self.settings = settings or get_settings()

        logger.info(f"Initialized BlogContentGenerator with providers: {[p.provider_name for p in self.providers]}")

    @classmethod
    def from_registry(cls, registry: ClientRegistry, settings: Optional[Settings] = None) -> "BlogContentGenerator":
        """Build a generator over the configured provider chain."""
        settings = settings or get_settings()
        return cls(LLMProviderFactory.create_chain(registry, settings), settings)

    @property
    def available_providers(self) -> List[str]:
        return [p.provider_name for p in self.providers if p.is_available]

    async def generate_blog_content(self, data: GenerationInput) -> GenerationOutput:
        """
        Generate and score a full blog post.

        Args:
            data: Generation request

        Returns:
            Scored GenerationOutput

        Raises:
            ProvidersExhaustedError: If no provider produced a parseable post
        """
        logger.info(f"Generating {data.blog_type} post for '{data.service_name}' in {data.target_city}")

        prompt = build_blog_prompt(data)
        draft, provider = await self._run_with_fallback(
            "generate blog content",
            prompt,
            self.settings.document_max_tokens,
            parse_generation_response,
        )

        output = score_draft(draft, data)
        unknown = [section.type for section in output.content if not section.is_known_type]
        if unknown:
            logger.warning(f"{provider} returned section types the renderer does not know: {unknown}")
        logger.info(
            f"Blog generated with {provider}: '{output.title}' "
            f"[{describe_layout(output.content)}] seo_score={output.seo_score}"
        )
        return output

    async def regenerate_section(self, data: SectionRegenerateInput) -> ContentSection:
        """
        Regenerate one section of an existing post.

        Args:
            data: Regeneration request

        Returns:
            Replacement ContentSection whose type is ``data.section_type``

        Raises:
            ProvidersExhaustedError: If no provider produced a parseable section
        """
        prompt = build_section_prompt(data)
        section, provider = await self._run_with_fallback(
            "regenerate section",
            prompt,
            self.settings.section_max_tokens,
            lambda text: parse_section_response(text, data.section_type),
        )

        logger.info(f"Section '{data.section_type}' regenerated with {provider}")
        return section

    async def generate_alt_text(self, image_url: str, context: Optional[str] = None) -> str:
        """
        Describe an image for use as alt text.

        Only vision-capable providers are asked. Never raises: when every
        provider fails a generic description is returned.

        Args:
            image_url: Image to describe
            context: Optional post context to steer the description

        Returns:
            Alt text
        """
        prompt = build_alt_text_prompt(context)

        for provider in self.providers:
            if not provider.supports_vision or not provider.is_available:
                continue

            result = await provider.describe_image(prompt, image_url, self.settings.alt_text_max_tokens)
            if result.ok:
                return clean_text(result.text)
            logger.error(f"{provider.provider_name} alt text generation failed: {result.error}")

        return f"Image related to {context}" if context else "Service business image"

    async def _run_with_fallback(
        self,
        operation: str,
        prompt: str,
        max_tokens: int,
        parse: Callable[[str], T],
    ) -> Tuple[T, str]:
        """
        Try providers in order until one answers with something ``parse`` accepts.

        Returns:
            Tuple of (parsed value, provider name)

        Raises:
            ProvidersExhaustedError: Chained from the last failure, if any
        """
        attempts: List[ProviderAttempt] = []

        for provider in self.providers:
            name = provider.provider_name

            if not provider.is_available:
                logger.debug(f"{name} not configured, skipping")
                attempts.append(ProviderAttempt(name, ProviderStatus.UNAVAILABLE))
                continue

            logger.info(f"Attempting to {operation} with {name}")
            result = await provider.generate(prompt, max_tokens)

            if result.status == ProviderStatus.UNAVAILABLE:
                attempts.append(ProviderAttempt(name, ProviderStatus.UNAVAILABLE))
                continue

            if not result.ok:
                logger.error(f"{name} failed to {operation}: {result.error}")
                attempts.append(ProviderAttempt(name, ProviderStatus.ERROR, result.error))
                continue

            try:
                return parse(result.text), name
            except ResponseParseError as e:
                logger.error(f"Failed to parse {name} response: {e}")
                attempts.append(ProviderAttempt(name, ProviderStatus.ERROR, e))

        error = ProvidersExhaustedError(operation, attempts)
        logger.error(str(error))
        raise error from error.last_error


def score_draft(draft: GenerationDraft, data: GenerationInput) -> GenerationOutput:
    """Attach the SEO score and checklist to a parsed draft."""
    seo = calculate_seo_score(draft, data)
    return GenerationOutput(**dict(draft), seo_score=seo.score, seo_checklist=seo.checklist)


@lru_cache()
def get_blog_generator() -> BlogContentGenerator:
    """Get the process-wide generator built from cached settings and clients."""
    return BlogContentGenerator.from_registry(get_client_registry(), get_settings())


async def generate_blog_content(data: GenerationInput) -> GenerationOutput:
    """
    Convenience function using the process-wide generator.

    Args:
        data: Generation request

    Returns:
        Scored GenerationOutput
    """
    return await get_blog_generator().generate_blog_content(data)


async def regenerate_section(data: SectionRegenerateInput) -> ContentSection:
    """Convenience function using the process-wide generator."""
    return await get_blog_generator().regenerate_section(data)


async def generate_alt_text(image_url: str, context: Optional[str] = None) -> str:
    """Convenience function using the process-wide generator."""
    return await get_blog_generator().generate_alt_text(image_url, context)

"""Shared fixtures: fake providers and sample requests (no network)."""

import json
from typing import List, Optional

import pytest

from contentbot.core.settings import Settings
from contentbot.writer.layouts import get_default_layout
from contentbot.writer.llm_provider import LLMProvider
from contentbot.writer.models import GenerationInput, SectionRegenerateInput


class FakeProvider(LLMProvider):
    """Provider returning canned text, raising, or reporting itself unconfigured."""

    def __init__(
        self,
        name: str,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
        available: bool = True,
        vision: bool = False,
    ):
        self._name = name
        self.text = text
        self.error = error
        self.available = available
        self.supports_vision = vision
        self.prompts: List[str] = []
        self.image_urls: List[str] = []

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def is_available(self) -> bool:
        return self.available

    async def _complete(self, prompt: str, max_tokens: int) -> Optional[str]:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text

    async def _describe(self, prompt: str, image_url: str, max_tokens: int) -> Optional[str]:
        self.prompts.append(prompt)
        self.image_urls.append(image_url)
        if self.error:
            raise self.error
        return self.text


def long_text(words: int) -> str:
    return " ".join(["clean"] * words)


def sized(text: str, length: int) -> str:
    """Truncate or pad ``text`` with periods to exactly ``length`` characters."""
    return text[:length].ljust(length, ".")


def sample_document(**overrides) -> dict:
    """A well-formed document response for Pressure Washing in Austin."""
    document = {
        "title": "Pressure Washing in Austin: Restoring a Driveway",
        "metaTitle": sized("Pressure Washing in Austin | Driveway Restoration Tips", 55),
        "metaDescription": sized(
            "See how our licensed team restored a stained Austin driveway with professional "
            "pressure washing. Results may vary by surface, age and local conditions.",
            155,
        ),
        "excerpt": "A stained concrete driveway in Austin gets a full professional restoration.",
        "suggestedSlug": "pressure-washing-austin-driveway",
        "content": [
            {"id": "hero", "type": "hero", "content": {"headline": "Driveway Restored", "subheadline": "Austin, TX"}},
            {"id": "intro", "type": "text", "content": {"heading": "The Job", "body": long_text(320)}},
            {"id": "faq", "type": "faq", "content": {"questions": [{"question": "How long?", "answer": "A day."}]}},
            {"id": "cta", "type": "cta", "content": {"heading": "Book Now", "body": "Call us.", "buttonText": "Get a Quote"}},
        ],
    }
    document.update(overrides)
    return document


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        anthropic_api_key="",
        gemini_api_key="",
        openai_api_key="",
        provider_order="claude,gemini,openai",
    )


@pytest.fixture
def generation_input():
    return GenerationInput(
        blog_type="job_showcase",
        service_name="Pressure Washing",
        target_city="Austin",
        talking_points=["Eco-friendly detergents", "Same-week scheduling"],
        layout_template=get_default_layout("job_showcase").sections,
    )


@pytest.fixture
def regenerate_input():
    return SectionRegenerateInput(
        section_type="cta",
        blog_type="job_showcase",
        service_name="Pressure Washing",
        target_city="Austin",
        existing_content=[
            {"id": "hero", "type": "hero", "content": {"headline": "Driveway Restored"}},
            {"id": "cta", "type": "cta", "content": {"heading": "Old heading"}},
        ],
    )


@pytest.fixture
def document_json():
    return json.dumps(sample_document())

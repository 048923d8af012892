"""
LLM Provider interface and implementations for blog content generation.

Wraps Anthropic Claude, Google Gemini and OpenAI behind one async interface.
Adapters never raise for provider trouble: every call returns a
ProviderResult that is either a success, "unavailable" (no credential or no
such capability) or an error. Fallback between providers is the
orchestrator's job; adapters make exactly one request and never retry.

SDK clients are built once by ClientRegistry and injected, so every
generation request shares the same clients.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional, Type

from anthropic import AsyncAnthropic
from google import genai
from google.genai import types as genai_types
from openai import AsyncOpenAI

from contentbot.core.logging import get_logger
from contentbot.core.settings import Settings, get_settings

logger = get_logger(__name__)


class ProviderResponseError(Exception):
    """A provider answered but the answer carried no usable text."""
    pass


class ProviderStatus(str, Enum):
    SUCCESS = "success"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of a single provider call."""
    provider: str
    status: ProviderStatus
    text: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == ProviderStatus.SUCCESS

    @classmethod
    def success(cls, provider: str, text: str) -> "ProviderResult":
        return cls(provider=provider, status=ProviderStatus.SUCCESS, text=text)

    @classmethod
    def unavailable(cls, provider: str) -> "ProviderResult":
        return cls(provider=provider, status=ProviderStatus.UNAVAILABLE)

    @classmethod
    def failure(cls, provider: str, error: Exception) -> "ProviderResult":
        return cls(provider=provider, status=ProviderStatus.ERROR, error=error)


@dataclass(frozen=True)
class ClientRegistry:
    """
    SDK clients for every configured provider.

    Built once per process. A provider without a credential has no client,
    which its adapter reports as unavailable.
    """
    anthropic: Optional[AsyncAnthropic] = None
    gemini: Optional[genai.Client] = None
    openai: Optional[AsyncOpenAI] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClientRegistry":
        """
        Build clients for every provider whose credential is set.

        Args:
            settings: Application settings with credentials and timeout

        Returns:
            ClientRegistry with one client per configured provider
        """
        timeout = settings.llm_timeout_seconds

        anthropic_client = None
        if settings.anthropic_api_key.strip():
            anthropic_client = AsyncAnthropic(api_key=settings.anthropic_api_key, timeout=timeout)

        gemini_client = None
        if settings.gemini_api_key.strip():
            gemini_client = genai.Client(
                api_key=settings.gemini_api_key,
                http_options=genai_types.HttpOptions(timeout=int(timeout * 1000)),
            )

        openai_client = None
        if settings.openai_api_key.strip():
            openai_client = AsyncOpenAI(api_key=settings.openai_api_key, timeout=timeout)

        registry = cls(anthropic=anthropic_client, gemini=gemini_client, openai=openai_client)
        logger.info(f"Client registry ready, configured providers: {registry.configured or 'none'}")
        return registry

    @property
    def configured(self) -> List[str]:
        names = []
        if self.anthropic is not None:
            names.append("claude")
        if self.gemini is not None:
            names.append("gemini")
        if self.openai is not None:
            names.append("openai")
        return names


@lru_cache()
def get_client_registry() -> ClientRegistry:
    """Get the process-wide client registry."""
    return ClientRegistry.from_settings(get_settings())


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    supports_vision: bool = False

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identification name."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether a client is configured for this provider."""
        pass

    @abstractmethod
    async def _complete(self, prompt: str, max_tokens: int) -> Optional[str]:
        """Send a text prompt and return the raw response text."""
        pass

    async def _describe(self, prompt: str, image_url: str, max_tokens: int) -> Optional[str]:
        """Send an image plus prompt and return the raw response text (vision providers override)."""
        return None

    async def generate(self, prompt: str, max_tokens: int) -> ProviderResult:
        """
        Generate text from a fully rendered prompt.

        Args:
            prompt: Prompt text
            max_tokens: Output token limit

        Returns:
            ProviderResult; never raises for provider failures
        """
        if not self.is_available:
            return ProviderResult.unavailable(self.provider_name)

        try:
            text = await self._complete(prompt, max_tokens)
        except Exception as e:
            logger.error(f"{self.provider_name} request failed: {e}")
            return ProviderResult.failure(self.provider_name, e)

        return self._to_result(text)

    async def describe_image(self, prompt: str, image_url: str, max_tokens: int) -> ProviderResult:
        """
        Describe an image (used for alt text).

        Args:
            prompt: Instructions for the description
            image_url: Publicly reachable image URL
            max_tokens: Output token limit

        Returns:
            ProviderResult; unavailable when the provider has no vision support
        """
        if not self.supports_vision or not self.is_available:
            return ProviderResult.unavailable(self.provider_name)

        try:
            text = await self._describe(prompt, image_url, max_tokens)
        except Exception as e:
            logger.error(f"{self.provider_name} image description failed: {e}")
            return ProviderResult.failure(self.provider_name, e)

        return self._to_result(text)

    def _to_result(self, text: Optional[str]) -> ProviderResult:
        if not text or not text.strip():
            return ProviderResult.failure(
                self.provider_name,
                ProviderResponseError(f"No text content in {self.provider_name} response"),
            )
        return ProviderResult.success(self.provider_name, text.strip())

    async def health_check(self) -> Dict[str, Any]:
        """Report configuration status without calling the provider."""
        return {
            "status": "configured" if self.is_available else "unavailable",
            "provider": self.provider_name,
            "vision": self.supports_vision,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }


class ClaudeProvider(LLMProvider):
    """Anthropic Messages API."""

    supports_vision = True

    def __init__(self, client: Optional[AsyncAnthropic], model: str):
        self.client = client
        self.model = model

    @property
    def provider_name(self) -> str:
        return "Claude"

    @property
    def is_available(self) -> bool:
        return self.client is not None

    @classmethod
    def from_registry(cls, registry: ClientRegistry, settings: Settings) -> "ClaudeProvider":
        return cls(registry.anthropic, settings.claude_model)

    async def _complete(self, prompt: str, max_tokens: int) -> Optional[str]:
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        return self._first_text(response)

    async def _describe(self, prompt: str, image_url: str, max_tokens: int) -> Optional[str]:
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "image", "source": {"type": "url", "url": image_url}},
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
        )
        return self._first_text(response)

    @staticmethod
    def _first_text(response) -> Optional[str]:
        for block in response.content:
            if block.type == "text":
                return block.text
        return None


class GeminiProvider(LLMProvider):
    """Google Gen AI SDK (text only here)."""

    def __init__(self, client: Optional[genai.Client], model: str):
        self.client = client
        self.model = model

    @property
    def provider_name(self) -> str:
        return "Gemini"

    @property
    def is_available(self) -> bool:
        return self.client is not None

    @classmethod
    def from_registry(cls, registry: ClientRegistry, settings: Settings) -> "GeminiProvider":
        return cls(registry.gemini, settings.gemini_model)

    async def _complete(self, prompt: str, max_tokens: int) -> Optional[str]:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=genai_types.GenerateContentConfig(max_output_tokens=max_tokens),
        )
        return response.text


class OpenAIProvider(LLMProvider):
    """OpenAI Chat Completions API."""

    supports_vision = True

    def __init__(self, client: Optional[AsyncOpenAI], model: str):
        self.client = client
        self.model = model

    @property
    def provider_name(self) -> str:
        return "OpenAI"

    @property
    def is_available(self) -> bool:
        return self.client is not None

    @classmethod
    def from_registry(cls, registry: ClientRegistry, settings: Settings) -> "OpenAIProvider":
        return cls(registry.openai, settings.openai_model)

    async def _complete(self, prompt: str, max_tokens: int) -> Optional[str]:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
        )
        return self._first_message(response)

    async def _describe(self, prompt: str, image_url: str, max_tokens: int) -> Optional[str]:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "image_url", "image_url": {"url": image_url}},
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
            max_tokens=max_tokens,
        )
        return self._first_message(response)

    @staticmethod
    def _first_message(response) -> Optional[str]:
        if not response.choices:
            return None
        return response.choices[0].message.content


class LLMProviderFactory:
    """Factory for creating LLM provider instances."""

    _providers: Dict[str, Type[LLMProvider]] = {
        "claude": ClaudeProvider,
        "gemini": GeminiProvider,
        "openai": OpenAIProvider,
    }

    @classmethod
    def create_provider(
        cls,
        provider_type: str,
        registry: ClientRegistry,
        settings: Optional[Settings] = None,
    ) -> LLMProvider:
        """
        Create LLM provider instance.

        Args:
            provider_type: Provider key ("claude", "gemini", "openai")
            registry: Shared SDK clients
            settings: Settings with model names (cached settings if None)

        Returns:
            LLMProvider instance

        Raises:
            ValueError: If the provider type is not registered
        """
        provider_class = cls._providers.get(provider_type.lower())
        if provider_class is None:
            raise ValueError(f"Unknown provider type: {provider_type}")
        return provider_class.from_registry(registry, settings or get_settings())

    @classmethod
    def create_chain(
        cls,
        registry: ClientRegistry,
        settings: Optional[Settings] = None,
    ) -> List[LLMProvider]:
        """
        Create providers in configured fallback order.

        Unknown names in the configured order are skipped with a warning.
        """
        settings = settings or get_settings()
        chain = []
        for name in settings.provider_names:
            if name not in cls._providers:
                logger.warning(f"Unknown provider type in PROVIDER_ORDER: {name}, skipping")
                continue
            chain.append(cls.create_provider(name, registry, settings))
        return chain

    @classmethod
    def list_providers(cls) -> List[str]:
        """List available provider types."""
        return list(cls._providers.keys())

"""Tests for provider adapters, the client registry and the factory."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from contentbot.core.settings import Settings
from contentbot.writer.llm_provider import (
    ClaudeProvider,
    ClientRegistry,
    GeminiProvider,
    LLMProvider,
    LLMProviderFactory,
    OpenAIProvider,
    ProviderResponseError,
    ProviderResult,
    ProviderStatus,
)

from conftest import FakeProvider


def claude_response(text):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])


def openai_response(text):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


class TestProviderResult:
    """Test the result value returned by every adapter."""

    def test_success(self):
        result = ProviderResult.success("Claude", "hello")
        assert result.ok
        assert result.text == "hello"

    def test_unavailable_is_not_ok(self):
        result = ProviderResult.unavailable("Gemini")
        assert not result.ok
        assert result.status == ProviderStatus.UNAVAILABLE

    def test_failure_keeps_error(self):
        error = RuntimeError("boom")
        result = ProviderResult.failure("OpenAI", error)
        assert result.status == ProviderStatus.ERROR
        assert result.error is error


class TestLLMProvider:
    """Test the shared adapter behaviour."""

    @pytest.mark.asyncio
    async def test_unconfigured_provider_is_unavailable(self):
        provider = FakeProvider("Claude", text="never", available=False)

        result = await provider.generate("prompt", 100)

        assert result.status == ProviderStatus.UNAVAILABLE
        assert provider.prompts == []

    @pytest.mark.asyncio
    async def test_exception_becomes_failure(self):
        provider = FakeProvider("Claude", error=ConnectionError("timed out"))

        result = await provider.generate("prompt", 100)

        assert result.status == ProviderStatus.ERROR
        assert isinstance(result.error, ConnectionError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, "", "   \n"])
    async def test_empty_text_is_failure(self, text):
        provider = FakeProvider("Gemini", text=text)

        result = await provider.generate("prompt", 100)

        assert result.status == ProviderStatus.ERROR
        assert isinstance(result.error, ProviderResponseError)

    @pytest.mark.asyncio
    async def test_text_is_stripped(self):
        provider = FakeProvider("OpenAI", text="  answer \n")
        result = await provider.generate("prompt", 100)
        assert result.text == "answer"

    @pytest.mark.asyncio
    async def test_describe_image_without_vision(self):
        provider = FakeProvider("Gemini", text="a photo", vision=False)

        result = await provider.describe_image("prompt", "https://example.com/a.jpg", 50)

        assert result.status == ProviderStatus.UNAVAILABLE
        assert provider.image_urls == []

    @pytest.mark.asyncio
    async def test_health_check(self):
        health = await FakeProvider("Claude", available=False).health_check()
        assert health["status"] == "unavailable"
        assert health["provider"] == "Claude"

    @pytest.mark.asyncio
    async def test_vision_flag_without_describe_is_failure(self):
        class TextOnlyProvider(LLMProvider):
            supports_vision = True

            @property
            def provider_name(self):
                return "TextOnly"

            @property
            def is_available(self):
                return True

            async def _complete(self, prompt, max_tokens):
                return "text"

        result = await TextOnlyProvider().describe_image("prompt", "https://x.test/a.jpg", 50)

        assert result.status == ProviderStatus.ERROR
        assert isinstance(result.error, ProviderResponseError)


class TestClaudeProvider:
    """Test the Anthropic adapter against a mocked client."""

    @pytest.mark.asyncio
    async def test_generate(self):
        client = MagicMock()
        client.messages.create = AsyncMock(return_value=claude_response('{"title": "x"}'))
        provider = ClaudeProvider(client, "claude-test")

        result = await provider.generate("Write a post", 4096)

        assert result.ok
        assert result.text == '{"title": "x"}'
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["max_tokens"] == 4096
        assert kwargs["messages"] == [{"role": "user", "content": "Write a post"}]

    @pytest.mark.asyncio
    async def test_no_text_block(self):
        client = MagicMock()
        client.messages.create = AsyncMock(
            return_value=SimpleNamespace(content=[SimpleNamespace(type="tool_use")])
        )

        result = await ClaudeProvider(client, "claude-test").generate("prompt", 10)

        assert result.status == ProviderStatus.ERROR
        assert "No text content" in str(result.error)

    @pytest.mark.asyncio
    async def test_describe_image(self):
        client = MagicMock()
        client.messages.create = AsyncMock(return_value=claude_response("Clean driveway in sunlight"))

        result = await ClaudeProvider(client, "claude-test").describe_image(
            "Describe", "https://example.com/a.jpg", 256
        )

        assert result.text == "Clean driveway in sunlight"
        content = client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert content[0]["source"] == {"type": "url", "url": "https://example.com/a.jpg"}

    def test_without_client(self):
        assert not ClaudeProvider(None, "claude-test").is_available


class TestGeminiProvider:
    """Test the Google Gen AI adapter against a mocked client."""

    @pytest.mark.asyncio
    async def test_generate(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="hello"))
        provider = GeminiProvider(client, "gemini-test")

        result = await provider.generate("prompt", 2048)

        assert result.text == "hello"
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "prompt"
        assert kwargs["config"].max_output_tokens == 2048

    @pytest.mark.asyncio
    async def test_sdk_error(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("quota"))

        result = await GeminiProvider(client, "gemini-test").generate("prompt", 10)

        assert result.status == ProviderStatus.ERROR
        assert str(result.error) == "quota"

    def test_no_vision(self):
        assert GeminiProvider(MagicMock(), "gemini-test").supports_vision is False


class TestOpenAIProvider:
    """Test the OpenAI adapter against a mocked client."""

    @pytest.mark.asyncio
    async def test_generate(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=openai_response("hello"))

        result = await OpenAIProvider(client, "gpt-test").generate("prompt", 256)

        assert result.text == "hello"
        assert client.chat.completions.create.call_args.kwargs["max_tokens"] == 256

    @pytest.mark.asyncio
    async def test_no_choices(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=SimpleNamespace(choices=[]))

        result = await OpenAIProvider(client, "gpt-test").generate("prompt", 10)

        assert result.status == ProviderStatus.ERROR

    @pytest.mark.asyncio
    async def test_describe_image(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=openai_response("A roof"))

        result = await OpenAIProvider(client, "gpt-test").describe_image("Describe", "https://x.test/r.png", 256)

        assert result.text == "A roof"
        content = client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert content[0] == {"type": "image_url", "image_url": {"url": "https://x.test/r.png"}}


class TestClientRegistry:
    """Test client construction from settings."""

    def test_blank_keys_configure_nothing(self, settings):
        registry = ClientRegistry.from_settings(settings)
        assert registry.configured == []

    def test_whitespace_key_is_blank(self):
        settings = Settings(_env_file=None, anthropic_api_key="   ", gemini_api_key="", openai_api_key="")
        assert ClientRegistry.from_settings(settings).anthropic is None

    def test_configured_keys(self):
        settings = Settings(
            _env_file=None,
            anthropic_api_key="sk-ant-test",
            gemini_api_key="gemini-test",
            openai_api_key="sk-test",
        )
        registry = ClientRegistry.from_settings(settings)
        assert registry.configured == ["claude", "gemini", "openai"]

    def test_anthropic_only(self):
        settings = Settings(
            _env_file=None,
            anthropic_api_key="sk-ant-test",
            gemini_api_key="",
            openai_api_key="",
            llm_timeout_seconds=45,
        )

        registry = ClientRegistry.from_settings(settings)

        assert registry.configured == ["claude"]
        assert registry.anthropic.timeout == 45

    def test_openai_timeout_in_seconds(self):
        settings = Settings(_env_file=None, anthropic_api_key="", gemini_api_key="", openai_api_key="sk-test")
        assert ClientRegistry.from_settings(settings).openai.timeout == settings.llm_timeout_seconds


class TestLLMProviderFactory:
    """Test provider factory functionality."""

    def test_list_providers(self):
        assert LLMProviderFactory.list_providers() == ["claude", "gemini", "openai"]

    def test_create_provider(self, settings):
        provider = LLMProviderFactory.create_provider("Claude", ClientRegistry(), settings)
        assert isinstance(provider, ClaudeProvider)
        assert provider.model == settings.claude_model
        assert not provider.is_available

    def test_unknown_provider(self, settings):
        with pytest.raises(ValueError, match="Unknown provider type"):
            LLMProviderFactory.create_provider("mistral", ClientRegistry(), settings)

    def test_default_chain_order(self, settings):
        chain = LLMProviderFactory.create_chain(ClientRegistry(), settings)
        assert [p.provider_name for p in chain] == ["Claude", "Gemini", "OpenAI"]

    def test_configured_order_skips_unknown(self):
        settings = Settings(_env_file=None, provider_order="openai, bogus ,Claude")
        chain = LLMProviderFactory.create_chain(ClientRegistry(), settings)
        assert [p.provider_name for p in chain] == ["OpenAI", "Claude"]

    def test_chain_shares_registry_clients(self, settings):
        openai_client = MagicMock()
        chain = LLMProviderFactory.create_chain(ClientRegistry(openai=openai_client), settings)
        assert chain[2].client is openai_client
        assert [p.is_available for p in chain] == [False, False, True]

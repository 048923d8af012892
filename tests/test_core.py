"""Tests for settings, logging configuration and utils."""

from unittest.mock import patch

from contentbot.core.logging import get_logging_config
from contentbot.core.settings import Settings
from contentbot.core.utils import clean_text


class TestSettings:
    """Test environment driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("PROVIDER_ORDER", "LLM_TIMEOUT_SECONDS", "SERVICE_PORT", "CLAUDE_MODEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.provider_names == ["claude", "gemini", "openai"]
        assert settings.llm_timeout_seconds == 120.0
        assert settings.service_port == 8004
        assert settings.claude_model == "claude-sonnet-4-20250514"

    def test_gemini_key_alias(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("GOOGLE_GENAI_API_KEY", "g-key")

        assert Settings(_env_file=None).gemini_api_key == "g-key"

    def test_provider_order_from_env(self, monkeypatch):
        monkeypatch.setenv("PROVIDER_ORDER", "OpenAI, claude")
        assert Settings(_env_file=None).provider_names == ["openai", "claude"]

    def test_log_level_uppercased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


class TestLoggingConfig:
    """Test dictConfig generation."""

    def test_console_in_development(self):
        with patch("contentbot.core.logging.get_settings", return_value=Settings(_env_file=None, environment="development")):
            config = get_logging_config("writer")

        assert config["handlers"]["console"]["formatter"] == "console"
        assert "[writer]" in config["formatters"]["console"]["format"]

    def test_json_in_production(self):
        with patch("contentbot.core.logging.get_settings", return_value=Settings(_env_file=None, environment="production")):
            config = get_logging_config("writer")

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["formatters"]["json"]["static_fields"] == {"service": "writer"}
        assert config["loggers"]["httpx"]["level"] == "WARNING"


def test_clean_text():
    assert clean_text("  Pressure\n\n washing\t tips ") == "Pressure washing tips"
    assert clean_text("") == ""

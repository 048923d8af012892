"""Application settings and configuration."""
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Provider credentials (blank means not configured)
    anthropic_api_key: str = Field(default="")
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "google_genai_api_key"),
    )
    openai_api_key: str = Field(default="")

    # Provider models
    claude_model: str = Field(default="claude-sonnet-4-20250514")
    gemini_model: str = Field(default="gemini-2.0-flash")
    openai_model: str = Field(default="gpt-4o")

    # Fallback order, highest priority first (comma separated)
    provider_order: str = Field(default="claude,gemini,openai")

    # Token limits per operation
    document_max_tokens: int = Field(default=4096, ge=1)
    section_max_tokens: int = Field(default=2048, ge=1)
    alt_text_max_tokens: int = Field(default=256, ge=1)

    # Applied to every provider client
    llm_timeout_seconds: float = Field(default=120.0, gt=0)

    # Logging
    log_level: str = Field(default="INFO")

    # Service configuration
    service_host: str = Field(default="0.0.0.0")
    service_port: Optional[int] = Field(default=8004)
    debug: bool = Field(default=False)

    app_name: str = "ContentBot"
    environment: str = Field(default="development")

    @property
    def provider_names(self) -> List[str]:
        """Provider names in fallback order."""
        return [name.strip().lower() for name in self.provider_order.split(",") if name.strip()]

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Get settings singleton."""
    return Settings()

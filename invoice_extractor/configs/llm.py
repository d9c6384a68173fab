"""
Language model configuration.

Settings for the Gemini chat models used for text extraction, vision
extraction and Q&A over extracted data.

Dependencies: pydantic_settings
System role: Completion service configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Gemini completion settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google AI API key (falls back to GOOGLE_API_KEY)",
    )
    text_model: str = Field(
        default="gemini-2.0-flash",
        description="Model used for text-layer extraction",
    )
    vision_model: str = Field(
        default="gemini-2.0-flash",
        description="Model used for image and handwritten extraction",
    )
    chat_model: str = Field(
        default="gemini-2.0-flash",
        description="Model used to answer questions about extracted data",
    )

    extraction_temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    chat_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    text_max_tokens: int = Field(default=2000, ge=1)
    vision_max_tokens: int = Field(default=4000, ge=1)
    chat_max_tokens: int = Field(default=500, ge=1)

    request_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Per-call timeout in seconds",
    )
    max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per call on transport errors",
    )

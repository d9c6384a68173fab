"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from invoice_extractor.configs.base import BaseSettings
from invoice_extractor.configs.database import DatabaseSettings
from invoice_extractor.configs.llm import LLMSettings
from invoice_extractor.configs.s3_documents import S3DocumentsSettings
from invoice_extractor.core.extraction.configs import ExtractionPipelineSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    s3_documents: S3DocumentsSettings = Field(default_factory=S3DocumentsSettings)
    extraction: ExtractionPipelineSettings = Field(default_factory=ExtractionPipelineSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from invoice_extractor.configs import get_settings
        settings = get_settings()
        url = settings.database.async_database_url
    """
    return Settings()

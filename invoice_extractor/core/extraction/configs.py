"""
Configuration settings for the invoice extraction pipeline.

Provides environment-based configuration for job dispatch, batching, upload
limits and record normalization.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionPipelineSettings(BaseSettings):
    """Settings for the invoice ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EXTRACTION_",
        case_sensitive=False,
        extra="ignore",
    )

    # Dispatch
    dispatch_mode: Literal["background", "sqs"] = Field(
        default="background",
        description="Run jobs in-process after the response, or publish them to SQS",
    )
    queue_url: str | None = Field(
        default=None,
        description="SQS queue URL (sqs dispatch mode only)",
    )
    queue_region: str = Field(default="ap-southeast-2", description="SQS queue region")

    # Batch
    batch_concurrency: int = Field(
        default=1,
        ge=1,
        description="Documents extracted at once (1 = sequential)",
    )
    finalize_delay_seconds: float = Field(
        default=0.5,
        ge=0.0,
        description="Pause between the finalizing update and the terminal state",
    )

    # Records
    vision_page_ceiling: int = Field(
        default=10,
        ge=1,
        description="Page clamp for vision extraction, where page count is unknown",
    )
    evidence_max_length: int = Field(default=200, ge=1)
    default_confidence: int = Field(default=90, ge=0, le=100)

    # Uploads
    max_file_size_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Per-file upload limit",
    )


@lru_cache
def get_pipeline_settings() -> ExtractionPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        ExtractionPipelineSettings: Singleton settings loaded from environment
    """
    return ExtractionPipelineSettings()

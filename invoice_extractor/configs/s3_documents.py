"""
S3 Documents bucket configuration.

Settings for raw invoice storage. Uploads are best-effort: when disabled, unset or
unreachable, documents are still processed from memory.

Dependencies: pydantic_settings
System role: S3 documents bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3DocumentsSettings(BaseSettings):
    """Settings for S3 documents bucket operations."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="S3_DOCUMENTS_",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(
        default=True,
        description="Upload raw invoices to S3 during ingestion",
    )
    bucket: str | None = Field(
        default=None,
        description="S3 bucket for raw document storage (unset disables storage)",
    )
    region: str = Field(
        default="ap-southeast-2",
        description="AWS region for S3 bucket",
    )
    key_prefix: str = Field(
        default="uploads",
        description="Key prefix for uploaded invoices",
    )

    @property
    def is_configured(self) -> bool:
        """Whether uploads should be attempted at all."""
        return self.enabled and bool(self.bucket)

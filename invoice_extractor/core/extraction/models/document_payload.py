"""
Document payload model.

The unit of work handed to the batch runner: file bytes plus the identifiers
needed to attribute extracted records back to their Document row.

Dependencies: pydantic
System role: Input type for extractors and the batch runner
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DocumentPayload(BaseModel):
    """Uploaded file ready for extraction."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes = Field(repr=False)
    content_type: str | None = None
    document_id: UUID | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)

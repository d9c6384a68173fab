"""
Job message schema for queued extraction.

Body of the SQS message published when jobs are dispatched to the queue
worker. Documents are referenced by storage key, not embedded.

Dependencies: pydantic
System role: Data validation and contract definition
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class QueuedDocument(BaseModel):
    """Reference to a stored document."""

    document_id: UUID = Field(..., description="Document ID in the database")
    filename: str = Field(..., description="Original filename")
    storage_path: str | None = Field(..., description="S3 key or URI (None if upload failed)")
    content_type: str | None = None


class JobMessage(BaseModel):
    """SQS message body for one extraction job."""

    job_id: UUID
    invoice_type: str
    documents: list[QueuedDocument]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "job_id": "550e8400-e29b-41d4-a716-446655440000",
                "invoice_type": "regular",
                "documents": [
                    {
                        "document_id": "550e8400-e29b-41d4-a716-446655440001",
                        "filename": "invoice-0042.pdf",
                        "storage_path": "uploads/550e8400-e29b-41d4-a716-446655440000/1700000000000-invoice-0042.pdf",
                        "content_type": "application/pdf",
                    }
                ],
            }
        }
    )

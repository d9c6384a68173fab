"""
AWS boundary modules.

Exports: S3DocumentClient, JobQueuePublisher
"""

from .s3_client import S3DocumentClient
from .sqs_client import JobQueuePublisher

__all__ = ["S3DocumentClient", "JobQueuePublisher"]

"""
S3 client for the invoice documents bucket.

Stores uploaded invoices under uploads/{job_id}/{timestamp}-{filename} and
reads them back for the queue worker.

Dependencies: boto3
System role: Blob storage for raw invoices
"""

import logging
import time
from uuid import UUID

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from invoice_extractor.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3DocumentClient:
    """S3 client for document bucket uploads and downloads."""

    def __init__(
        self,
        bucket: str,
        region: str = "ap-southeast-2",
        key_prefix: str = "uploads",
        client=None,
    ) -> None:
        """
        Initialize S3 client for document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            key_prefix: Prefix for every uploaded key
            client: Pre-built boto3 S3 client (tests)
        """
        self._bucket = bucket
        self._region = region
        self._key_prefix = key_prefix.strip("/")
        self._s3_client = client or boto3.client("s3", region_name=region)

    def build_key(self, job_id: UUID, filename: str) -> str:
        """
        Build the object key for an uploaded invoice.

        Args:
            job_id: Owning job
            filename: Original filename

        Returns:
            str: Object key, unique per upload
        """
        timestamp = int(time.time() * 1000)
        return f"{self._key_prefix}/{job_id}/{timestamp}-{filename}"

    def upload_bytes(self, key: str, content: bytes, content_type: str | None = None) -> str:
        """
        Upload raw bytes.

        Args:
            key: Object key
            content: File bytes
            content_type: MIME type stored on the object

        Returns:
            str: s3:// URI of the stored object

        Raises:
            StorageError: When the upload fails
        """
        params = {"Bucket": self._bucket, "Key": key, "Body": content}
        if content_type:
            params["ContentType"] = content_type
        try:
            self._s3_client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(
                f"Failed to upload to S3: {e}", operation="upload", details={"key": key}
            ) from e

        logger.info("Uploaded document to S3", extra={"key": key, "size_bytes": len(content)})
        return f"s3://{self._bucket}/{key}"

    def download_bytes(self, key: str) -> bytes:
        """
        Download an object's bytes.

        Args:
            key: Object key or s3:// URI in this bucket

        Returns:
            bytes: Object content

        Raises:
            StorageError: When the object is missing or the download fails
        """
        prefix = f"s3://{self._bucket}/"
        if key.startswith(prefix):
            key = key[len(prefix):]

        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                raise StorageError(
                    f"File not found in S3: {key}", operation="download"
                ) from e
            raise StorageError(f"Failed to download from S3: {e}", operation="download") from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to download from S3: {e}", operation="download") from e

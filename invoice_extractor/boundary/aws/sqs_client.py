"""
SQS publisher for extraction jobs.

Used when the API hands jobs to the queue worker instead of running them
in-process.

Dependencies: boto3
System role: Job queue producer
"""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from invoice_extractor.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class JobQueuePublisher:
    """Publish JSON job messages to an SQS queue."""

    def __init__(self, queue_url: str, region: str = "ap-southeast-2", client=None) -> None:
        self._queue_url = queue_url
        self._sqs_client = client or boto3.client("sqs", region_name=region)

    def publish(self, body: str) -> str:
        """
        Send one message.

        Args:
            body: JSON message body

        Returns:
            str: SQS MessageId

        Raises:
            StorageError: When the queue rejects the message
        """
        try:
            response = self._sqs_client.send_message(QueueUrl=self._queue_url, MessageBody=body)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to publish job message: {e}", operation="publish") from e

        message_id = response["MessageId"]
        logger.info("Published job message", extra={"message_id": message_id})
        return message_id

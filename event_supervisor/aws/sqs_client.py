import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class SQSClient:
    def __init__(self, config: Optional[Settings] = None, client=None, **kwargs):
        """
        Initialize SQS client with proper configuration.
        """
        self.config = config or default_settings
        self.sqs = client or boto3.client(
            'sqs',
            region_name=self.config.aws_region,
            aws_access_key_id=self.config.aws_access_key_id,
            aws_secret_access_key=self.config.aws_secret_access_key,
            endpoint_url=self.config.sqs_endpoint_url,
            **kwargs
        )
        logger.info(f"SQS client initialized with queue URL: {self.config.sqs_queue_url}")

    def send_message(self, queue_url: str, message_body: str) -> str:
        """
        Send a single message to an SQS queue.

        Args:
            queue_url: The SQS queue URL
            message_body: Serialized message body

        Returns:
            The MessageId assigned by SQS
        """
        try:
            logger.debug(f"Sending message to SQS queue: {queue_url}")
            response = self.sqs.send_message(
                QueueUrl=queue_url,
                MessageBody=message_body,
            )
            return response['MessageId']

        except ClientError as e:
            logger.error(f"Error sending message to SQS: {e}")
            raise
        except BotoCoreError as e:
            logger.error(f"Unexpected error sending message to SQS: {e}")
            raise

    def close(self) -> None:
        self.sqs.close()

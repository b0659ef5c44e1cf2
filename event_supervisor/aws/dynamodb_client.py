import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class DynamoDBClient:
    """DynamoDB client for the raw webhook table."""

    def __init__(self, config: Optional[Settings] = None, client=None, **kwargs):
        """
        Initialize the DynamoDB client.

        Args:
            config: Settings to read the table and credentials from
            client: An already constructed boto3 dynamodb client
        """
        self.config = config or default_settings
        self.table_name = self.config.dynamo_raw_webhook_table
        self.dynamodb = client or boto3.client(
            'dynamodb',
            region_name=self.config.aws_region,
            aws_access_key_id=self.config.aws_access_key_id,
            aws_secret_access_key=self.config.aws_secret_access_key,
            endpoint_url=self.config.dynamodb_endpoint_url,
            **kwargs
        )
        logger.info(f"DynamoDB client initialized with table: {self.table_name}")

    def scan_unfetched(self, exclusive_start_key: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Read one page of records whose fetched flag is still unset.

        Args:
            exclusive_start_key: LastEvaluatedKey of the previous page, if any

        Returns:
            The raw Scan response; `Items` holds the page and
            `LastEvaluatedKey` is present when more pages remain
        """
        params = {
            'TableName': self.table_name,
            'FilterExpression': '#fetched = :value',
            'ExpressionAttributeNames': {
                '#fetched': self.config.fetched_attribute
            },
            'ExpressionAttributeValues': {
                ':value': {'S': self.config.unfetched_value}
            },
        }
        if exclusive_start_key:
            params['ExclusiveStartKey'] = exclusive_start_key
        if self.config.scan_page_size:
            params['Limit'] = self.config.scan_page_size

        try:
            logger.debug(f"Scanning {self.table_name} from {exclusive_start_key}")
            response = self.dynamodb.scan(**params)
            logger.debug(f"Scan returned {len(response.get('Items', []))} items")
            return response

        except ClientError as e:
            logger.error(f"Error scanning {self.table_name}: {e}")
            raise
        except BotoCoreError as e:
            logger.error(f"Unexpected error scanning {self.table_name}: {e}")
            raise

    def mark_fetched(self, key: Dict[str, Any]) -> None:
        """
        Flip the fetched flag of a single item.

        Args:
            key: Primary key of the item in attribute-value form
        """
        try:
            self.dynamodb.update_item(
                TableName=self.table_name,
                Key=key,
                UpdateExpression='SET #fetched = :value',
                ExpressionAttributeNames={
                    '#fetched': self.config.fetched_attribute
                },
                ExpressionAttributeValues={
                    ':value': {'S': self.config.fetched_value}
                },
            )
            logger.debug(f"Marked item {key} as fetched")

        except ClientError as e:
            logger.error(f"Error marking item {key} as fetched: {e}")
            raise
        except BotoCoreError as e:
            logger.error(f"Unexpected error marking item {key} as fetched: {e}")
            raise

    def close(self) -> None:
        self.dynamodb.close()

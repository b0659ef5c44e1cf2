from .dynamodb_client import DynamoDBClient
from .sqs_client import SQSClient

__all__ = ["DynamoDBClient", "SQSClient"]

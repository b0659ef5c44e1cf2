from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the Event Supervisor job"""

    # Application settings
    service_name: str = "event-supervisor"
    log_level: str = "INFO"
    json_logs: bool = True
    environment: str = "dev"

    # AWS settings
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None

    # Local emulators (dynamodb-local, elasticmq)
    dynamodb_endpoint_url: Optional[str] = None
    sqs_endpoint_url: Optional[str] = None

    # DynamoDB raw webhook table
    dynamo_raw_webhook_table: str = "raw-webhook-events"
    scan_page_size: Optional[int] = None
    fetched_attribute: str = "fetched"
    unfetched_value: str = "false"
    fetched_value: str = "true"

    # SQS queue receiving the canonical notifications
    sqs_queue_url: str = "http://localhost:9324/queue/webhook-notifications"

    # Flip the fetched flag once a group's notification has been sent.
    # Off by default: the intake service owns the flag.
    mark_fetched_after_send: bool = False
    dynamo_key_attributes: List[str] = ["archive_id"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Create settings instance
settings = Settings()

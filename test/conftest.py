import pytest

from event_supervisor.config import Settings


@pytest.fixture
def config():
    return Settings(
        _env_file=None,
        sqs_queue_url="http://localhost:9324/queue/test-notifications",
        dynamo_raw_webhook_table="test-raw-webhooks",
    )

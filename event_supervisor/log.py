import logging
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from .config import Settings, settings as default_settings

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter stamping every record with service metadata."""

    def __init__(self, *args, service_name: str = "", environment: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.service_name = service_name
        self.environment = environment

    def add_fields(self, log_record, record, message_dict):
        super(ServiceJsonFormatter, self).add_fields(log_record, record, message_dict)
        log_record['service'] = self.service_name
        log_record['environment'] = self.environment
        log_record['timestamp'] = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).isoformat()
        log_record['level'] = record.levelname


def setup_logging(config: Optional[Settings] = None) -> None:
    """
    Configure logging for the job.

    Args:
        config: Settings to read the level and output format from. Falls back
            to the process-wide settings.
    """
    config = config or default_settings
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if config.json_logs:
        handler.setFormatter(ServiceJsonFormatter(
            '%(name)s %(message)s',
            service_name=config.service_name,
            environment=config.environment,
        ))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)

    root_logger.addHandler(handler)

    # Set specific logger levels
    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)

import logging
import sys

from .config import settings
from .job import supervisor_session
from .log import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """Run one pass of the job and return a process exit code."""
    setup_logging(settings)
    logger.info(f"Starting Event Supervisor in {settings.environment} environment")

    with supervisor_session(settings) as supervisor:
        result = supervisor.run()

    logger.info(f"Event Supervisor finished with status {result.statusCode}: {result.body}")
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())

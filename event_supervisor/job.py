"""
The Event Supervisor job.

One run reads all unfetched webhook events from DynamoDB, collapses them to
one notification per (object, owner) pair and pushes those into SQS. The
phases run strictly one after another.
"""
import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, Optional

from .aggregator import aggregate
from .aws import DynamoDBClient, SQSClient
from .config import Settings, settings as default_settings
from .errors import NotifyError, ScanError
from .log import setup_logging
from .notifier import Notifier
from .scanner import scan_unfetched
from .schemas import JobResult, RunSummary

logger = logging.getLogger(__name__)


class EventSupervisor:
    """Runs the scan, aggregate and notify phases against injected clients."""

    def __init__(self, store, queue, config: Optional[Settings] = None):
        """
        Args:
            store: Raw webhook table client (see DynamoDBClient)
            queue: Notification queue client (see SQSClient)
            config: Job settings, defaults to the process-wide settings
        """
        self.config = config or default_settings
        self.store = store
        self.queue = queue
        self.notifier = Notifier(
            queue=queue,
            queue_url=self.config.sqs_queue_url,
            store=store,
            mark_fetched=self.config.mark_fetched_after_send,
            key_attributes=self.config.dynamo_key_attributes,
        )

    def run(self) -> JobResult:
        """
        Execute one full pass.

        Returns:
            JobResult with status 200 on success and 500 on any failure
        """
        summary = RunSummary()
        if not self.config.mark_fetched_after_send:
            logger.warning("mark_fetched_after_send is disabled; records stay unfetched and will be re-sent next run")

        try:
            groups = scan_unfetched(self.store, summary)
        except ScanError as e:
            logger.error(f"Scan phase failed, nothing enqueued: {e}")
            return JobResult.failure()

        notifications = aggregate(groups)

        try:
            self.notifier.send_all(notifications, groups, summary)
        except NotifyError as e:
            logger.error(f"Notify phase failed after {e.sent} of {len(notifications)} notification(s): {e}")
            return JobResult.failure()

        logger.info(f"Run completed: {summary.model_dump()}")
        return JobResult.success()


@contextmanager
def supervisor_session(config: Optional[Settings] = None) -> Iterator[EventSupervisor]:
    """
    Build the AWS clients, hand out a supervisor using them and close the
    clients on exit.
    """
    config = config or default_settings
    store = DynamoDBClient(config)
    try:
        queue = SQSClient(config)
        try:
            yield EventSupervisor(store, queue, config)
        finally:
            queue.close()
    finally:
        store.close()


@lru_cache(maxsize=1)
def get_supervisor() -> EventSupervisor:
    """Process-wide supervisor, reused across warm lambda invocations."""
    setup_logging(default_settings)
    return EventSupervisor(DynamoDBClient(default_settings), SQSClient(default_settings), default_settings)


def handler(event=None, context=None) -> dict:
    """Lambda entry point. The invocation event is ignored."""
    try:
        supervisor = get_supervisor()
    except Exception as e:
        logger.error(f"Failed to initialize Event Supervisor: {e}", exc_info=True)
        return JobResult.failure().as_response()
    return supervisor.run().as_response()

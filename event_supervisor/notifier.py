import logging
from typing import Any, Dict, Iterable, List, Optional

from .aggregator import Groups
from .errors import NotifyError
from .schemas import CanonicalNotification, EventRecord, RunSummary

logger = logging.getLogger(__name__)


class Notifier:
    """Enqueues canonical notifications, one SQS message each."""

    def __init__(self,
                 queue,
                 queue_url: str,
                 store=None,
                 mark_fetched: bool = False,
                 key_attributes: Optional[List[str]] = None):
        """
        Initialize the notifier.

        Args:
            queue: Object exposing send_message(queue_url, message_body)
            queue_url: Target queue URL
            store: Object exposing mark_fetched(key); required when
                mark_fetched is set
            mark_fetched: Flip the fetched flag of a group's records once its
                notification is sent
            key_attributes: Primary key attribute names of the raw table;
                required when mark_fetched is set
        """
        if mark_fetched and store is None:
            raise ValueError("A store is required to mark records as fetched")
        if mark_fetched and not key_attributes:
            raise ValueError("Key attributes are required to mark records as fetched")
        self.queue = queue
        self.queue_url = queue_url
        self.store = store
        self.mark_fetched = mark_fetched
        self.key_attributes = list(key_attributes or [])

    def send(self, notification: CanonicalNotification) -> str:
        """Send one notification and return its MessageId."""
        logger.info(f"Enqueueing notification: {notification.to_message_body()}")
        return self.queue.send_message(self.queue_url, notification.to_message_body())

    def send_all(self,
                 notifications: Iterable[CanonicalNotification],
                 groups: Optional[Groups] = None,
                 summary: Optional[RunSummary] = None) -> int:
        """
        Send every notification in order, stopping at the first failure.

        Notifications sent before a failure stay sent.

        Args:
            notifications: Notifications to enqueue
            groups: The grouped records the notifications were built from;
                needed only when marking records fetched
            summary: Optional run counters to update

        Returns:
            Number of notifications sent

        Raises:
            NotifyError: If a send, or marking a group fetched, failed
        """
        summary = summary if summary is not None else RunSummary()
        sent = 0
        for notification in notifications:
            key = notification.group_key
            try:
                message_id = self.send(notification)
                sent += 1
                summary.sent = sent
                logger.info(f"Message sent for key {key}: {message_id}")

                if self.mark_fetched:
                    records = (groups or {}).get(key, [])
                    summary.marked_fetched += self._mark_group_fetched(records)

            except Exception as e:
                logger.error(f"Error enqueueing notification for key {key}: {e}", exc_info=True)
                raise NotifyError(
                    f"Notify failed for key {key} after {sent} sent: {e}", key=key, sent=sent
                ) from e

        return sent

    def _mark_group_fetched(self, records: List[EventRecord]) -> int:
        for record in records:
            self.store.mark_fetched(self._item_key(record))
        return len(records)

    def _item_key(self, record: EventRecord) -> Dict[str, Any]:
        missing = [name for name in self.key_attributes if name not in record.raw]
        if missing:
            raise KeyError(f"Record {record.group_key} lacks key attribute(s) {missing}")
        return {name: record.raw[name] for name in self.key_attributes}

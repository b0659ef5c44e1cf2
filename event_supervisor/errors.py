"""Exceptions raised by the Event Supervisor job."""
from typing import Any, Dict, Optional


class EventSupervisorError(Exception):
    """Base exception for all job errors."""
    pass


class RecordValidationError(EventSupervisorError):
    """A raw store item could not be parsed into an event record."""

    def __init__(self, message: str, item: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.item = item


class ScanError(EventSupervisorError):
    """Reading or paginating the raw webhook table failed."""
    pass


class NotifyError(EventSupervisorError):
    """Enqueueing a notification, or marking its records fetched, failed."""

    def __init__(self, message: str, key=None, sent: int = 0):
        super().__init__(message)
        self.key = key
        self.sent = sent

from .job import EventSupervisor, handler, supervisor_session
from .schemas import CanonicalNotification, EventRecord, GroupKey, JobResult

__all__ = [
    "CanonicalNotification",
    "EventRecord",
    "EventSupervisor",
    "GroupKey",
    "JobResult",
    "handler",
    "supervisor_session",
]

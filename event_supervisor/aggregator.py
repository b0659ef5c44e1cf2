"""
Grouping and collapsing of webhook event records.

Records are grouped by (object_id, owner_id). Each group collapses to one
canonical notification: a delete anywhere in the group wins, otherwise the
first record seen stands for the whole group.
"""
import logging
from typing import Dict, Iterable, List, Optional

from .schemas import AspectType, CanonicalNotification, EventRecord, GroupKey

logger = logging.getLogger(__name__)

Groups = Dict[GroupKey, List[EventRecord]]


def group_records(groups: Groups, records: Iterable[EventRecord]) -> Groups:
    """
    Append records to their group, keeping encounter order.

    Args:
        groups: Mapping to extend in place
        records: Records to add

    Returns:
        The same mapping, for chaining
    """
    for record in records:
        groups.setdefault(record.group_key, []).append(record)
    return groups


def collapse_group(records: List[EventRecord]) -> Optional[CanonicalNotification]:
    """
    Reduce one group to its canonical notification.

    Args:
        records: The group's records in encounter order

    Returns:
        The notification, or None for an empty group
    """
    if not records:
        return None

    deletes = [record for record in records if record.is_delete]
    if deletes:
        # Delete trumps everything else, whatever order it arrived in
        logger.debug(f"Group {deletes[0].group_key} contains {len(deletes)} delete record(s)")
        return CanonicalNotification.from_record(deletes[0], aspect_type=AspectType.DELETE)

    # TODO: confirm with the intake owners whether the latest update should win here
    return CanonicalNotification.from_record(records[0])


def aggregate(groups: Groups) -> List[CanonicalNotification]:
    """Collapse every non-empty group, preserving group order."""
    notifications = []
    for key, records in groups.items():
        notification = collapse_group(records)
        if notification is None:
            continue
        logger.debug(f"Collapsed {len(records)} record(s) for key {key} into {notification.aspect_type.value}")
        notifications.append(notification)
    return notifications

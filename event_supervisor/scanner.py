import logging
from typing import Optional

from .aggregator import Groups, group_records
from .errors import RecordValidationError, ScanError
from .schemas import EventRecord, RunSummary

logger = logging.getLogger(__name__)


def scan_unfetched(store, summary: Optional[RunSummary] = None) -> Groups:
    """
    Read every unfetched record from the store, following pagination, and
    group the records as each page arrives.

    Args:
        store: Object exposing scan_unfetched(exclusive_start_key) that returns
            a DynamoDB Scan response
        summary: Optional run counters to update

    Returns:
        Mapping of group key to the group's records in encounter order

    Raises:
        ScanError: If any page could not be read
    """
    summary = summary if summary is not None else RunSummary()
    groups: Groups = {}
    last_evaluated_key = None

    while True:
        try:
            response = store.scan_unfetched(last_evaluated_key)
            items = response['Items']
            if not isinstance(items, list):
                raise TypeError(f"page Items is {type(items).__name__}, expected a list")
            last_evaluated_key = response.get('LastEvaluatedKey')
        except Exception as e:
            logger.error(f"Error scanning page {summary.pages + 1}: {e}", exc_info=True)
            raise ScanError(f"Scan failed on page {summary.pages + 1}: {e}") from e

        summary.pages += 1
        records = []
        for item in items:
            logger.debug(f"Scanned item: {item}")
            try:
                records.append(EventRecord.from_item(item))
            except RecordValidationError as e:
                summary.rejected += 1
                logger.warning(f"Skipping malformed record: {e} (item: {e.item})")

        summary.records += len(records)
        group_records(groups, records)

        if not last_evaluated_key:
            break

    summary.groups = len(groups)
    logger.info(f"Scanned {summary.records} unfetched record(s) over {summary.pages} page(s) into {summary.groups} group(s)")
    return groups

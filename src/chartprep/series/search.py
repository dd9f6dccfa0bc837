"""
Datetime lookup in ascending time series.

``locate_before`` is the workhorse for slicing chart history at a point in
time: it finds the last record strictly before a target datetime with a
binary search followed by a bounded correction pass.
"""

from typing import Any

from chartprep.series.base import (
    DEFAULT_DATETIME_KEY,
    OutOfRangeError,
    TimeSeries,
    is_before,
    to_timestamp,
)
from chartprep.utils.logging import get_logger

log = get_logger(__name__)


def locate_before(
    history: TimeSeries,
    target: Any,
    datetime_key: str = DEFAULT_DATETIME_KEY,
) -> int:
    """
    Find the rightmost record whose datetime is strictly before ``target``.

    The series must be sorted ascending by ``datetime_key``; this is not
    checked here (wrap input in ``SortedSeries`` to enforce it). Ties are
    resolved towards the lowest index that is still strictly earlier than
    the target, so a run of records at or after the target is skipped.

    Args:
        history: Ascending time series.
        target: Datetime-like value to search for.
        datetime_key: Field holding each record's datetime.

    Returns:
        Index of the located record.

    Raises:
        OutOfRangeError: If no record precedes ``target`` (including an
            empty history).
    """
    target_ts = to_timestamp(target)

    start = 0
    end = len(history) - 1
    middle = (start + end) // 2
    while start <= end:
        if is_before(history[middle], target_ts, datetime_key):
            start = middle + 1
        else:
            end = middle - 1
        middle = (start + end) // 2

    # Walk left past records at or after the target
    while middle >= 0 and not is_before(history[middle], target_ts, datetime_key):
        middle -= 1

    if middle < 0:
        msg = f"No record in series of {len(history)} precedes {target_ts}"
        raise OutOfRangeError(msg)

    log.debug("Located record", index=middle, target=str(target_ts))
    return middle


def find_index_by_datetime(
    history: TimeSeries,
    target: Any,
    datetime_key: str = DEFAULT_DATETIME_KEY,
) -> int | None:
    """
    Find the first record whose datetime equals ``target`` exactly.

    Unlike ``locate_before`` this scans linearly and does not require
    ascending order.

    Returns:
        Index of the matching record, or None if there is none.
    """
    target_ts = to_timestamp(target)
    for i, record in enumerate(history):
        if to_timestamp(record[datetime_key]) == target_ts:
            return i
    return None

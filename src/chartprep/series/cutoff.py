"""
Cutoff timestamps for chart ranges.

Turns a chart range such as ``"1y"``, ``"3m"`` or ``"2w"`` into the
timestamp the range starts at, and slices a series from that point on.
"""

import re
from typing import Any

import pandas as pd

from chartprep.series.base import (
    DEFAULT_DATETIME_KEY,
    OutOfRangeError,
    TimeSeries,
    align_timezone,
)
from chartprep.series.search import locate_before
from chartprep.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_RANGE = "1y"

_UNIT_ALIASES: dict[pd.Timedelta, tuple[str, ...]] = {
    pd.Timedelta(milliseconds=1): (
        "ms",
        "msec",
        "msecs",
        "millisecond",
        "milliseconds",
    ),
    pd.Timedelta(seconds=1): ("s", "sec", "secs", "second", "seconds"),
    pd.Timedelta(minutes=1): ("min", "mins", "minute", "minutes"),
    pd.Timedelta(hours=1): ("h", "hr", "hrs", "hour", "hours"),
    pd.Timedelta(days=1): ("d", "day", "days"),
    pd.Timedelta(weeks=1): ("w", "week", "weeks"),
    pd.Timedelta(days=365.25): ("y", "yr", "yrs", "year", "years"),
}

# "m" is a month here, not a minute
_FIXED_UNITS: dict[str, pd.Timedelta] = {
    alias: duration
    for duration, aliases in _UNIT_ALIASES.items()
    for alias in aliases
}

_RANGE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)?\s*([a-zA-Z]+)\s*$")


def _utc_now() -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC")


def start_of_day(now: pd.Timestamp | None = None) -> pd.Timestamp:
    """Return midnight (UTC) of the day containing ``now``."""
    current = now if now is not None else _utc_now()
    return current.normalize()


def range_to_timedelta(
    chart_range: str,
    month_days: int = 30,
    all_days: int = 720,
) -> pd.Timedelta:
    """
    Convert a chart range expression to a duration.

    ``<n>m`` counts months of ``month_days`` days, ``all`` spans ``all_days``
    days and the remaining units (``ms``, ``s``, ``min``, ``h``, ``d``,
    ``w``, ``y`` and their long forms such as ``days`` or ``hours``) have
    their usual meaning. A missing count means 1.

    Raises:
        ValueError: If the expression or its unit is not recognised.
    """
    match = _RANGE_RE.match(chart_range)
    if match is None:
        msg = f"Invalid chart range: {chart_range!r}"
        raise ValueError(msg)

    count = float(match.group(1)) if match.group(1) else 1.0
    unit = match.group(2).lower()

    if unit == "all":
        return pd.Timedelta(days=all_days)
    if unit == "m":
        return pd.Timedelta(days=month_days) * count
    if unit in _FIXED_UNITS:
        return _FIXED_UNITS[unit] * count

    msg = f"Unknown unit {unit!r} in chart range {chart_range!r}"
    raise ValueError(msg)


def parse_cutoff(
    chart_range: str = DEFAULT_RANGE,
    now: pd.Timestamp | None = None,
    *,
    month_days: int = 30,
    all_days: int = 720,
) -> pd.Timestamp:
    """
    Resolve a chart range to the timestamp it starts at.

    Range expressions are subtracted from ``now`` (default: current UTC
    time). Anything that is not a range expression is parsed as a date.

    Args:
        chart_range: Range such as ``"1y"``, ``"3m"``, ``"all"`` or an ISO date.
        now: Reference time.
        month_days: Days per month for ``m`` ranges.
        all_days: Days covered by the ``all`` range.

    Returns:
        Cutoff timestamp.

    Raises:
        ValueError: If the value is neither a range nor a date.
    """
    if _RANGE_RE.match(chart_range):
        delta = range_to_timedelta(
            chart_range, month_days=month_days, all_days=all_days
        )
        reference = now if now is not None else _utc_now()
        return reference - delta

    try:
        return pd.Timestamp(chart_range)
    except ValueError as e:
        msg = f"Invalid chart range or date: {chart_range!r}"
        raise ValueError(msg) from e


def slice_since(
    history: TimeSeries,
    cutoff: Any,
    datetime_key: str = DEFAULT_DATETIME_KEY,
) -> TimeSeries:
    """
    Drop the records of an ascending series that precede ``cutoff``.

    The cutoff is brought into the time zone of the series first, so an
    aware cutoff from ``parse_cutoff`` slices naive (UTC) records and the
    other way round.

    Returns:
        The records at or after the cutoff, or the whole series if the
        cutoff precedes every record.
    """
    if len(history):
        cutoff = align_timezone(cutoff, history[0][datetime_key])

    try:
        index = locate_before(history, cutoff, datetime_key)
    except OutOfRangeError:
        return history[:]

    sliced = history[index + 1 :]
    log.debug(
        "Sliced series at cutoff",
        cutoff=str(cutoff),
        rows_before=len(history),
        rows_after=len(sliced),
    )
    return sliced

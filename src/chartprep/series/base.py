"""
Core types for ordered time series.

A record is a mapping of field name to value; a time series is a sequence of
records sorted ascending by a datetime field. The sort order is a caller
guarantee that the search and merge operations rely on without re-checking;
``SortedSeries`` makes it explicit by validating once at construction.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, overload

import pandas as pd

Record = Mapping[str, Any]
TimeSeries = Sequence[Record]

DEFAULT_DATETIME_KEY = "datetime"


class SeriesError(Exception):
    """Base error for time series operations."""


class InvalidInputError(SeriesError, ValueError):
    """Raised when an operation receives structurally unusable input."""


class OutOfRangeError(SeriesError, IndexError):
    """Raised when no record precedes a searched datetime."""


class UnsortedSeriesError(SeriesError, ValueError):
    """Raised when a series is not sorted ascending by its datetime key."""


def to_timestamp(value: Any) -> pd.Timestamp:
    """
    Coerce a datetime-like value to a pandas Timestamp.

    Accepts datetimes, Timestamps, ISO-8601 strings and epoch numbers.
    """
    if isinstance(value, pd.Timestamp):
        return value
    return pd.Timestamp(value)


def align_timezone(value: Any, like: Any) -> pd.Timestamp:
    """
    Coerce ``value`` to a Timestamp comparable with ``like``.

    Naive values are taken to be UTC. An aware value compared with a naive
    ``like`` is converted to UTC and made naive; a naive value compared with
    an aware ``like`` is localized to UTC and converted to its zone.
    """
    ts = to_timestamp(value)
    reference = to_timestamp(like)
    if ts.tz is None and reference.tz is not None:
        return ts.tz_localize("UTC").tz_convert(reference.tz)
    if ts.tz is not None and reference.tz is None:
        return ts.tz_convert("UTC").tz_localize(None)
    return ts


def is_before(record: Record, target: pd.Timestamp, datetime_key: str) -> bool:
    """Check whether a record's datetime is strictly before ``target``."""
    return bool(to_timestamp(record[datetime_key]) < target)


class SortedSeries(Sequence[Record]):
    """
    Immutable time series with a checked ascending-order invariant.

    Equal datetimes are allowed (non-decreasing order). Pass
    ``validate=False`` to skip the check when the source already
    guarantees ordering, e.g. after schema validation.
    """

    def __init__(
        self,
        records: Sequence[Record],
        datetime_key: str = DEFAULT_DATETIME_KEY,
        *,
        validate: bool = True,
    ) -> None:
        self._records: tuple[Record, ...] = tuple(records)
        self._datetime_key = datetime_key
        if validate:
            self._check_order()

    def _check_order(self) -> None:
        previous: pd.Timestamp | None = None
        for i, record in enumerate(self._records):
            current = to_timestamp(record[self._datetime_key])
            if previous is not None and current < previous:
                msg = (
                    f"Series not sorted ascending by {self._datetime_key!r}: "
                    f"record {i} ({current}) precedes record {i - 1} ({previous})"
                )
                raise UnsortedSeriesError(msg)
            previous = current

    @property
    def datetime_key(self) -> str:
        """Name of the field the series is ordered by."""
        return self._datetime_key

    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> "SortedSeries": ...

    def __getitem__(self, index: int | slice) -> "Record | SortedSeries":
        if isinstance(index, slice):
            # Forward slices keep the order, reversed ones must be re-checked
            return SortedSeries(
                self._records[index],
                self._datetime_key,
                validate=(index.step or 1) < 0,
            )
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SortedSeries):
            return self._records == other._records
        if isinstance(other, Sequence) and not isinstance(other, str):
            return list(self._records) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"SortedSeries(n={len(self._records)}, "
            f"datetime_key={self._datetime_key!r})"
        )

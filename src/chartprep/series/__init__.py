"""
Ordered time series alignment.

Locating records by datetime and merging independently sourced series
onto a shared key, both relying on ascending datetime order.
"""

from chartprep.series.base import (
    DEFAULT_DATETIME_KEY,
    InvalidInputError,
    OutOfRangeError,
    Record,
    SeriesError,
    SortedSeries,
    TimeSeries,
    UnsortedSeriesError,
)
from chartprep.series.cutoff import parse_cutoff, slice_since, start_of_day
from chartprep.series.filters import filter_by_segment
from chartprep.series.merge import MatchWindow, merge_by_key, select_spine
from chartprep.series.search import find_index_by_datetime, locate_before

__all__ = [
    "DEFAULT_DATETIME_KEY",
    "InvalidInputError",
    "MatchWindow",
    "OutOfRangeError",
    "Record",
    "SeriesError",
    "SortedSeries",
    "TimeSeries",
    "UnsortedSeriesError",
    "filter_by_segment",
    "find_index_by_datetime",
    "locate_before",
    "merge_by_key",
    "parse_cutoff",
    "select_spine",
    "slice_since",
    "start_of_day",
]

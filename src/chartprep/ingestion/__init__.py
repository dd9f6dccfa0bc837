"""
Series ingestion from files.

Loaders read one series per file and validate it against the time
series schema.
"""

from chartprep.ingestion.base import (
    CsvSeriesLoader,
    JsonSeriesLoader,
    SeriesLoader,
    load_series,
    loader_for,
)

__all__ = [
    "CsvSeriesLoader",
    "JsonSeriesLoader",
    "SeriesLoader",
    "load_series",
    "loader_for",
]

"""
Schema definitions using Pandera for data validation.

Tabular series are validated here before they reach the series code.
"""

from chartprep.schemas.series import TimeSeriesSchema, series_schema_for

__all__ = [
    "TimeSeriesSchema",
    "series_schema_for",
]

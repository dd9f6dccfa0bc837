"""
Pandera schema for tabular time series.

Applied when series are loaded from files so that the ascending-order
precondition of search and merge is enforced at the system boundary.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series


class TimeSeriesSchema(pa.DataFrameModel):
    """
    Schema for a single chart time series.

    Only the datetime column is fixed; value columns vary per source.
    """

    datetime: Series[pa.DateTime] = pa.Field(
        description="Point in time of the record, ascending",
    )

    @pa.check("datetime", name="ascending")
    def datetime_ascending(cls, series: Series[pd.Timestamp]) -> bool:
        """Records must be sorted ascending by datetime (ties allowed)."""
        return bool(series.is_monotonic_increasing)

    class Config:
        """Schema configuration."""

        name = "TimeSeriesSchema"
        strict = False  # Value columns are source specific
        coerce = True  # ISO strings and epoch values become datetimes


def series_schema_for(datetime_key: str = "datetime") -> pa.DataFrameSchema:
    """
    Build the time series schema for a custom datetime column name.

    Args:
        datetime_key: Name of the datetime column.

    Returns:
        DataFrameSchema equivalent to TimeSeriesSchema with the column renamed.
    """
    schema = TimeSeriesSchema.to_schema()
    if datetime_key == "datetime":
        return schema
    return schema.rename_columns({"datetime": datetime_key})

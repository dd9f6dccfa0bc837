"""
Base classes and utilities for series ingestion.

Provides common functionality for all series loaders.
"""

from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd
import pandera.pandas as pa

from chartprep.config.settings import ChartPrepConfig
from chartprep.schemas.series import series_schema_for
from chartprep.series.base import SortedSeries
from chartprep.utils.logging import get_logger

log = get_logger(__name__)


class SeriesLoader(ABC):
    """
    Abstract base class for series loaders.

    All loaders validate against the time series schema at the system
    boundary, so records handed to search and merge are known to be
    sorted.
    """

    def __init__(self, path: Path, config: ChartPrepConfig) -> None:
        """
        Initialize series loader.

        Args:
            path: File holding one series.
            config: Configuration naming the datetime field.
        """
        self.path = path
        self.config = config
        self.schema: pa.DataFrameSchema = series_schema_for(config.datetime_key)
        self._cached_data: pd.DataFrame | None = None

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame:
        """Load raw data from source. Implemented by subclasses."""
        ...

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate a series as a DataFrame.

        Args:
            validate: Whether to validate against schema.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            FileNotFoundError: If the file does not exist.
            pandera.errors.SchemaError: If validation fails.
            pandera.errors.SchemaErrors: If datetime values cannot be coerced.
        """
        if self._cached_data is not None:
            return self._cached_data

        if not self.path.exists():
            msg = f"Series file not found: {self.path}"
            raise FileNotFoundError(msg)

        log.info("Loading series", loader=self.__class__.__name__, path=str(self.path))

        df = self._load_raw()
        log.info("Loaded raw series", rows=len(df), columns=list(df.columns))

        if validate:
            df = self._validate(df)
            log.info("Schema validation passed", path=str(self.path))

        self._cached_data = df
        return df

    def _validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate DataFrame against schema.

        Args:
            df: DataFrame to validate.

        Returns:
            Validated DataFrame.
        """
        return self.schema.validate(df)

    def to_records(self, *, validate: bool = True) -> SortedSeries:
        """
        Load the series as a list of records.

        Schema validation already proves ordering; without it the order is
        checked by ``SortedSeries`` when ``series.validate_order`` is set.

        Args:
            validate: Whether to validate against schema.

        Returns:
            Records in file order.
        """
        df = self.load(validate=validate)
        records = df.to_dict(orient="records")
        return SortedSeries(
            records,
            self.config.datetime_key,
            validate=not validate and self.config.series.validate_order,
        )


class CsvSeriesLoader(SeriesLoader):
    """Loader for comma-separated series files."""

    def _load_raw(self) -> pd.DataFrame:
        return pd.read_csv(self.path)


class JsonSeriesLoader(SeriesLoader):
    """Loader for JSON files holding an array of record objects."""

    def _load_raw(self) -> pd.DataFrame:
        return pd.read_json(self.path, orient="records", convert_dates=False)


LOADERS: dict[str, type[SeriesLoader]] = {
    ".csv": CsvSeriesLoader,
    ".json": JsonSeriesLoader,
}


def loader_for(path: Path, config: ChartPrepConfig) -> SeriesLoader:
    """
    Pick a loader by file suffix.

    Raises:
        ValueError: If the suffix is not supported.
    """
    loader_cls = LOADERS.get(path.suffix.lower())
    if loader_cls is None:
        supported = ", ".join(sorted(LOADERS))
        msg = f"Unsupported series file type {path.suffix!r} (supported: {supported})"
        raise ValueError(msg)
    return loader_cls(path, config)


def load_series(
    path: Path,
    config: ChartPrepConfig,
    *,
    validate: bool = True,
) -> SortedSeries:
    """
    Load one series file into records.

    Args:
        path: CSV or JSON file.
        config: Configuration naming the datetime field.
        validate: Whether to validate against the schema.

    Returns:
        Records sorted ascending by the datetime field.
    """
    return loader_for(path, config).to_records(validate=validate)

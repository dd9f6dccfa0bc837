"""
Typed configuration models using Pydantic.

Field names and chart range defaults live here so that series code never
hardcodes which column is the merge key or the datetime.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SeriesConfig(BaseModel):
    """Which record fields drive merging and ordering."""

    model_config = ConfigDict(frozen=True)

    merge_key: str = Field(
        default="datetime", description="Field compared between series when merging"
    )
    datetime_key: str = Field(
        default="datetime", description="Field series are sorted ascending by"
    )
    validate_order: bool = Field(
        default=True,
        description="Check ascending order when series enter the package",
    )

    @field_validator("merge_key", "datetime_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Ensure field names are non-blank."""
        if not v.strip():
            msg = "Field name must not be blank"
            raise ValueError(msg)
        return v


class CutoffConfig(BaseModel):
    """Chart range resolution."""

    model_config = ConfigDict(frozen=True)

    default: str = Field(default="1y", description="Range used when none is given")
    month_days: int = Field(default=30, ge=28, le=31, description="Days per 'm' unit")
    all_days: int = Field(
        default=720, ge=1, description="Days covered by the 'all' range"
    )


class LoggingConfig(BaseModel):
    """Log output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO", description="Stdlib log level name")
    json_output: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a stdlib level name."""
        upper = v.upper()
        if upper not in logging.getLevelNamesMapping():
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return upper


class ChartPrepConfig(BaseModel):
    """Complete configuration."""

    model_config = ConfigDict(frozen=True)

    series: SeriesConfig = Field(default_factory=SeriesConfig)
    cutoff: CutoffConfig = Field(default_factory=CutoffConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def merge_key(self) -> str:
        """Convenience accessor for the merge key."""
        return self.series.merge_key

    @property
    def datetime_key(self) -> str:
        """Convenience accessor for the datetime key."""
        return self.series.datetime_key

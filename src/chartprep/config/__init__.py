"""
Configuration management with typed Pydantic models.

Provides field-name and chart-range settings with
environment-aware configuration loading.
"""

from chartprep.config.loader import default_config, load_config
from chartprep.config.settings import (
    ChartPrepConfig,
    CutoffConfig,
    LoggingConfig,
    SeriesConfig,
)

__all__ = [
    "ChartPrepConfig",
    "CutoffConfig",
    "LoggingConfig",
    "SeriesConfig",
    "default_config",
    "load_config",
]

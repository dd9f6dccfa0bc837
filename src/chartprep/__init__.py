"""
Chartprep: time series preparation for chart rendering.

This package aligns independently sourced time series onto a shared key
and locates records by datetime in ascending series, for dashboards that
redraw several series at once.
"""

from importlib.metadata import version

__version__ = version("chartprep")

__all__ = ["__version__"]

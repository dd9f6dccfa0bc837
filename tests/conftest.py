"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pandas as pd
import pytest


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def daily_history() -> list[dict[str, Any]]:
    """Five daily price records starting 2024-01-01."""
    start = datetime(2024, 1, 1)
    return [
        {"datetime": start + timedelta(days=i), "price": 100.0 + i}
        for i in range(5)
    ]


@pytest.fixture
def keyed_spine() -> list[dict[str, Any]]:
    """Series keyed 1..5 with one value field."""
    return [{"k": k, "a": f"a{k}"} for k in [1, 2, 3, 4, 5]]


@pytest.fixture
def price_frame() -> pd.DataFrame:
    """Daily price series as it arrives from a CSV export."""
    return pd.DataFrame(
        {
            "datetime": ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"],
            "price": [100.0, 101.5, 99.8, 102.2],
        }
    )


@pytest.fixture
def volume_frame() -> pd.DataFrame:
    """Daily volume series covering the last days of ``price_frame``."""
    return pd.DataFrame(
        {
            "datetime": ["2024-01-03", "2024-01-04"],
            "volume": [1200, 1500],
        }
    )


@pytest.fixture
def price_csv(tmp_path: Path, price_frame: pd.DataFrame) -> Path:
    """Write the price series to CSV."""
    path = tmp_path / "price.csv"
    price_frame.to_csv(path, index=False)
    return path


@pytest.fixture
def volume_csv(tmp_path: Path, volume_frame: pd.DataFrame) -> Path:
    """Write the volume series to CSV."""
    path = tmp_path / "volume.csv"
    volume_frame.to_csv(path, index=False)
    return path


@pytest.fixture
def unsorted_csv(tmp_path: Path) -> Path:
    """CSV whose rows are not in ascending datetime order."""
    path = tmp_path / "unsorted.csv"
    pd.DataFrame(
        {
            "datetime": ["2024-01-03", "2024-01-01", "2024-01-02"],
            "price": [1.0, 2.0, 3.0],
        }
    ).to_csv(path, index=False)
    return path

"""Tests for configuration system."""

from pathlib import Path

import pytest

from chartprep.config import (
    ChartPrepConfig,
    CutoffConfig,
    LoggingConfig,
    SeriesConfig,
    default_config,
    load_config,
)


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestSeriesConfig:
    """Tests for SeriesConfig."""

    def test_defaults(self) -> None:
        """Test that merge and datetime keys default to 'datetime'."""
        config = SeriesConfig()
        assert config.merge_key == "datetime"
        assert config.datetime_key == "datetime"
        assert config.validate_order is True

    def test_blank_key_rejected(self) -> None:
        """Test that a blank field name raises error."""
        with pytest.raises(ValueError, match="must not be blank"):
            SeriesConfig(merge_key="  ")

    def test_frozen(self) -> None:
        """Test that config sections are immutable."""
        config = SeriesConfig()
        with pytest.raises(ValueError):
            config.merge_key = "id"  # type: ignore[misc]


class TestCutoffConfig:
    """Tests for CutoffConfig."""

    def test_defaults(self) -> None:
        """Test the default chart range settings."""
        config = CutoffConfig()
        assert config.default == "1y"
        assert config.month_days == 30
        assert config.all_days == 720

    def test_month_days_bounds(self) -> None:
        """Test that an implausible month length raises error."""
        with pytest.raises(ValueError):
            CutoffConfig(month_days=40)


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_normalised(self) -> None:
        """Test that level names are upper-cased."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_level(self) -> None:
        """Test that an unknown level raises error."""
        with pytest.raises(ValueError, match="Unknown log level"):
            LoggingConfig(level="chatty")


class TestLoadConfig:
    """Tests for config loading."""

    def test_default_config(self) -> None:
        """Test defaults without any file."""
        config = default_config()
        assert isinstance(config, ChartPrepConfig)
        assert config.merge_key == "datetime"
        assert config.logging.level == "INFO"

    def test_load_full_config(self, tmp_path: Path) -> None:
        """Test loading every section."""
        path = _write(
            tmp_path / "chart.yaml",
            """
series:
  merge_key: id
  datetime_key: ts
  validate_order: false

cutoff:
  default: 3m
  month_days: 31

logging:
  level: debug
  json_output: true
""",
        )
        config = load_config(path)
        assert config.merge_key == "id"
        assert config.datetime_key == "ts"
        assert config.series.validate_order is False
        assert config.cutoff.default == "3m"
        assert config.cutoff.month_days == 31
        assert config.cutoff.all_days == 720
        assert config.logging.level == "DEBUG"
        assert config.logging.json_output is True

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        """Test that an empty file is valid."""
        config = load_config(_write(tmp_path / "empty.yaml", ""))
        assert config == default_config()

    def test_env_var_interpolation(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test environment variable interpolation."""
        monkeypatch.setenv("CHART_MERGE_KEY", "symbol")
        monkeypatch.delenv("CHART_VALIDATE", raising=False)
        path = _write(
            tmp_path / "env.yaml",
            """
series:
  merge_key: ${CHART_MERGE_KEY}
  validate_order: ${CHART_VALIDATE:false}
""",
        )
        config = load_config(path)
        assert config.merge_key == "symbol"
        assert config.series.validate_order is False

    def test_inherits_base_yaml(self, tmp_path: Path) -> None:
        """Test that a sibling base.yaml is merged under the main file."""
        _write(
            tmp_path / "base.yaml",
            """
series:
  merge_key: id
  datetime_key: ts
logging:
  level: WARNING
""",
        )
        path = _write(
            tmp_path / "chart.yaml",
            """
series:
  merge_key: symbol
""",
        )
        config = load_config(path)
        assert config.merge_key == "symbol"
        assert config.datetime_key == "ts"
        assert config.logging.level == "WARNING"

    def test_explicit_base_path(self, tmp_path: Path) -> None:
        """Test inheritance from an explicitly named base file."""
        base = _write(tmp_path / "shared.yaml", "cutoff:\n  default: all\n")
        path = _write(tmp_path / "chart.yaml", "series:\n  merge_key: id\n")
        config = load_config(path, base_path=base)
        assert config.cutoff.default == "all"
        assert config.merge_key == "id"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_boolean(self, tmp_path: Path) -> None:
        """Test that an unparseable boolean raises error."""
        path = _write(tmp_path / "bad.yaml", "series:\n  validate_order: maybe\n")
        with pytest.raises(ValueError, match="Cannot parse boolean"):
            load_config(path)

    def test_shipped_base_config(self, project_root: Path) -> None:
        """Test that the repository's base config loads."""
        config = load_config(project_root / "configs" / "base.yaml")
        assert config.merge_key == "datetime"
        assert config.cutoff.default == "1y"

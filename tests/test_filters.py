"""Tests for record filters."""

from chartprep.series import filter_by_segment

PROJECTS = [
    {"name": "alpha", "market_segment": "DeFi"},
    {"name": "beta", "market_segment": "Gaming"},
    {"name": "gamma", "market_segment": "DeFi"},
    {"name": "delta"},
]


def test_keeps_selected_segments() -> None:
    """Test that only records in the selected segments remain."""
    result = filter_by_segment(PROJECTS, ["DeFi"])
    assert [p["name"] for p in result] == ["alpha", "gamma"]


def test_mapping_of_segments() -> None:
    """Test that a mapping keyed by segment name selects its keys."""
    result = filter_by_segment(PROJECTS, {"Gaming": 3, "DeFi": 7})
    assert [p["name"] for p in result] == ["alpha", "beta", "gamma"]


def test_no_segments_returns_input() -> None:
    """Test that an empty selection leaves the records untouched."""
    assert filter_by_segment(PROJECTS, {}) is PROJECTS


def test_none_records() -> None:
    """Test that missing records pass through."""
    assert filter_by_segment(None, ["DeFi"]) is None


def test_custom_field() -> None:
    """Test filtering on another field."""
    result = filter_by_segment(PROJECTS, ["beta"], field="name")
    assert result == [PROJECTS[1]]

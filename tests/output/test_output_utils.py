"""Unit tests for the output utilities."""

import pytest

from sales_dash.output.utils import (
    ensure_directory,
    format_amount,
    format_axis_tick,
    sanitize_label,
)


def test_ensure_directory(tmp_path):
    """Test that the ensure_directory function correctly creates a directory."""
    new_dir = tmp_path / "charts" / "2018"
    assert not new_dir.exists()
    assert ensure_directory(new_dir) == new_dir
    assert new_dir.exists()
    ensure_directory(str(new_dir))  # Should not raise an error
    assert new_dir.exists()


def test_format_amount():
    """Test thousands separators and two decimals."""
    assert format_amount(1234567.891) == "1,234,567.89"
    assert format_amount(0.0) == "0.00"
    assert format_amount(-12.5) == "-12.50"


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, "0"),
        (250.0, "250"),
        (999.5, "999.5"),
        (1000.0, "1k"),
        (12400.0, "12k"),
        (-250.0, "-250"),
        (-5000.0, "-5k"),
    ],
)
def test_format_axis_tick(value, expected):
    """Test the compact axis labels."""
    assert format_axis_tick(value) == expected


def test_sanitize_label():
    """Test that labels become filesystem-friendly names."""
    assert sanitize_label("GAMMA, INC.") == "GAMMA__INC"
    assert sanitize_label("2018") == "2018"
    assert sanitize_label("///") == "chart"

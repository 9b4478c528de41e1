"""Shared helpers for sales charts and reports."""

from pathlib import Path


def ensure_directory(path: str | Path) -> Path:
    """Create the directory at ``path`` if needed and return its Path."""
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
    return directory


def format_amount(value: float) -> str:
    """Format a sales amount with thousands separators and two decimals."""
    return f"{value:,.2f}"


def format_axis_tick(value: float) -> str:
    """Shorten axis values of a thousand or more to ``12k`` style labels."""
    if abs(value) >= 1000:
        return f"{value / 1000:.0f}k"
    return f"{value:g}"


def sanitize_label(label: str) -> str:
    """Return a filesystem-friendly version of the provided label."""
    safe = [ch if ch.isalnum() or ch in {"-", "_"} else "_" for ch in label]
    cleaned = "".join(safe).strip("_")
    return cleaned or "chart"

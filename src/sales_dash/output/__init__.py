"""Visualization utilities for sales dashboards."""

from .palette import CATEGORY_COLORS, DEFAULT_COLOR, WAREHOUSE_PALETTE, colors_for
from .plots import (
    PlotReport,
    SeriesPlotConfig,
    SummaryPlotConfig,
    generate_series_plot,
    generate_summary_plot,
    series_title,
)

__all__ = [
    "CATEGORY_COLORS",
    "DEFAULT_COLOR",
    "WAREHOUSE_PALETTE",
    "colors_for",
    "PlotReport",
    "SeriesPlotConfig",
    "SummaryPlotConfig",
    "generate_series_plot",
    "generate_summary_plot",
    "series_title",
]

"""Plotting tools for sales series and distribution summaries."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import FuncFormatter

from ..data.files import ALL_YEARS
from ..series import SeriesSet, SummaryRanking, truncate_label
from .utils import ensure_directory, format_axis_tick


def series_title(year: str) -> str:
    """Return the main chart title for a year filter."""
    if year == ALL_YEARS:
        return "Monthly Sales (All Years Combined)"
    return f"Monthly Sales - {year}"


@dataclass(frozen=True)
class SeriesPlotConfig:
    """Styling options for the monthly series chart."""

    style: str = "line"
    ylabel: str = "Sales"
    line_width: float = 2.0
    marker_size: float = 4.0
    fill_alpha: float = 0.15
    label_width: int = 24


@dataclass(frozen=True)
class SummaryPlotConfig:
    """Styling options for the distribution doughnut."""

    title: str = "Sales Distribution by Category"
    ring_width: float = 0.4
    label_width: int = 24


@dataclass(frozen=True)
class PlotReport:
    """Metadata describing a saved plot."""

    path: Path
    series_count: int


def generate_series_plot(
    series: SeriesSet,
    colors: Sequence[str],
    *,
    year: str = ALL_YEARS,
    output_dir: str | Path = "out",
    filename: str = "series.png",
    config: SeriesPlotConfig | None = None,
) -> PlotReport:
    """Render one line (or bar group) per selected value over the month axis."""
    config = config or SeriesPlotConfig()
    if config.style not in {"line", "bar"}:
        raise ValueError(f"Unsupported chart style {config.style!r}.")
    out_dir = ensure_directory(output_dir)

    positions = np.arange(len(series.labels))
    count = max(len(series), 1)
    bar_width = 0.8 / count

    fig, ax = plt.subplots(figsize=(12, 6))
    for offset, ((label, values), color) in enumerate(zip(series.series, colors)):
        display = truncate_label(label, config.label_width)
        if config.style == "line":
            ax.plot(
                positions,
                values,
                color=color,
                linewidth=config.line_width,
                marker="o",
                markersize=config.marker_size,
                label=display,
            )
            ax.fill_between(positions, values, color=color, alpha=config.fill_alpha)
        else:
            shift = (offset - (count - 1) / 2) * bar_width
            ax.bar(positions + shift, values, width=bar_width, color=color, label=display)

    ax.set_xticks(positions)
    ax.set_xticklabels(series.labels)
    ax.yaxis.set_major_formatter(FuncFormatter(lambda value, _: format_axis_tick(value)))
    ax.set_title(series_title(year))
    ax.set_ylabel(config.ylabel)
    if len(series):
        ax.legend(loc="upper right")
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.6)
    fig.tight_layout()

    output_path = out_dir / filename
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return PlotReport(path=output_path, series_count=len(series))


def generate_summary_plot(
    ranking: SummaryRanking,
    colors: Sequence[str],
    *,
    output_dir: str | Path = "out",
    filename: str = "summary.png",
    config: SummaryPlotConfig | None = None,
) -> PlotReport:
    """Render the ranked totals as a doughnut chart."""
    config = config or SummaryPlotConfig()
    out_dir = ensure_directory(output_dir)

    labels = [truncate_label(label, config.label_width) for label, _ in ranking]
    # Wedges must be non-negative; refunds can push a total below zero.
    values = [max(total, 0.0) for _, total in ranking]

    fig, ax = plt.subplots(figsize=(8, 6))
    if any(values):
        ax.pie(
            values,
            colors=list(colors),
            startangle=90,
            counterclock=False,
            wedgeprops={"width": config.ring_width, "edgecolor": "white"},
        )
        ax.legend(labels, loc="center left", bbox_to_anchor=(1.0, 0.5))
    ax.set_title(config.title)
    ax.axis("equal")
    fig.tight_layout()

    output_path = out_dir / filename
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return PlotReport(path=output_path, series_count=len(ranking))

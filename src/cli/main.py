"""Command line entry point for the sales-dash application."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

import click
import structlog

from sales_dash.dashboard import DashboardModel
from sales_dash.data import Dimension
from sales_dash.data.files import ALL_YEARS, DEFAULT_SOURCE
from sales_dash.data.pipeline import load_sales_data
from sales_dash.logging import configure_logging
from sales_dash.output import (
    SeriesPlotConfig,
    SummaryPlotConfig,
    colors_for,
    generate_series_plot,
    generate_summary_plot,
)
from sales_dash.output.utils import format_amount, sanitize_label
from sales_dash.state import (
    CHART_STYLES,
    SeedDefaults,
    SelectionState,
    SetChartStyle,
    SetDimension,
    SetWarehouseSearch,
    SetYear,
    ToggleValue,
    reduce,
)

SOURCE_HELP = (
    "CSV path, http(s) URL or JSON snapshot to read. May also be set via the "
    "SALES_DASH_SOURCE env var."
)
SELECT_HELP = "Value to select (repeatable). Defaults to the top values of the dimension."
NO_DEFAULTS_HELP = "Skip pre-selecting the top values, so the selection is exactly --select."

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")
DIMENSION_CHOICES = tuple(dimension.value for dimension in Dimension)

logger = structlog.get_logger(__name__)


def _load_model(ctx: click.Context) -> DashboardModel:
    """Load the configured source, converting a failed load into a CLI error."""
    ctx.ensure_object(dict)
    source = ctx.obj.get("source") or DEFAULT_SOURCE
    failures: list[str] = []
    model = asyncio.run(
        load_sales_data(source, on_ready=lambda _: None, on_failure=failures.append)
    )
    if model is None:
        reason = failures[0] if failures else f"Could not load {source}"
        raise click.ClickException(reason)
    return model


def _selection(
    model: DashboardModel,
    *,
    dimension: str,
    year: str,
    selected: Sequence[str],
    chart_style: str = "line",
    seed: bool = True,
) -> SelectionState:
    """Replay CLI options through the reducer, then seed defaults for empty sets.

    With ``seed=False`` the selection is exactly what was passed, which may be
    empty.
    """
    state = SelectionState()
    state = reduce(state, SetDimension(dimension))
    state = reduce(state, SetYear(year))
    state = reduce(state, SetChartStyle(chart_style))
    for value in dict.fromkeys(selected):
        state = reduce(state, ToggleValue(state.dimension, value))
    if seed:
        state = reduce(state, SeedDefaults(model.index))
    if year != ALL_YEARS and year not in model.index.years:
        logger.warning("selection.unknown_year", year=year, known=list(model.index.years))
    known = set(model.index.values(state.dimension))
    stale = [value for value in state.selected() if value not in known]
    if stale:
        logger.warning("selection.unknown_values", dimension=state.dimension.value, values=stale)
    return state


def _write_or_echo(document: str, output: Path | None) -> None:
    """Write ``document`` to ``output`` when given, otherwise print it."""
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document)
        click.echo(f"Wrote summary to {output}")
    else:
        click.echo(document)


@click.group()
@click.option(
    "--source",
    envvar="SALES_DASH_SOURCE",
    default=DEFAULT_SOURCE,
    show_default=True,
    help=SOURCE_HELP,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="SALES_DASH_LOG_LEVEL",
    default="info",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="SALES_DASH_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(ctx: click.Context, source: str, log_level: str, log_format: str) -> None:
    """Aggregate warehouse and retail sales into chart-ready views."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    ctx.ensure_object(dict)
    ctx.obj.update({"source": source})
    logger.bind(command_group="sales-dash").debug(
        "cli.initialized",
        source=source,
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("fetch-dataset")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to save the normalized facts as a JSON snapshot.",
)
@click.pass_context
def fetch_dataset(ctx: click.Context, *, output_path: Path | None) -> None:
    """Load the dataset, report record counts and optionally snapshot it."""
    cmd_log = logger.bind(command="fetch-dataset")
    cmd_log.info("command.start")
    model = _load_model(ctx)
    dataset = model.dataset
    index = model.index
    click.echo(
        f"Loaded {dataset.record_count:,} records: {len(dataset.facts):,} facts, "
        f"{dataset.dropped_count:,} dropped, across {len(index.categories)} categories, "
        f"{len(index.warehouses)} warehouses and {len(index.years)} years."
    )
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(dataset.to_dict(), indent=2))
        click.echo(f"Wrote dataset snapshot to {output_path}")
        cmd_log.info("dataset.written", output=str(output_path), facts=len(dataset.facts))


@cli.command("dimensions")
@click.option("--search", default="", help="Narrow the warehouse list by substring.")
@click.option(
    "--limit",
    type=int,
    default=20,
    show_default=True,
    help="Maximum number of warehouses to list.",
)
@click.pass_context
def dimensions(ctx: click.Context, *, search: str, limit: int) -> None:
    """List the categories, years and sales-ranked warehouses."""
    if limit <= 0:
        raise click.BadParameter("limit must be a positive integer.", param_hint="--limit")
    model = _load_model(ctx)
    state = reduce(SelectionState(dimension=Dimension.WAREHOUSE), SetWarehouseSearch(search))
    totals = dict(model.index.warehouse_ranking)
    click.echo("Categories: " + ", ".join(model.index.categories))
    click.echo("Years: " + ", ".join(model.index.years))
    candidates = model.candidates(state)
    click.echo(f"Warehouses ({len(candidates)} of {len(model.index.warehouses)}):")
    for rank, name in enumerate(candidates[:limit], start=1):
        click.echo(f"{rank:>4}. {name}  {format_amount(totals[name])}")


@cli.command("summary")
@click.option(
    "--dimension",
    type=click.Choice(DIMENSION_CHOICES, case_sensitive=False),
    default=Dimension.CATEGORY.value,
    show_default=True,
    help="Aggregate by product category or by warehouse.",
)
@click.option("--year", default=ALL_YEARS, show_default=True, help="Year label or 'all'.")
@click.option("--select", "selected", multiple=True, help=SELECT_HELP)
@click.option("--no-defaults", is_flag=True, help=NO_DEFAULTS_HELP)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to write the JSON summary.",
)
@click.pass_context
def summary(
    ctx: click.Context,
    *,
    dimension: str,
    year: str,
    selected: tuple[str, ...],
    no_defaults: bool,
    output: Path | None,
) -> None:
    """Emit monthly series, the ranked summary and stat cards as JSON."""
    model = _load_model(ctx)
    state = _selection(
        model, dimension=dimension, year=year, selected=selected, seed=not no_defaults
    )
    view = model.view(state)
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "source": ctx.obj.get("source"),
        "record_count": model.dataset.record_count,
        **view.to_dict(),
    }
    _write_or_echo(json.dumps(payload, indent=2), output)


@cli.command("plot")
@click.option(
    "--dimension",
    type=click.Choice(DIMENSION_CHOICES, case_sensitive=False),
    default=Dimension.CATEGORY.value,
    show_default=True,
    help="Aggregate by product category or by warehouse.",
)
@click.option("--year", default=ALL_YEARS, show_default=True, help="Year label or 'all'.")
@click.option("--select", "selected", multiple=True, help=SELECT_HELP)
@click.option("--no-defaults", is_flag=True, help=NO_DEFAULTS_HELP)
@click.option(
    "--style",
    type=click.Choice(CHART_STYLES, case_sensitive=False),
    default="line",
    show_default=True,
    help="Draw the monthly series as lines or grouped bars.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("out"),
    show_default=True,
    help="Directory for chart images.",
)
@click.pass_context
def plot(
    ctx: click.Context,
    *,
    dimension: str,
    year: str,
    selected: tuple[str, ...],
    no_defaults: bool,
    style: str,
    output_dir: Path,
) -> None:
    """Render the monthly series chart and the distribution doughnut."""
    model = _load_model(ctx)
    state = _selection(
        model,
        dimension=dimension,
        year=year,
        selected=selected,
        chart_style=style,
        seed=not no_defaults,
    )
    view = model.view(state)
    slug = f"{state.dimension.value}_{sanitize_label(state.year)}"
    series_report = generate_series_plot(
        view.series,
        colors_for(view.series.keys(), state.dimension, model.index),
        year=state.year,
        output_dir=output_dir,
        filename=f"series_{slug}.png",
        config=SeriesPlotConfig(style=state.chart_style),
    )
    summary_report = generate_summary_plot(
        view.summary,
        colors_for([label for label, _ in view.summary], state.dimension, model.index),
        output_dir=output_dir,
        filename=f"summary_{slug}.png",
        config=SummaryPlotConfig(
            title=f"Sales Distribution by {state.dimension.value.title()}"
        ),
    )
    click.echo(f"Wrote {series_report.path} and {summary_report.path}")
    for card in view.cards:
        click.echo(
            f"{card.label}: total {format_amount(card.total)} "
            f"(retail {format_amount(card.retail)}, warehouse {format_amount(card.warehouse)})"
        )


if __name__ == "__main__":
    cli()

"""Immutable dashboard selection state and the reducer that evolves it."""

from typing import TypeAlias

import structlog
from attrs import define, evolve, field

from ..aggregation.index import DimensionIndex
from ..data.files import ALL_YEARS
from ..data.models import Dimension

logger = structlog.get_logger(__name__)

CHART_STYLES = ("line", "bar")


def _chart_style(value: str) -> str:
    style = value.strip().lower()
    if style not in CHART_STYLES:
        raise ValueError(f"Unsupported chart style {value!r}. Choose one of: {', '.join(CHART_STYLES)}.")
    return style


@define(slots=True, frozen=True)
class SelectionState:
    """User-controlled parameters of the dashboard views.

    ``warehouse_search`` only narrows the candidate list shown for selection; it never
    filters aggregation.
    """

    dimension: Dimension = field(converter=Dimension.parse, default=Dimension.CATEGORY)
    categories: tuple[str, ...] = field(converter=tuple, factory=tuple)
    warehouses: tuple[str, ...] = field(converter=tuple, factory=tuple)
    year: str = ALL_YEARS
    chart_style: str = field(converter=_chart_style, default="line")
    warehouse_search: str = ""
    seeded: bool = False

    def selected(self, dimension: Dimension | str | None = None) -> tuple[str, ...]:
        """Return the selected values of ``dimension`` (the active one by default)."""
        dimension = self.dimension if dimension is None else Dimension.parse(dimension)
        if dimension is Dimension.CATEGORY:
            return self.categories
        return self.warehouses

    def view_key(self) -> tuple[Dimension, tuple[str, ...], str]:
        """The slice of state that derived chart views depend on."""
        return (self.dimension, self.selected(), self.year)


@define(slots=True, frozen=True)
class SeedDefaults:
    """Pre-select the top values once the dataset has loaded."""

    index: DimensionIndex


@define(slots=True, frozen=True)
class ToggleValue:
    """Add a value to, or remove it from, a dimension's selection."""

    dimension: Dimension = field(converter=Dimension.parse)
    value: str


@define(slots=True, frozen=True)
class SetDimension:
    dimension: Dimension = field(converter=Dimension.parse)


@define(slots=True, frozen=True)
class SetYear:
    year: str


@define(slots=True, frozen=True)
class SetChartStyle:
    chart_style: str = field(converter=_chart_style)


@define(slots=True, frozen=True)
class SetWarehouseSearch:
    text: str


Action: TypeAlias = (
    SeedDefaults | ToggleValue | SetDimension | SetYear | SetChartStyle | SetWarehouseSearch
)


def _toggle(values: tuple[str, ...], value: str) -> tuple[str, ...]:
    if value in values:
        return tuple(item for item in values if item != value)
    return values + (value,)


def _seed(state: SelectionState, index: DimensionIndex) -> SelectionState:
    # Seeding fires once, and only after a load that produced selectable values.
    if state.seeded or index.is_empty():
        return state
    categories = state.categories or index.default_selection(Dimension.CATEGORY)
    warehouses = state.warehouses or index.default_selection(Dimension.WAREHOUSE)
    logger.debug("selection.seeded", categories=len(categories), warehouses=len(warehouses))
    return evolve(state, categories=categories, warehouses=warehouses, seeded=True)


def reduce(state: SelectionState, action: Action) -> SelectionState:
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, SeedDefaults):
        return _seed(state, action.index)
    if isinstance(action, ToggleValue):
        if action.dimension is Dimension.CATEGORY:
            return evolve(state, categories=_toggle(state.categories, action.value))
        return evolve(state, warehouses=_toggle(state.warehouses, action.value))
    if isinstance(action, SetDimension):
        return evolve(state, dimension=action.dimension)
    if isinstance(action, SetYear):
        return evolve(state, year=action.year)
    if isinstance(action, SetChartStyle):
        return evolve(state, chart_style=action.chart_style)
    if isinstance(action, SetWarehouseSearch):
        return evolve(state, warehouse_search=action.text)
    raise TypeError(f"Unsupported action: {action!r}")


__all__ = [
    "CHART_STYLES",
    "Action",
    "SeedDefaults",
    "SelectionState",
    "SetChartStyle",
    "SetDimension",
    "SetWarehouseSearch",
    "SetYear",
    "ToggleValue",
    "reduce",
]

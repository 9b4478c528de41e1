"""Dashboard selection state."""

from .selection import (
    CHART_STYLES,
    Action,
    SeedDefaults,
    SelectionState,
    SetChartStyle,
    SetDimension,
    SetWarehouseSearch,
    SetYear,
    ToggleValue,
    reduce,
)

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

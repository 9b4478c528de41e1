"""Colour assignment for categories and warehouses."""

from collections.abc import Iterable

from ..aggregation.index import DimensionIndex
from ..data.models import Dimension

DEFAULT_COLOR = "#708090"

CATEGORY_COLORS: dict[str, str] = {
    "WINE": "#8B0A50",
    "BEER": "#DAA520",
    "LIQUOR": "#1E90FF",
    "KEGS": "#2E8B57",
    "STR_SUPPLIES": "#9370DB",
    "REF": "#FF6347",
}

WAREHOUSE_PALETTE: tuple[str, ...] = (
    "#1E90FF",
    "#DAA520",
    "#8B0A50",
    "#2E8B57",
    "#9370DB",
    "#FF6347",
    "#00CED1",
    "#C71585",
    "#3CB371",
    "#FF7F50",
)


def colors_for(
    labels: Iterable[str],
    dimension: Dimension | str,
    index: DimensionIndex,
) -> list[str]:
    """Resolve one colour per label.

    Categories use fixed colours; warehouses take the palette slot of their sales
    rank so a warehouse keeps its colour however the selection changes.
    """
    dimension = Dimension.parse(dimension)
    if dimension is Dimension.CATEGORY:
        return [CATEGORY_COLORS.get(label, DEFAULT_COLOR) for label in labels]
    return [index.color_for(label, WAREHOUSE_PALETTE, fallback=DEFAULT_COLOR) for label in labels]

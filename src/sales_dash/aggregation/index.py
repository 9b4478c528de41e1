"""Distinct dimension values observed in a dataset."""

from collections.abc import Iterable, Sequence

import structlog
from attrs import define, field

from ..data.files import DEFAULT_CATEGORY_SELECTION, DEFAULT_WAREHOUSE_SELECTION
from ..data.models import Dimension, Fact
from .utils import rank_descending

logger = structlog.get_logger(__name__)


@define(slots=True, frozen=True)
class DimensionIndex:
    """Selectable categories, warehouses and years for one dataset.

    ``warehouse_ranking`` holds (warehouse, total sales) pairs ordered by sales,
    largest first. That order drives both the default selection and colour
    assignment, so it must stay stable for the session.
    """

    categories: tuple[str, ...] = field(converter=tuple, factory=tuple)
    years: tuple[str, ...] = field(converter=tuple, factory=tuple)
    warehouse_ranking: tuple[tuple[str, float], ...] = field(converter=tuple, factory=tuple)

    @property
    def warehouses(self) -> tuple[str, ...]:
        """Warehouses ordered by total sales, largest first."""
        return tuple(name for name, _ in self.warehouse_ranking)

    def is_empty(self) -> bool:
        """Return True when no category or warehouse was observed."""
        return not self.categories and not self.warehouse_ranking

    def values(self, dimension: Dimension | str) -> tuple[str, ...]:
        """Return the ordered selectable values for ``dimension``."""
        if Dimension.parse(dimension) is Dimension.CATEGORY:
            return self.categories
        return self.warehouses

    def default_selection(self, dimension: Dimension | str, limit: int | None = None) -> tuple[str, ...]:
        """Return the values pre-selected on first load (top of each ordering)."""
        dimension = Dimension.parse(dimension)
        if limit is None:
            limit = (
                DEFAULT_CATEGORY_SELECTION
                if dimension is Dimension.CATEGORY
                else DEFAULT_WAREHOUSE_SELECTION
            )
        return self.values(dimension)[:limit]

    def rank_of(self, warehouse: str) -> int | None:
        """Return the sales rank (0 = best) of a warehouse, or None when unknown."""
        for rank, (name, _) in enumerate(self.warehouse_ranking):
            if name == warehouse:
                return rank
        return None

    def color_for(self, warehouse: str, palette: Sequence[str], *, fallback: str) -> str:
        """Pick the palette colour at the warehouse's rank, wrapping around."""
        rank = self.rank_of(warehouse)
        if rank is None or not palette:
            return fallback
        return palette[rank % len(palette)]

    def search_warehouses(self, text: str) -> tuple[str, ...]:
        """Filter the ranked warehouses by a case-insensitive substring."""
        needle = text.strip().lower()
        if not needle:
            return self.warehouses
        return tuple(name for name in self.warehouses if needle in name.lower())


def build_index(facts: Iterable[Fact]) -> DimensionIndex:
    """Collect distinct categories, years and sales-ranked warehouses."""
    categories: set[str] = set()
    years: set[str] = set()
    warehouse_totals: dict[str, float] = {}
    for fact in facts:
        if fact.category:
            categories.add(fact.category)
        if fact.year:
            years.add(fact.year)
        if fact.warehouse:
            warehouse_totals[fact.warehouse] = (
                warehouse_totals.get(fact.warehouse, 0.0) + fact.total_amount
            )
    index = DimensionIndex(
        categories=sorted(categories),
        years=sorted(years),
        warehouse_ranking=rank_descending(warehouse_totals),
    )
    logger.debug(
        "index.built",
        categories=len(index.categories),
        warehouses=len(index.warehouse_ranking),
        years=len(index.years),
    )
    return index


__all__ = ["DimensionIndex", "build_index"]

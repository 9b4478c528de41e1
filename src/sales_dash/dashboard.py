"""Derived dashboard views over a loaded sales dataset."""

from __future__ import annotations

from collections import OrderedDict
from types import MappingProxyType

import structlog
from attrs import define, field, validators

from .aggregation import Buckets, DimensionIndex, aggregate, build_index
from .data.models import Dimension, SalesDataset
from .series import SeriesSet, StatCard, SummaryRanking, build_series, build_stat_cards, summarize
from .state import SelectionState

logger = structlog.get_logger(__name__)

VIEW_CACHE_SIZE = 32


@define(slots=True, frozen=True)
class DashboardView:
    """Everything the presentation layer needs for one selection."""

    dimension: Dimension
    year: str
    series: SeriesSet
    summary: SummaryRanking
    cards: tuple[StatCard, ...]

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly payload."""
        return {
            "dimension": self.dimension.value,
            "year": self.year,
            "months": list(self.series.labels),
            "series": self.series.as_dict(),
            "summary": [{"label": label, "total": total} for label, total in self.summary],
            "cards": [
                {
                    "label": card.label,
                    "total": card.total,
                    "retail": card.retail,
                    "warehouse": card.warehouse,
                }
                for card in self.cards
            ],
        }


@define(slots=True)
class DashboardModel:
    """Facts of one load with their per-dimension buckets and index.

    Buckets and the index are computed once, at construction. Views are memoized
    by the selection slice they depend on, so toggling chart style or the warehouse
    search never recomputes them. Only the ``view_cache_size`` most recently used
    views are kept.
    """

    dataset: SalesDataset
    view_cache_size: int = field(
        default=VIEW_CACHE_SIZE, kw_only=True, validator=validators.ge(1)
    )
    buckets: MappingProxyType[Dimension, Buckets] = field(init=False)
    index: DimensionIndex = field(init=False)
    _views: OrderedDict[tuple[Dimension, tuple[str, ...], str], DashboardView] = field(
        factory=OrderedDict, init=False, repr=False
    )

    def __attrs_post_init__(self) -> None:
        """Aggregate facts along every dimension and build the index."""
        facts = self.dataset.facts
        self.buckets = MappingProxyType(
            {dimension: aggregate(facts, dimension) for dimension in Dimension}
        )
        self.index = build_index(facts)
        logger.info(
            "dashboard.ready",
            facts=len(facts),
            category_buckets=len(self.buckets[Dimension.CATEGORY]),
            warehouse_buckets=len(self.buckets[Dimension.WAREHOUSE]),
        )

    def view(self, state: SelectionState) -> DashboardView:
        """Return the (memoized) views for ``state``."""
        key = state.view_key()
        cached = self._views.get(key)
        if cached is not None:
            self._views.move_to_end(key)
            return cached
        dimension, selected, year = key
        buckets = self.buckets[dimension]
        view = DashboardView(
            dimension=dimension,
            year=year,
            series=build_series(buckets, selected, year),
            summary=summarize(buckets, dimension, year),
            cards=build_stat_cards(buckets, selected, year),
        )
        self._views[key] = view
        while len(self._views) > self.view_cache_size:
            self._views.popitem(last=False)
        logger.debug("dashboard.view_built", dimension=dimension.value, year=year, selected=len(selected))
        return view

    def candidates(self, state: SelectionState) -> tuple[str, ...]:
        """Values offered for selection in the active dimension."""
        if state.dimension is Dimension.WAREHOUSE:
            return self.index.search_warehouses(state.warehouse_search)
        return self.index.categories


__all__ = ["DashboardModel", "DashboardView"]

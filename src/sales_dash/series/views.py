"""Chart-ready views derived from aggregate buckets.

Every function here is pure: the same buckets, selection and year filter always
produce equal output, which lets callers memoize on those arguments.
"""

from collections.abc import Iterable
from typing import TypeAlias

from attrs import define, field

from ..aggregation.buckets import Buckets
from ..aggregation.utils import month_vector, rank_descending, to_floats, unique_in_order
from ..data.files import ALL_YEARS, MONTH_LABELS, WAREHOUSE_SUMMARY_LIMIT
from ..data.models import AggregateBucket, Dimension

SummaryRanking: TypeAlias = tuple[tuple[str, float], ...]

SUMMARY_LIMITS: dict[Dimension, int | None] = {
    Dimension.CATEGORY: None,
    Dimension.WAREHOUSE: WAREHOUSE_SUMMARY_LIMIT,
}

ELLIPSIS = "…"


@define(slots=True, frozen=True)
class SeriesSet:
    """Twelve monthly totals per selected value, in selection order."""

    series: tuple[tuple[str, tuple[float, ...]], ...] = field(converter=tuple, factory=tuple)
    labels: tuple[str, ...] = MONTH_LABELS

    def __len__(self) -> int:
        return len(self.series)

    def keys(self) -> tuple[str, ...]:
        """Return the series labels in display order."""
        return tuple(label for label, _ in self.series)

    def get(self, label: str) -> tuple[float, ...] | None:
        """Return the monthly values for ``label``, or None when not selected."""
        for name, values in self.series:
            if name == label:
                return values
        return None

    def as_dict(self) -> dict[str, list[float]]:
        """Return a JSON-friendly mapping of label to monthly values."""
        return {label: list(values) for label, values in self.series}


@define(slots=True, frozen=True)
class StatCard:
    """Totals shown on the card of one selected value."""

    label: str
    total: float
    retail: float
    warehouse: float


def _year_matches(bucket: AggregateBucket, year: str) -> bool:
    return year == ALL_YEARS or bucket.year == year


def build_series(buckets: Buckets, selected: Iterable[str], year: str = ALL_YEARS) -> SeriesSet:
    """Reshape buckets into one 12-month series per selected value.

    Unselected values are absent from the result. A selected value with no
    matching buckets still yields an all-zero series.
    """
    order = unique_in_order(selected)
    monthly = {label: month_vector() for label in order}
    for bucket in buckets.values():
        values = monthly.get(bucket.value)
        if values is None or not _year_matches(bucket, year):
            continue
        values[bucket.month - 1] += bucket.total_amount
    return SeriesSet(series=[(label, to_floats(monthly[label])) for label in order])


def build_summary(
    buckets: Buckets,
    year: str = ALL_YEARS,
    *,
    limit: int | None = None,
) -> SummaryRanking:
    """Rank every value by total sales under the year filter.

    The ranking ignores the current selection. Ties keep bucket iteration order.
    """
    totals: dict[str, float] = {}
    for bucket in buckets.values():
        if not _year_matches(bucket, year):
            continue
        totals[bucket.value] = totals.get(bucket.value, 0.0) + bucket.total_amount
    ranking = rank_descending(totals)
    if limit is not None:
        ranking = ranking[:limit]
    return tuple(ranking)


def summarize(buckets: Buckets, dimension: Dimension | str, year: str = ALL_YEARS) -> SummaryRanking:
    """Build the distribution summary using the display limit of ``dimension``."""
    return build_summary(buckets, year, limit=SUMMARY_LIMITS[Dimension.parse(dimension)])


def build_stat_cards(
    buckets: Buckets,
    selected: Iterable[str],
    year: str = ALL_YEARS,
) -> tuple[StatCard, ...]:
    """Sum total, retail and warehouse sales per selected value."""
    order = unique_in_order(selected)
    sums = {label: [0.0, 0.0, 0.0] for label in order}
    for bucket in buckets.values():
        acc = sums.get(bucket.value)
        if acc is None or not _year_matches(bucket, year):
            continue
        acc[0] += bucket.total_amount
        acc[1] += bucket.retail_amount
        acc[2] += bucket.warehouse_amount
    return tuple(
        StatCard(label=label, total=sums[label][0], retail=sums[label][1], warehouse=sums[label][2])
        for label in order
    )


def truncate_label(label: str, width: int = 24) -> str:
    """Shorten a label for display. Never use the result as a lookup key."""
    if width < 2:
        raise ValueError("width must be at least 2.")
    if len(label) <= width:
        return label
    return label[: width - 1].rstrip() + ELLIPSIS


__all__ = [
    "SUMMARY_LIMITS",
    "SeriesSet",
    "StatCard",
    "SummaryRanking",
    "build_series",
    "build_stat_cards",
    "build_summary",
    "summarize",
    "truncate_label",
]

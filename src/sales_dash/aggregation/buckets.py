"""Fold sales facts into (year, month, dimension value) buckets."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

import structlog

from ..data.models import AggregateBucket, BucketKey, Dimension, Fact

logger = structlog.get_logger(__name__)

Buckets = Mapping[BucketKey, AggregateBucket]

# Accumulator slots: retail, warehouse, transfers, total.
_RETAIL, _WAREHOUSE, _TRANSFER, _TOTAL = range(4)


def aggregate(facts: Iterable[Fact], dimension: Dimension | str) -> Buckets:
    """Sum the measures of ``facts`` per (year, month, label) for one dimension.

    Facts without a label for the dimension are skipped. The returned mapping is a
    read-only snapshot whose iteration order is the first-seen order of each key.
    """
    dimension = Dimension.parse(dimension)
    sums: dict[BucketKey, list[float]] = {}
    seen = 0
    skipped = 0
    for fact in facts:
        seen += 1
        label = fact.label(dimension)
        if not label:
            skipped += 1
            continue
        key = BucketKey(fact.year, fact.month, label)
        acc = sums.get(key)
        if acc is None:
            acc = sums[key] = [0.0, 0.0, 0.0, 0.0]
        acc[_RETAIL] += fact.retail_amount
        acc[_WAREHOUSE] += fact.warehouse_amount
        acc[_TRANSFER] += fact.transfer_amount
        acc[_TOTAL] += fact.retail_amount + fact.warehouse_amount

    buckets = {
        key: AggregateBucket(
            year=key.year,
            month=key.month,
            value=key.value,
            retail_amount=acc[_RETAIL],
            warehouse_amount=acc[_WAREHOUSE],
            transfer_amount=acc[_TRANSFER],
            total_amount=acc[_TOTAL],
        )
        for key, acc in sums.items()
    }
    logger.debug(
        "aggregate.complete",
        dimension=dimension.value,
        facts=seen,
        skipped=skipped,
        buckets=len(buckets),
    )
    return MappingProxyType(buckets)


__all__ = ["Buckets", "aggregate"]

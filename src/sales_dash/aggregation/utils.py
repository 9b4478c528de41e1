"""Common helpers for aggregation and reshaping routines."""

from collections.abc import Iterable, Mapping
from typing import TypeAlias, TypeVar, cast

import numpy as np
import numpy.typing as npt

from ..data.files import MONTH_LABELS

FloatArray: TypeAlias = npt.NDArray[np.float64]
K = TypeVar("K")


def month_vector() -> FloatArray:
    """Return a zero-filled array with one slot per calendar month."""
    return cast(FloatArray, np.zeros(len(MONTH_LABELS), dtype=float))


def to_floats(values: FloatArray) -> tuple[float, ...]:
    """Convert a NumPy array into a tuple of plain Python floats."""
    return tuple(float(value) for value in values)


def rank_descending(totals: Mapping[K, float]) -> list[tuple[K, float]]:
    """Order items by total, largest first; ties keep mapping insertion order."""
    # sorted() is stable, so equal totals keep their first-seen position.
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def unique_in_order(values: Iterable[K]) -> list[K]:
    """Drop repeated values while preserving first occurrence order."""
    return list(dict.fromkeys(values))

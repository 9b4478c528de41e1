"""Aggregation of sales facts into buckets and dimension indexes."""

from .buckets import Buckets, aggregate
from .index import DimensionIndex, build_index

__all__ = ["Buckets", "DimensionIndex", "aggregate", "build_index"]

"""Top-level data module for sales ingestion and normalization."""

from .client import SalesHttpClient
from .ingest import DatasetLoadError, SalesDatasetBuilder
from .models import (
    AggregateBucket,
    BucketKey,
    Dimension,
    Fact,
    FactSchema,
    SalesDataset,
    SalesDatasetSchema,
    normalize,
)

__all__ = [
    "AggregateBucket",
    "BucketKey",
    "Dimension",
    "Fact",
    "FactSchema",
    "SalesDataset",
    "SalesDatasetSchema",
    "normalize",
    "SalesHttpClient",
    "DatasetLoadError",
    "SalesDatasetBuilder",
]

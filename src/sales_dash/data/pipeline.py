"""High level orchestration helpers for loading a sales session."""

import asyncio
from collections.abc import Callable

import structlog

from ..dashboard import DashboardModel
from ..logging import bind_session
from .ingest import DatasetLoadError, SalesDatasetBuilder

logger = structlog.get_logger(__name__)

ReadyCallback = Callable[[DashboardModel], None]
FailureCallback = Callable[[str], None]


def _build_model(source: str) -> DashboardModel:
    """Read the source and aggregate it; runs in a worker thread."""
    builder = SalesDatasetBuilder()
    try:
        dataset = builder.load_dataset(source)
    finally:
        builder.close()
    return DashboardModel(dataset)


async def load_sales_data(
    source: str,
    *,
    on_ready: ReadyCallback,
    on_failure: FailureCallback,
) -> DashboardModel | None:
    """Load ``source`` once and report through exactly one of the two callbacks.

    ``on_failure`` receives a human-readable reason and no partial dataset is
    exposed. Returns the model on success, None on failure.
    """
    bind_session(source)
    pipe_log = logger.bind(operation="load_sales_data")
    pipe_log.info("pipeline.load_start")
    try:
        model = await asyncio.to_thread(_build_model, source)
    except DatasetLoadError as exc:
        pipe_log.error("pipeline.load_failed", reason=exc.reason)
        on_failure(str(exc))
        return None
    pipe_log.info(
        "pipeline.load_complete",
        records=model.dataset.record_count,
        facts=len(model.dataset.facts),
    )
    on_ready(model)
    return model


__all__ = ["load_sales_data", "ReadyCallback", "FailureCallback"]

"""Orchestration utilities for assembling sales datasets from CSV exports."""

import csv
import json
from pathlib import Path

import marshmallow as ma
import requests
import structlog
from attrs import define, field

from . import parser
from .client import SalesHttpClient
from .files import SourceRequest
from .models import SalesDataset, SalesDatasetSchema

logger = structlog.get_logger(__name__)


class DatasetLoadError(RuntimeError):
    """Raised when a dataset source cannot be read or parsed at all."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Could not load {source}: {reason}")
        self.source = source
        self.reason = reason


@define(slots=True)
class SalesDatasetBuilder:
    """Coordinate retrieval, parsing and normalization of a sales dataset."""

    client: SalesHttpClient = field(factory=SalesHttpClient)

    def load_dataset(self, source: str) -> SalesDataset:
        """Read ``source`` (URL, CSV path or JSON snapshot) into a dataset.

        Either the whole dataset is returned or :class:`DatasetLoadError` is raised;
        malformed rows are dropped silently and never make the load fail.
        """
        request = SourceRequest.resolve(source)
        log = logger.bind(source=source, remote=request.remote)
        log.info("builder.load_start")
        text = self._read(request)
        if not request.remote and Path(request.location).suffix.lower() == ".json":
            dataset = self._load_snapshot(source, text)
        else:
            dataset = self._parse_csv(source, text)
        log.info(
            "builder.load_complete",
            records=dataset.record_count,
            facts=len(dataset.facts),
            dropped=dataset.dropped_count,
        )
        return dataset

    def _read(self, request: SourceRequest) -> str:
        """Fetch the raw text for a source."""
        if request.remote:
            try:
                return self.client.get_text(request.location)
            except (requests.RequestException, UnicodeDecodeError) as exc:
                raise DatasetLoadError(request.location, str(exc)) from exc
        path = Path(request.location)
        try:
            return path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise DatasetLoadError(request.location, str(exc)) from exc

    def _parse_csv(self, source: str, text: str) -> SalesDataset:
        """Parse CSV text into facts, counting every data row read."""
        try:
            facts, record_count = parser.parse_facts(parser.read_records(text))
        except (csv.Error, ValueError) as exc:
            raise DatasetLoadError(source, str(exc)) from exc
        logger.debug("builder.csv_parsed", records=record_count, facts=len(facts))
        return SalesDataset(facts=facts, record_count=record_count)

    def _load_snapshot(self, source: str, text: str) -> SalesDataset:
        """Load a JSON snapshot previously written by :meth:`SalesDataset.to_dict`."""
        try:
            payload = json.loads(text)
            return SalesDatasetSchema().load(payload)
        except json.JSONDecodeError as exc:
            raise DatasetLoadError(source, f"invalid JSON snapshot ({exc.msg})") from exc
        except ma.ValidationError as exc:
            raise DatasetLoadError(source, f"invalid snapshot: {exc.messages}") from exc

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()
        logger.debug("builder.client_closed")


__all__ = ["DatasetLoadError", "SalesDatasetBuilder"]

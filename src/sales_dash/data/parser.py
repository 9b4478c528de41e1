"""Parsers for the warehouse and retail sales CSV export."""

import csv
import io
from collections.abc import Iterable, Iterator

from .files import REQUIRED_COLUMNS
from .models import Fact, RawRecord, normalize


def _normalize_key(key: str) -> str:
    """Normalize header names for case/whitespace inconsistencies."""
    return key.lstrip("\ufeff").strip().lower().replace(" ", "_")


def read_records(text: str) -> Iterator[RawRecord]:
    """Read a comma-separated payload into raw records keyed by normalized headers.

    Values are passed through untouched so dimension labels stay verbatim; short
    rows yield ``None`` for the missing trailing columns.
    """
    buffer = io.StringIO(text)
    reader = csv.DictReader(buffer)
    headers = [_normalize_key(name) for name in reader.fieldnames or []]
    missing = [column for column in REQUIRED_COLUMNS if column not in headers]
    if missing:
        raise ValueError(f"Dataset is missing required columns: {', '.join(missing)}")
    for row in reader:
        # Skip bogus blank lines that may appear at EOF.
        if all(value is None or str(value).strip() == "" for value in row.values()):
            continue
        yield {
            _normalize_key(key): value
            for key, value in row.items()
            if key is not None
        }


def parse_facts(records: Iterable[RawRecord]) -> tuple[list[Fact], int]:
    """Normalize raw records, returning the surviving facts and the number read."""
    facts: list[Fact] = []
    seen = 0
    for record in records:
        seen += 1
        fact = normalize(record)
        if fact is not None:
            facts.append(fact)
    return facts, seen

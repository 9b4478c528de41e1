"""Domain models for warehouse and retail sales records."""

import enum
import math
from collections.abc import Mapping
from typing import Any, NamedTuple

import marshmallow as ma
from marshmallow import validate
from attrs import define, field

from .files import (
    CATEGORY_COLUMN,
    MONTH_COLUMN,
    RETAIL_SALES_COLUMN,
    RETAIL_TRANSFERS_COLUMN,
    WAREHOUSE_COLUMN,
    WAREHOUSE_SALES_COLUMN,
    YEAR_COLUMN,
)

RawRecord = Mapping[str, str | None]


class Dimension(str, enum.Enum):
    """Axis along which sales are aggregated."""

    CATEGORY = "category"
    WAREHOUSE = "warehouse"

    @classmethod
    def parse(cls, value: "str | Dimension") -> "Dimension":
        """Resolve a dimension from its name, raising ValueError when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unsupported dimension {value!r}. Choose one of: {valid}.") from exc


def _label(value: str | None) -> str:
    """Return a dimension label verbatim, mapping blank values to an empty string."""
    if value is None or not value.strip():
        return ""
    return value


def _amount(value: object) -> float:
    """Coerce a raw measure into a finite float, defaulting to zero."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _month(value: str | None) -> int | None:
    """Parse a month number, returning None when it is not an integer in 1..12."""
    if value is None:
        return None
    text = value.strip()
    try:
        month = int(text)
    except ValueError:
        # Spreadsheet exports sometimes write months as "3.0".
        try:
            number = float(text)
        except ValueError:
            return None
        if not number.is_integer():
            return None
        month = int(number)
    if not 1 <= month <= 12:
        return None
    return month


def _valid_month(instance: object, attribute: object, value: int) -> None:
    if not 1 <= value <= 12:
        raise ValueError(f"month must lie in 1..12, got {value!r}")


@define(slots=True, frozen=True)
class Fact:
    """Single validated sales observation for a year, month, category and warehouse."""

    year: str
    month: int = field(validator=_valid_month)
    category: str = field(converter=_label, default="")
    warehouse: str = field(converter=_label, default="")
    retail_amount: float = field(converter=_amount, default=0.0)
    warehouse_amount: float = field(converter=_amount, default=0.0)
    transfer_amount: float = field(converter=_amount, default=0.0)

    @property
    def total_amount(self) -> float:
        """Retail plus warehouse sales; transfers move stock and are not sales."""
        return self.retail_amount + self.warehouse_amount

    def label(self, dimension: Dimension) -> str:
        """Return the label for ``dimension`` (empty when the fact lacks it)."""
        if dimension is Dimension.CATEGORY:
            return self.category
        return self.warehouse


def normalize(raw: RawRecord) -> Fact | None:
    """Validate one raw record into a :class:`Fact`, or None when it must be dropped."""
    month = _month(raw.get(MONTH_COLUMN))
    if month is None:
        return None
    category = _label(raw.get(CATEGORY_COLUMN))
    warehouse = _label(raw.get(WAREHOUSE_COLUMN))
    if not category and not warehouse:
        return None
    return Fact(
        year=raw.get(YEAR_COLUMN) or "",
        month=month,
        category=category,
        warehouse=warehouse,
        retail_amount=raw.get(RETAIL_SALES_COLUMN),
        warehouse_amount=raw.get(WAREHOUSE_SALES_COLUMN),
        transfer_amount=raw.get(RETAIL_TRANSFERS_COLUMN),
    )


class FactSchema(ma.Schema):
    """Marshmallow schema for :class:`Fact` snapshots."""

    year = ma.fields.Str(required=True)
    month = ma.fields.Int(required=True, validate=validate.Range(min=1, max=12))
    category = ma.fields.Str(load_default="")
    warehouse = ma.fields.Str(load_default="")
    retail_amount = ma.fields.Float(load_default=0.0)
    warehouse_amount = ma.fields.Float(load_default=0.0)
    transfer_amount = ma.fields.Float(load_default=0.0)

    @ma.post_load
    def make_fact(self, data: dict[str, Any], **kwargs: object) -> Fact:
        """Instantiate :class:`Fact` from validated payloads."""
        return Fact(**data)


class BucketKey(NamedTuple):
    """Composite grouping key; a tuple so labels may contain any character."""

    year: str
    month: int
    value: str


@define(slots=True, frozen=True)
class AggregateBucket:
    """Accumulated measures for one (year, month, dimension value) key."""

    year: str
    month: int
    value: str
    retail_amount: float = 0.0
    warehouse_amount: float = 0.0
    transfer_amount: float = 0.0
    total_amount: float = 0.0

    @property
    def key(self) -> BucketKey:
        """Return the grouping key of this bucket."""
        return BucketKey(self.year, self.month, self.value)


@define(slots=True, frozen=True)
class SalesDataset:
    """Facts derived from one load, plus row accounting for the footer line."""

    facts: tuple[Fact, ...] = field(converter=tuple, factory=tuple)
    record_count: int = 0

    @property
    def dropped_count(self) -> int:
        """Number of raw records that did not survive normalization."""
        return max(self.record_count - len(self.facts), 0)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly snapshot of the dataset."""
        return {
            "record_count": self.record_count,
            "facts": FactSchema(many=True).dump(self.facts),
        }


class SalesDatasetSchema(ma.Schema):
    """Marshmallow schema for reading :class:`SalesDataset` snapshots."""

    record_count = ma.fields.Int(required=True)
    facts = ma.fields.List(ma.fields.Nested(FactSchema), required=True)

    @ma.post_load
    def make_dataset(self, data: dict[str, Any], **kwargs: object) -> SalesDataset:
        """Instantiate :class:`SalesDataset` from a validated snapshot."""
        return SalesDataset(facts=data["facts"], record_count=data["record_count"])

"""Unit tests for the data models and the record normalizer."""

import pytest

from sales_dash.data.models import (
    Dimension,
    Fact,
    FactSchema,
    SalesDataset,
    SalesDatasetSchema,
    _amount,
    _month,
    normalize,
)


def _raw(**overrides):
    row = {
        "year": "2018",
        "month": "3",
        "item_type": "WINE",
        "supplier": "ALPHA WINES",
        "retail_sales": "10.50",
        "warehouse_sales": "5.00",
        "retail_transfers": "1.00",
    }
    row.update(overrides)
    return row


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", 1),
        (" 12 ", 12),
        ("3.0", 3),
        ("0", None),
        ("13", None),
        ("-1", None),
        ("3.5", None),
        ("abc", None),
        ("3abc", None),
        ("", None),
        (None, None),
    ],
)
def test_month(value, expected):
    """Test the _month helper function."""
    assert _month(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("10.50", 10.5),
        (" 2 ", 2.0),
        ("-3.25", -3.25),
        ("", 0.0),
        ("n/a", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        (None, 0.0),
    ],
)
def test_amount(value, expected):
    """Test the _amount helper function."""
    assert _amount(value) == expected


def test_normalize_valid_record():
    """Test that a well-formed record becomes a typed fact."""
    fact = normalize(_raw())
    assert fact == Fact(
        year="2018",
        month=3,
        category="WINE",
        warehouse="ALPHA WINES",
        retail_amount=10.5,
        warehouse_amount=5.0,
        transfer_amount=1.0,
    )


def test_total_excludes_transfers():
    """Test that the total is retail plus warehouse sales only."""
    fact = normalize(_raw(retail_sales="1.10", warehouse_sales="2.20", retail_transfers="500"))
    assert fact.total_amount == fact.retail_amount + fact.warehouse_amount


@pytest.mark.parametrize("month", ["13", "0", "abc", "", None])
def test_normalize_drops_bad_month(month):
    """Test that records with an unusable month are dropped."""
    assert normalize(_raw(month=month)) is None


def test_normalize_missing_measure_defaults_to_zero():
    """Test that an absent warehouse sales field contributes retail only."""
    raw = _raw()
    del raw["warehouse_sales"]
    fact = normalize(raw)
    assert fact.warehouse_amount == 0.0
    assert fact.total_amount == 10.5


def test_normalize_keeps_record_with_one_label():
    """Test that dimension validity is decided per aggregation pass, not here."""
    no_category = normalize(_raw(item_type=""))
    no_warehouse = normalize(_raw(supplier="   "))
    assert no_category is not None and no_category.category == ""
    assert no_warehouse is not None and no_warehouse.warehouse == ""
    assert normalize(_raw(item_type="", supplier=None)) is None


def test_normalize_keeps_labels_verbatim():
    """Test that labels are neither trimmed nor case-folded."""
    fact = normalize(_raw(supplier="Alpha Wines "))
    assert fact.warehouse == "Alpha Wines "
    assert fact.label(Dimension.WAREHOUSE) == "Alpha Wines "
    assert fact.label(Dimension.CATEGORY) == "WINE"


def test_fact_rejects_out_of_range_month():
    """Test that a fact cannot be constructed with an invalid month."""
    with pytest.raises(ValueError, match="month must lie in 1..12"):
        Fact(year="2018", month=13, category="WINE")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("category", Dimension.CATEGORY),
        (" Warehouse ", Dimension.WAREHOUSE),
        (Dimension.WAREHOUSE, Dimension.WAREHOUSE),
    ],
)
def test_dimension_parse(value, expected):
    """Test the Dimension.parse helper."""
    assert Dimension.parse(value) is expected


def test_dimension_parse_rejects_unknown():
    """Test that an unknown dimension name raises a helpful error."""
    with pytest.raises(ValueError, match="Unsupported dimension"):
        Dimension.parse("region")


def test_fact_schema_rejects_bad_month():
    """Test that snapshots with an invalid month fail validation."""
    errors = FactSchema().validate({"year": "2018", "month": 14})
    assert "month" in errors


def test_dataset_snapshot_restores_facts():
    """Test that a dataset snapshot loads back into equal facts."""
    dataset = SalesDataset(facts=[normalize(_raw()), normalize(_raw(month="4"))], record_count=3)
    restored = SalesDatasetSchema().load(dataset.to_dict())
    assert restored == dataset
    assert restored.dropped_count == 1

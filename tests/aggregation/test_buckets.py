"""Unit tests for the bucket aggregator."""

import random

import pytest

from sales_dash.aggregation.buckets import aggregate
from sales_dash.data.models import BucketKey, Dimension, Fact, normalize


def test_aggregate_sums_matching_rows():
    """Test the two-row WINE scenario from March 2018."""
    rows = [
        {"year": "2018", "month": "3", "item_type": "WINE", "supplier": "A",
         "retail_sales": "10.50", "warehouse_sales": "5.00", "retail_transfers": "1.00"},
        {"year": "2018", "month": "3", "item_type": "WINE", "supplier": "B",
         "retail_sales": "2.00", "warehouse_sales": "0", "retail_transfers": "0"},
    ]
    buckets = aggregate([normalize(row) for row in rows], Dimension.CATEGORY)

    bucket = buckets[BucketKey("2018", 3, "WINE")]
    assert bucket.retail_amount == pytest.approx(12.50)
    assert bucket.warehouse_amount == pytest.approx(5.00)
    assert bucket.transfer_amount == pytest.approx(1.00)
    assert bucket.total_amount == pytest.approx(17.50)
    assert len(buckets) == 1


def test_aggregate_by_warehouse(sample_facts):
    """Test that the warehouse pass groups by supplier and skips unlabeled facts."""
    buckets = aggregate(sample_facts, "warehouse")
    assert {key.value for key in buckets} == {
        "ALPHA WINES",
        "BETA BREWING",
        "GAMMA, INC.",
        "DELTA DIST",
    }
    assert buckets[BucketKey("2019", 2, "DELTA DIST")].total_amount == pytest.approx(4.0)


def test_aggregate_skips_facts_without_label(sample_facts):
    """Test that a fact lacking the dimension label never enters a bucket."""
    category_total = sum(b.total_amount for b in aggregate(sample_facts, "category").values())
    warehouse_total = sum(b.total_amount for b in aggregate(sample_facts, "warehouse").values())
    # The STR_SUPPLIES row has no supplier.
    assert category_total - warehouse_total == pytest.approx(1.0)


def test_aggregate_keys_do_not_collide():
    """Test that labels containing separators stay distinct from other keys."""
    facts = [
        Fact(year="2018-1", month=2, warehouse="X", retail_amount=1.0),
        Fact(year="2018", month=12, warehouse="-X", retail_amount=2.0),
        Fact(year="2018", month=1, warehouse="2-X", retail_amount=4.0),
    ]
    buckets = aggregate(facts, Dimension.WAREHOUSE)
    assert len(buckets) == 3
    assert buckets[BucketKey("2018", 12, "-X")].total_amount == 2.0


def test_aggregate_labels_are_case_and_whitespace_sensitive():
    """Test that near-identical warehouse names are not merged."""
    facts = [
        Fact(year="2018", month=1, warehouse="Acme", retail_amount=1.0),
        Fact(year="2018", month=1, warehouse="ACME", retail_amount=1.0),
        Fact(year="2018", month=1, warehouse="Acme ", retail_amount=1.0),
    ]
    assert len(aggregate(facts, Dimension.WAREHOUSE)) == 3


def test_aggregate_is_order_independent(sample_facts):
    """Test that permuting the input gives the same totals within epsilon."""
    baseline = aggregate(sample_facts, Dimension.CATEGORY)
    shuffled = list(sample_facts)
    random.Random(7).shuffle(shuffled)
    permuted = aggregate(shuffled, Dimension.CATEGORY)

    assert baseline.keys() == permuted.keys()
    for key, bucket in baseline.items():
        assert permuted[key].total_amount == pytest.approx(bucket.total_amount)
        assert permuted[key].retail_amount == pytest.approx(bucket.retail_amount)


def test_aggregate_result_is_read_only(sample_facts):
    """Test that the snapshot cannot be mutated after the pass."""
    buckets = aggregate(sample_facts, Dimension.CATEGORY)
    with pytest.raises(TypeError):
        buckets[BucketKey("2020", 1, "WINE")] = None


def test_aggregate_rejects_unknown_dimension(sample_facts):
    """Test that the dimension must be category or warehouse."""
    with pytest.raises(ValueError, match="Unsupported dimension"):
        aggregate(sample_facts, "region")

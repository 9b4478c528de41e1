"""Global test configuration and fixtures."""

import types

import pytest
import structlog

from sales_dash.dashboard import DashboardModel
from sales_dash.data.models import Fact, SalesDataset
from sales_dash.data.parser import parse_facts, read_records

SAMPLE_CSV = (
    "YEAR,MONTH,SUPPLIER,ITEM CODE,ITEM DESCRIPTION,ITEM TYPE,"
    "RETAIL SALES,RETAIL TRANSFERS,WAREHOUSE SALES\n"
    "2018,3,ALPHA WINES,100,RED,WINE,10.50,1.00,5.00\n"
    "2018,3,ALPHA WINES,101,WHITE,WINE,2.00,0,0\n"
    "2018,4,BETA BREWING,200,LAGER,BEER,3.00,0.5,20.00\n"
    '2019,1,"GAMMA, INC.",300,VODKA,LIQUOR,7.25,0,1.75\n'
    "2019,13,ALPHA WINES,102,ROSE,WINE,99,0,99\n"
    "2019,abc,BETA BREWING,201,ALE,BEER,99,0,99\n"
    "2019,2,,400,BAG,STR_SUPPLIES,1.00,0,\n"
    "2019,2,DELTA DIST,500,KEG,KEGS,,0,4.00\n"
)


@pytest.fixture
def sample_csv() -> str:
    """Eight raw rows, two of which carry an invalid month."""
    return SAMPLE_CSV


@pytest.fixture
def sample_facts() -> list[Fact]:
    facts, _ = parse_facts(read_records(SAMPLE_CSV))
    return facts


@pytest.fixture
def sample_dataset(sample_facts) -> SalesDataset:
    return SalesDataset(facts=sample_facts, record_count=8)


@pytest.fixture
def sample_model(sample_dataset) -> DashboardModel:
    return DashboardModel(sample_dataset)


@pytest.fixture(autouse=True)
def fast_plots(monkeypatch, tmp_path):
    # Avoid matplotlib in CLI tests and return a simple object with .path
    def _fake_plot(data, colors, *, output_dir, filename, **kwargs):
        p = output_dir / filename
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"")
        return types.SimpleNamespace(path=p, series_count=len(data))

    import cli.main as m

    monkeypatch.setattr(m, "generate_series_plot", _fake_plot)
    monkeypatch.setattr(m, "generate_summary_plot", _fake_plot)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()

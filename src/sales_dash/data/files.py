"""Constants describing the warehouse and retail sales flat file."""

from attrs import define

DEFAULT_SOURCE = "Warehouse_and_Retail_Sales.csv"

# Header names after normalization (see parser._normalize_key).
YEAR_COLUMN = "year"
MONTH_COLUMN = "month"
CATEGORY_COLUMN = "item_type"
WAREHOUSE_COLUMN = "supplier"
RETAIL_SALES_COLUMN = "retail_sales"
WAREHOUSE_SALES_COLUMN = "warehouse_sales"
RETAIL_TRANSFERS_COLUMN = "retail_transfers"

REQUIRED_COLUMNS = (YEAR_COLUMN, MONTH_COLUMN, CATEGORY_COLUMN, WAREHOUSE_COLUMN)
MEASURE_COLUMNS = (RETAIL_SALES_COLUMN, WAREHOUSE_SALES_COLUMN, RETAIL_TRANSFERS_COLUMN)

MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

ALL_YEARS = "all"

DEFAULT_CATEGORY_SELECTION = 3
DEFAULT_WAREHOUSE_SELECTION = 5
WAREHOUSE_SUMMARY_LIMIT = 10


@define(frozen=True)
class SourceRequest:
    """Bundle describing where a dataset is read from."""

    location: str
    remote: bool

    @classmethod
    def resolve(cls, source: str) -> "SourceRequest":
        """Classify a source string as a remote URL or a local path."""
        remote = source.startswith(("http://", "https://"))
        return cls(location=source, remote=remote)

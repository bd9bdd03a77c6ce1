"""
Superstore Analytics — Configuration: paths, constants, file patterns.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths (override with the SUPERSTORE_DATA_DIR env var)
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("SUPERSTORE_DATA_DIR", str(Path.home() / "Superstore Analytics")))
BASE_FOLDER = _data_dir
INBOX_FOLDER = _data_dir / "inbox"
REPORTS_FOLDER = _data_dir / "reports"

# Reject returns that point at unknown orders instead of reporting them
STRICT_REFERENCES = os.environ.get("SUPERSTORE_STRICT_REFERENCES", "").lower() in ("1", "true", "yes")

# ---------------------------------------------------------------------------
# File-discovery patterns (keywords matched case-insensitively in filename)
# ---------------------------------------------------------------------------
ORDERS_KEYWORDS = ["orders", "superstore"]
PEOPLE_KEYWORDS = ["people"]
RETURNS_KEYWORDS = ["returns"]

# ---------------------------------------------------------------------------
# Column layouts: raw header → internal name, in file order.
# Files are read positionally; the raw header text is only documentation.
# ---------------------------------------------------------------------------
ORDERS_COLUMN_MAP = {
    "Row ID": "row_id",
    "Order ID": "order_id",
    "Order Date": "order_date",
    "Ship Date": "ship_date",
    "Ship Mode": "ship_mode",
    "Customer ID": "customer_id",
    "Customer Name": "customer_name",
    "Segment": "segment",
    "City": "city",
    "State": "state",
    "Country": "country",
    "Postal Code": "postal_code",
    "Market": "market",
    "Region": "region",
    "Product ID": "product_id",
    "Category": "category",
    "Sub-Category": "sub_category",
    "Product Name": "product_name",
    "Sales": "sales",
    "Quantity": "quantity",
    "Discount": "discount",
    "Profit": "profit",
    "Shipping Cost": "shipping_cost",
    "Order Priority": "order_priority",
}

PEOPLE_COLUMN_MAP = {
    "Person": "person",
    "Region": "region",
}

RETURNS_COLUMN_MAP = {
    "Returned": "returned",
    "Order ID": "order_id",
    "Region": "region",
}

# Columns typed at load time (everything else stays text)
INTEGER_COLS = ["row_id", "quantity"]
FLOAT_COLS = ["discount", "shipping_cost"]
NULLABLE_INTEGER_COLS = ["postal_code"]

# Columns normalised by the cleaner after load
DATE_COLS = ["order_date", "ship_date"]
CURRENCY_COLS = ["sales", "profit"]
DATE_FORMAT = "%Y-%m-%d"
CURRENCY_STRIP_PATTERN = r"[\$,]"

ORDER_KEY = ["order_id", "product_id"]

# ---------------------------------------------------------------------------
# Value tiers: first threshold met wins, bounds inclusive
# ---------------------------------------------------------------------------
VALUE_TIERS = [
    (1000, "High"),
    (500, "Medium"),
]
DEFAULT_VALUE_TIER = "Low"
VALUE_TIER_ORDER = ["High", "Medium", "Low"]

# ---------------------------------------------------------------------------
# Query defaults
# ---------------------------------------------------------------------------
HIGH_SALES_THRESHOLD = 5000.0
HIGH_DISCOUNT_THRESHOLD = 0.5
TOP_N = 10

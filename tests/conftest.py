import csv
from pathlib import Path

import pytest

from superstore.config import ORDERS_COLUMN_MAP, PEOPLE_COLUMN_MAP, RETURNS_COLUMN_MAP
from superstore.data.store import DataStore


def order_line(order_id, product_id, **overrides) -> dict:
    """One raw order line keyed by internal column name, with sensible defaults."""
    row = {
        "row_id": "1",
        "order_id": order_id,
        "order_date": "2014-01-10",
        "ship_date": "2014-01-14",
        "ship_mode": "Standard Class",
        "customer_id": "CU-001",
        "customer_name": "Claire Gute",
        "segment": "Consumer",
        "city": "Henderson",
        "state": "Kentucky",
        "country": "United States",
        "postal_code": "42420",
        "market": "US",
        "region": "East",
        "product_id": product_id,
        "category": "Furniture",
        "sub_category": "Chairs",
        "product_name": f"Product {product_id}",
        "sales": "$100.00",
        "quantity": "1",
        "discount": "0",
        "profit": "$10.00",
        "shipping_cost": "5.5",
        "order_priority": "Medium",
    }
    row.update({k: str(v) for k, v in overrides.items()})
    return row


def write_csv(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL)
        writer.writerow(header)
        writer.writerows(rows)
    return path


def write_orders(path: Path, lines: list[dict]) -> Path:
    columns = list(ORDERS_COLUMN_MAP.values())
    return write_csv(path, list(ORDERS_COLUMN_MAP), [[line[c] for c in columns] for line in lines])


def write_people(path: Path, people: list[tuple[str, str]]) -> Path:
    return write_csv(path, list(PEOPLE_COLUMN_MAP), [list(p) for p in people])


def write_returns(path: Path, returns: list[tuple[str, str]]) -> Path:
    """returns: (order_id, region) pairs."""
    return write_csv(path, list(RETURNS_COLUMN_MAP), [["Yes", oid, region] for oid, region in returns])


@pytest.fixture
def make_store(tmp_path):
    """Write the three CSVs and load them through the full pipeline."""
    def _make(lines, people=(), returns=(), strict=False) -> DataStore:
        orders_csv = write_orders(tmp_path / "orders.csv", lines)
        people_csv = write_people(tmp_path / "people.csv", list(people))
        returns_csv = write_returns(tmp_path / "returns.csv", list(returns))
        return DataStore(strict_references=strict).load_files(orders_csv, people_csv, returns_csv)
    return _make


@pytest.fixture
def sample_lines():
    return [
        order_line("CA-1", "FUR-1", product_name="Alpha Chair", sales="$1,000.00", profit="$200.00",
                   discount="0", region="East", category="Furniture", sub_category="Chairs",
                   order_date="2014-01-10", ship_date="2014-01-12", ship_mode="Second Class"),
        order_line("CA-1", "OFF-1", product_name="Beta Pen", sales="$999.99", profit="$100.00",
                   discount="0.1", region="East", category="Office Supplies", sub_category="Art",
                   order_date="2014-01-10", ship_date="2014-01-12", ship_mode="Second Class"),
        order_line("CA-1", "TEC-1", product_name="Gamma Phone", sales="$100.00", profit="$100.00",
                   region="East", category="Technology", sub_category="Phones",
                   order_date="2014-01-10", ship_date="2014-01-12", ship_mode="Second Class"),
        order_line("CA-2", "FUR-1", product_name="Alpha Chair", sales="$6,000.00", profit="$90.00",
                   discount="0.6", region="West", customer_id="CU-002", segment="Corporate",
                   order_date="2014-02-05", ship_date="2014-02-10"),
        order_line("CA-2", "OFF-1", product_name="Beta Pen", sales="$10.00", profit="-$5.00",
                   region="West", customer_id="CU-002", segment="Corporate", category="Office Supplies",
                   sub_category="Art", order_date="2014-02-05", ship_date="2014-02-10"),
        order_line("CA-3", "TEC-1", product_name="Gamma Phone", sales="$400.00", profit="$90.00",
                   discount="0.2", region="West", customer_id="CU-003", segment="Home Office",
                   category="Technology", sub_category="Phones",
                   order_date="2014-03-01", ship_date="2014-02-28", ship_mode="First Class"),
        order_line("CA-4", "FUR-2", product_name="Delta Desk", sales="$500.00", profit="$40.00",
                   region="East", customer_id="CU-003", sub_category="Tables", postal_code="",
                   order_date="2014-03-15", ship_date="2014-03-20"),
    ]


@pytest.fixture
def sample_people():
    return [("Anna Andreadi", "West"), ("Chuck Magee", "East")]


@pytest.fixture
def sample_returns():
    return [("CA-2", "West"), ("CA-4", "East")]


@pytest.fixture
def store(make_store, sample_lines, sample_people, sample_returns) -> DataStore:
    return make_store(sample_lines, sample_people, sample_returns)

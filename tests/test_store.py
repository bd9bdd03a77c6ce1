import datetime as dt
import logging

import pytest

from superstore.data.schemas import PeriodFilter, PeriodType
from superstore.errors import ParseError, ReferentialError

from conftest import order_line


def test_store_loads_and_cleans(store):
    assert store.is_loaded
    assert store.row_count() == 7
    assert store.order_count() == 4
    assert store.orders["sales"].dtype == "float64"
    assert str(store.orders["postal_code"].dtype) == "Int32"
    assert store.regions() == ["East", "West"]
    assert store.categories() == ["Furniture", "Office Supplies", "Technology"]
    assert store.date_range() == "2014-01-10 to 2014-03-15"


def test_ship_before_order_is_kept_and_logged(make_store, sample_lines, caplog):
    with caplog.at_level(logging.WARNING):
        store = make_store(sample_lines)
    assert "CA-3" in store.orders["order_id"].tolist()
    assert "ship before their order date" in caplog.text


def test_orphaned_returns_reported(make_store, sample_lines, caplog):
    with caplog.at_level(logging.WARNING):
        store = make_store(sample_lines, returns=[("CA-2", "West"), ("ZZ-9", "South")])
    report = store.referential_report()
    assert report == {"returns": 2, "orphaned_returns": 1, "orphaned_order_ids": ["ZZ-9"]}
    assert "reference unknown orders" in caplog.text


def test_orphaned_returns_rejected_when_strict(make_store, sample_lines):
    with pytest.raises(ReferentialError) as exc:
        make_store(sample_lines, returns=[("ZZ-9", "South"), ("AA-1", "West")], strict=True)
    assert exc.value.order_ids == ["AA-1", "ZZ-9"]


def test_bad_date_aborts_load(make_store):
    lines = [order_line("CA-1", "P-1"), order_line("CA-2", "P-2", ship_date="2014-02-30")]
    with pytest.raises(ParseError) as exc:
        make_store(lines)
    assert exc.value.row == 2
    assert exc.value.column == "ship_date"


def test_period_filter_month(store):
    feb = PeriodFilter(PeriodType.MONTH, year=2014, month=2)
    assert set(store.get_orders(feb)["order_id"]) == {"CA-2"}
    assert feb.label == "February 2014"


def test_period_filter_quarter_and_region(store):
    q1_east = PeriodFilter(PeriodType.QUARTER, year=2014, quarter=1, region="East")
    orders = store.get_orders(q1_east)
    assert set(orders["order_id"]) == {"CA-1", "CA-4"}
    assert q1_east.label == "Q1 2014 (East)"


def test_period_filter_custom_is_inclusive(store):
    period = PeriodFilter(PeriodType.CUSTOM, start_date=dt.date(2014, 2, 5), end_date=dt.date(2014, 3, 1))
    assert set(store.get_orders(period)["order_id"]) == {"CA-2", "CA-3"}
    assert store.date_range(period) == "2014-02-05 to 2014-03-01"


def test_period_filter_with_no_rows(store):
    period = PeriodFilter(PeriodType.YEAR, year=2020)
    assert store.get_orders(period).empty
    assert store.date_range(period) == "N/A"


def test_period_filter_validation():
    with pytest.raises(ValueError):
        PeriodFilter(PeriodType.MONTH, year=2014, month=13)
    with pytest.raises(ValueError):
        PeriodFilter(PeriodType.CUSTOM, start_date=dt.date(2014, 3, 1), end_date=dt.date(2014, 2, 1))
    assert PeriodFilter(PeriodType.QUARTER, year=2016, quarter=1).resolve() == (dt.date(2016, 1, 1), dt.date(2016, 3, 31))
    assert PeriodFilter(PeriodType.MONTH, year=2016, month=2).resolve()[1] == dt.date(2016, 2, 29)


@pytest.mark.parametrize("kwargs", [
    {"period_type": PeriodType.YEAR},
    {"period_type": PeriodType.MONTH, "year": 2014},
    {"period_type": PeriodType.MONTH, "month": 2},
    {"period_type": PeriodType.QUARTER, "year": 2014},
])
def test_period_filter_requires_its_fields(kwargs):
    with pytest.raises(ValueError, match="requires"):
        PeriodFilter(**kwargs)

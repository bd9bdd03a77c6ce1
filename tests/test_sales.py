import pytest

from superstore.analytics import sales
from superstore.data.schemas import PeriodFilter, PeriodType

from conftest import order_line


def test_category_totals_match_summary(store):
    by_cat = sales.sales_profit_by_category(store)
    summary = sales.summary_totals(store).iloc[0]

    assert by_cat["total_sales"].sum() == pytest.approx(summary["total_sales"])
    assert by_cat["total_profit"].sum() == pytest.approx(summary["total_profit"])
    assert by_cat["category"].tolist() == ["Furniture", "Office Supplies", "Technology"]
    assert by_cat.loc[0, "total_sales"] == pytest.approx(7500.0)


def test_subcategory_totals_match_summary(store):
    by_sub = sales.sales_by_subcategory(store)
    assert by_sub["total_sales"].sum() == pytest.approx(9009.99)
    assert by_sub.iloc[0][["category", "sub_category"]].tolist() == ["Furniture", "Chairs"]


def test_summary_totals(store):
    row = sales.summary_totals(store).iloc[0]
    assert row["total_customers"] == 3
    assert row["total_orders"] == 4
    assert row["total_sales"] == pytest.approx(9009.99)
    assert row["total_profit"] == pytest.approx(615.0)


def test_avg_discount_by_segment(store):
    df = sales.avg_discount_by_segment(store).set_index("segment")["avg_discount"]
    assert df["Corporate"] == pytest.approx(0.3)
    assert df["Home Office"] == pytest.approx(0.2)
    assert df["Consumer"] == pytest.approx(0.025)


def test_sales_by_month_calendar_order(make_store):
    lines = [
        order_line("CA-1", "P-1", order_date="2015-12-01", ship_date="2015-12-02", sales="$5"),
        order_line("CA-2", "P-1", order_date="2014-03-01", ship_date="2014-03-02", sales="$7"),
        order_line("CA-3", "P-1", order_date="2015-03-09", ship_date="2015-03-10", sales="$3"),
        order_line("CA-4", "P-1", order_date="2014-10-01", ship_date="2014-10-02", sales="$1"),
    ]
    df = sales.sales_by_month(make_store(lines))
    assert df["month_name"].tolist() == ["March", "October", "December"]
    assert df["total_sales"].tolist() == [10.0, 1.0, 5.0]


def test_profit_by_year_region(make_store):
    lines = [
        order_line("CA-1", "P-1", order_date="2015-01-01", ship_date="2015-01-02", region="West", profit="$5"),
        order_line("CA-2", "P-1", order_date="2014-01-01", ship_date="2014-01-02", region="West", profit="$2"),
        order_line("CA-3", "P-1", order_date="2014-06-01", ship_date="2014-06-02", region="East", profit="-$1"),
    ]
    df = sales.profit_by_year_region(make_store(lines))
    assert df[["year", "region"]].values.tolist() == [[2014, "East"], [2014, "West"], [2015, "West"]]
    assert df["total_profit"].tolist() == [-1.0, 2.0, 5.0]


def test_tier_boundaries_agree_across_queries(store):
    tiers = sales.order_value_tiers(store).set_index(["order_id", "product_id"])["value_tier"]
    assert tiers[("CA-1", "FUR-1")] == "High"      # exactly 1000
    assert tiers[("CA-1", "OFF-1")] == "Medium"    # 999.99
    assert tiers[("CA-4", "FUR-2")] == "Medium"    # exactly 500

    by_tier = sales.avg_profit_by_value_tier(store).set_index("value_tier")
    assert by_tier.index.tolist() == ["High", "Medium", "Low"]
    assert by_tier["line_count"].to_dict() == tiers.value_counts().to_dict()
    assert by_tier.loc["High", "avg_profit"] == pytest.approx(145.0)
    assert by_tier.loc["Medium", "avg_profit"] == pytest.approx(70.0)
    assert by_tier.loc["Low", "avg_profit"] == pytest.approx(61.67)


def test_high_value_sales(store):
    df = sales.high_value_sales(store)
    assert df[["order_id", "product_id"]].values.tolist() == [["CA-2", "FUR-1"]]

    lower = sales.high_value_sales(store, threshold=999.99)
    # strictly greater than the threshold
    assert lower["sales"].tolist() == [6000.0, 1000.0]


def test_high_discount_lines(store):
    df = sales.high_discount_lines(store)
    assert df["discount"].tolist() == [0.6]
    assert sales.high_discount_lines(store, threshold=0.1)["order_id"].tolist() == ["CA-2", "CA-3"]


def test_period_restricts_queries(store):
    jan = PeriodFilter(PeriodType.MONTH, year=2014, month=1)
    row = sales.summary_totals(store, jan).iloc[0]
    assert row["total_orders"] == 1
    assert row["total_sales"] == pytest.approx(2099.99)

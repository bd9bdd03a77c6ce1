"""
Query catalog — the fixed set of named analytical queries.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pandas as pd

from superstore.data.schemas import PeriodFilter
from superstore.data.store import DataStore
from superstore.errors import UnknownQueryError
from superstore.analytics import baskets, regions, returns, sales, shipping, windows


@dataclass(frozen=True)
class QuerySpec:
    name: str
    func: Callable[..., pd.DataFrame]
    description: str
    group: str
    takes_period: bool = True


_QUERIES = [
    QuerySpec("summary_totals", sales.summary_totals, "Headline customers, orders, sales, profit, discount", "Sales"),
    QuerySpec("sales_by_subcategory", sales.sales_by_subcategory, "Total sales per category and sub-category", "Sales"),
    QuerySpec("sales_profit_by_category", sales.sales_profit_by_category, "Total sales and profit per category", "Sales"),
    QuerySpec("avg_discount_by_segment", sales.avg_discount_by_segment, "Average discount per customer segment", "Sales"),
    QuerySpec("sales_by_month", sales.sales_by_month, "Total sales per calendar month", "Time"),
    QuerySpec("profit_by_year_region", sales.profit_by_year_region, "Total profit per year and region", "Time"),
    QuerySpec("month_over_month_growth", windows.month_over_month_growth, "Sales growth against the preceding month", "Time"),
    QuerySpec("running_sales_by_region", windows.running_sales_by_region, "Running sales total per region by order date", "Windows"),
    QuerySpec("product_profit_rank", windows.product_profit_rank, "Products ranked by total profit", "Windows"),
    QuerySpec("order_value_tiers", sales.order_value_tiers, "High / Medium / Low tier per order line", "Tiers"),
    QuerySpec("avg_profit_by_value_tier", sales.avg_profit_by_value_tier, "Average profit per value tier", "Tiers"),
    QuerySpec("high_value_sales", sales.high_value_sales, "Order lines with unusually large sales", "Outliers"),
    QuerySpec("high_discount_lines", sales.high_discount_lines, "Order lines with unusually deep discounts", "Outliers"),
    QuerySpec("product_pairs", baskets.product_pairs, "Product pairs most often bought together", "Baskets"),
    QuerySpec("delivery_time_by_ship_mode", shipping.delivery_time_by_ship_mode, "Average delivery days per ship mode", "Shipping"),
    QuerySpec("people_per_region", regions.people_per_region, "Regional managers per region", "People", takes_period=False),
    QuerySpec("person_performance", regions.person_performance, "Orders, sales, profit and discount per manager", "People"),
    QuerySpec("return_rate", returns.return_rate, "Share of orders returned", "Returns"),
    QuerySpec("returns_by_region", returns.returns_by_region, "Returned orders per region", "Returns"),
    QuerySpec("monthly_return_trend", returns.monthly_return_trend, "Returned orders per order month", "Returns"),
    QuerySpec("profit_lost_to_returns", returns.profit_lost_to_returns, "Sales and profit on returned orders per region", "Returns"),
    QuerySpec("most_returned_products", returns.most_returned_products, "Products in the most returned orders", "Returns"),
    QuerySpec("ship_mode_return_rate", returns.ship_mode_return_rate, "Return rate per ship mode", "Returns"),
    QuerySpec("orphaned_returns", returns.orphaned_returns, "Returns that reference unknown orders", "Returns", takes_period=False),
]

CATALOG: dict[str, QuerySpec] = {q.name: q for q in _QUERIES}


def query_names() -> list[str]:
    return list(CATALOG)


def get_query(name: str) -> QuerySpec:
    spec = CATALOG.get(name)
    if spec is None:
        raise UnknownQueryError(name, query_names())
    return spec


def run_query(
    store: DataStore,
    name: str,
    period: PeriodFilter | None = None,
    **params,
) -> pd.DataFrame:
    """Run one named query. Extra params (threshold, top) go to the query."""
    spec = get_query(name)
    if spec.takes_period:
        return spec.func(store, period, **params)
    return spec.func(store, **params)


def run_all(store: DataStore, period: PeriodFilter | None = None) -> dict[str, pd.DataFrame]:
    """Run every query with its defaults, in catalog order."""
    return {name: run_query(store, name, period) for name in CATALOG}

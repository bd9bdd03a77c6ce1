"""
Window-style analytics — running totals, profit ranking, month-over-month growth.

Ordering ties are always broken on the natural key (order_id, product_id)
so repeated runs return identical rows.
"""
from __future__ import annotations

import pandas as pd

from superstore.config import ORDER_KEY
from superstore.data.schemas import PeriodFilter
from superstore.data.store import DataStore
from superstore.analytics.common import growth_pct
from superstore.errors import DivisionUndefined


def running_sales_by_region(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Cumulative sales per region, ordered by order date then natural key."""
    orders = store.get_orders(period)
    result = orders[["region", "order_date"] + ORDER_KEY + ["sales"]].sort_values(
        ["region", "order_date"] + ORDER_KEY, kind="mergesort",
    ).reset_index(drop=True)
    result["running_total"] = result.groupby("region")["sales"].cumsum()
    return result


def product_profit_rank(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Products ranked by total profit; ties share a rank and the next rank skips."""
    orders = store.get_orders(period)
    g = orders.groupby("product_name", as_index=False).agg(total_profit=("profit", "sum"))
    g["profit_rank"] = g["total_profit"].rank(ascending=False, method="min").astype(int)
    return g.sort_values(["profit_rank", "product_name"]).reset_index(drop=True)


def monthly_sales(orders: pd.DataFrame) -> pd.Series:
    """Total sales per calendar month (Period index, chronological)."""
    months = orders["order_date"].dt.to_period("M").rename("year_month")
    return orders.groupby(months)["sales"].sum().sort_index()


def month_over_month_growth(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Percent change in total sales against the preceding calendar month.

    A month whose preceding calendar month has no order lines gets no row.
    When the comparison is undefined (zero totals) growth_pct is null and
    growth_defined is False.
    """
    totals = monthly_sales(store.get_orders(period))

    rows = []
    for ym, total in totals.items():
        prev_ym = ym - 1
        if prev_ym not in totals.index:
            continue
        previous = float(totals[prev_ym])
        try:
            growth = growth_pct(float(total), previous)
            defined = True
        except DivisionUndefined:
            growth = None
            defined = False
        rows.append({
            "year": ym.year,
            "month": ym.month,
            "total_sales": float(total),
            "previous_sales": previous,
            "growth_pct": growth,
            "growth_defined": defined,
        })

    columns = ["year", "month", "total_sales", "previous_sales", "growth_pct", "growth_defined"]
    result = pd.DataFrame(rows, columns=columns)
    result["growth_pct"] = result["growth_pct"].astype("float64")
    result["growth_defined"] = result["growth_defined"].astype(bool)
    return result

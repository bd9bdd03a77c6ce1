"""
Sales analytics — grouped totals, calendar buckets, value tiers, outliers.
"""
from __future__ import annotations

import calendar

import pandas as pd

from superstore.config import (
    HIGH_SALES_THRESHOLD, HIGH_DISCOUNT_THRESHOLD, ORDER_KEY, VALUE_TIER_ORDER,
)
from superstore.data.normalize import classify_value_tier
from superstore.data.schemas import PeriodFilter
from superstore.data.store import DataStore


# ---------------------------------------------------------------------------
# Grouped sums / averages
# ---------------------------------------------------------------------------

def sales_by_subcategory(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Total sales per (category, sub-category)."""
    orders = store.get_orders(period)
    g = orders.groupby(["category", "sub_category"], as_index=False).agg(
        total_sales=("sales", "sum"),
    )
    return g.sort_values(
        ["total_sales", "category", "sub_category"], ascending=[False, True, True]
    ).reset_index(drop=True)


def avg_discount_by_segment(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    orders = store.get_orders(period)
    g = orders.groupby("segment", as_index=False).agg(avg_discount=("discount", "mean"))
    g["avg_discount"] = g["avg_discount"].round(4)
    return g.sort_values(["avg_discount", "segment"], ascending=[False, True]).reset_index(drop=True)


def sales_profit_by_category(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Total sales and profit per category."""
    orders = store.get_orders(period)
    g = orders.groupby("category", as_index=False).agg(
        total_sales=("sales", "sum"),
        total_profit=("profit", "sum"),
    )
    return g.sort_values(["total_sales", "category"], ascending=[False, True]).reset_index(drop=True)


def summary_totals(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Single-row headline KPIs."""
    orders = store.get_orders(period)
    return pd.DataFrame([{
        "total_customers": int(orders["customer_id"].nunique()),
        "total_orders": int(orders["order_id"].nunique()),
        "total_sales": float(orders["sales"].sum()),
        "total_profit": float(orders["profit"].sum()),
        "avg_discount": round(float(orders["discount"].mean()), 4) if len(orders) else 0.0,
    }])


# ---------------------------------------------------------------------------
# Calendar buckets
# ---------------------------------------------------------------------------

def sales_by_month(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Total sales per calendar month, all years pooled, in calendar order."""
    orders = store.get_orders(period)
    month_num = orders["order_date"].dt.month
    g = orders.groupby(month_num.rename("month_num")).agg(
        total_sales=("sales", "sum"),
    ).reset_index()
    g["month_num"] = g["month_num"].astype(int)
    g.insert(1, "month_name", g["month_num"].map(lambda m: calendar.month_name[m]))
    return g.sort_values("month_num").reset_index(drop=True)


def profit_by_year_region(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    orders = store.get_orders(period)
    year = orders["order_date"].dt.year.rename("year")
    g = orders.groupby([year, "region"]).agg(total_profit=("profit", "sum")).reset_index()
    g["year"] = g["year"].astype(int)
    return g.sort_values(["year", "region"]).reset_index(drop=True)


# ---------------------------------------------------------------------------
# Value tiers
# ---------------------------------------------------------------------------

def order_value_tiers(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Tag every order line High / Medium / Low by its sales amount."""
    orders = store.get_orders(period)
    result = orders[ORDER_KEY + ["sales"]].copy()
    result["value_tier"] = classify_value_tier(result["sales"])
    return result.sort_values(ORDER_KEY).reset_index(drop=True)


def avg_profit_by_value_tier(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Average profit per value tier, using the same ladder as order_value_tiers."""
    orders = store.get_orders(period)
    tiers = classify_value_tier(orders["sales"]).rename("value_tier")
    g = orders.groupby(tiers).agg(
        line_count=("profit", "size"),
        avg_profit=("profit", "mean"),
    ).reset_index()
    g["avg_profit"] = g["avg_profit"].round(2)
    g["value_tier"] = pd.Categorical(g["value_tier"], categories=VALUE_TIER_ORDER, ordered=True)
    g = g.sort_values("value_tier").reset_index(drop=True)
    g["value_tier"] = g["value_tier"].astype(str)
    return g


# ---------------------------------------------------------------------------
# Outliers
# ---------------------------------------------------------------------------

def high_value_sales(
    store: DataStore,
    period: PeriodFilter | None = None,
    threshold: float = HIGH_SALES_THRESHOLD,
) -> pd.DataFrame:
    """Order lines with sales strictly above threshold, largest first."""
    orders = store.get_orders(period)
    hits = orders.loc[orders["sales"] > threshold, ORDER_KEY + ["product_name", "sales"]]
    return hits.sort_values(
        ["sales"] + ORDER_KEY, ascending=[False, True, True]
    ).reset_index(drop=True)


def high_discount_lines(
    store: DataStore,
    period: PeriodFilter | None = None,
    threshold: float = HIGH_DISCOUNT_THRESHOLD,
) -> pd.DataFrame:
    """Order lines discounted by more than threshold (a fraction)."""
    orders = store.get_orders(period)
    hits = orders.loc[orders["discount"] > threshold, ORDER_KEY + ["product_name", "discount", "sales"]]
    return hits.sort_values(
        ["discount"] + ORDER_KEY, ascending=[False, True, True]
    ).reset_index(drop=True)

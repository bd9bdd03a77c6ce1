"""
Return analytics — return rate, regional and monthly return patterns, lost profit.

An order counts as returned when its order id appears in the returns table,
however many return rows mention it.
"""
from __future__ import annotations

import pandas as pd

from superstore.config import TOP_N
from superstore.data.schemas import PeriodFilter
from superstore.data.store import DataStore
from superstore.analytics.common import pct_of_total


def _returned_ids(store: DataStore) -> pd.Index:
    return pd.Index(store.get_returns()["order_id"].unique())


def _returned_lines(store: DataStore, period: PeriodFilter | None) -> pd.DataFrame:
    orders = store.get_orders(period)
    return orders[orders["order_id"].isin(_returned_ids(store))]


def return_rate(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Share of distinct orders with at least one return, as a percentage."""
    orders = store.get_orders(period)
    total = int(orders["order_id"].nunique())
    returned = int(orders.loc[orders["order_id"].isin(_returned_ids(store)), "order_id"].nunique())
    return pd.DataFrame([{
        "total_orders": total,
        "returned_orders": returned,
        "return_rate_pct": pct_of_total(returned, total),
    }])


def returns_by_region(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Distinct returned orders per region as recorded on the return.

    Only returns whose order exists in the (period-filtered) order lines count.
    """
    returns = store.get_returns()
    returns = returns[returns["order_id"].isin(store.get_orders(period)["order_id"])]
    g = returns.groupby("region", as_index=False).agg(returned_orders=("order_id", "nunique"))
    return g.sort_values(["returned_orders", "region"], ascending=[False, True]).reset_index(drop=True)


def monthly_return_trend(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Distinct returned orders per order month, chronological."""
    lines = _returned_lines(store, period)
    order_dates = lines.groupby("order_id")["order_date"].min()
    months = order_dates.dt.to_period("M")
    counts = months.value_counts().sort_index()
    return pd.DataFrame({
        "year": [p.year for p in counts.index],
        "month": [p.month for p in counts.index],
        "returned_orders": counts.to_numpy(dtype=int),
    })


def profit_lost_to_returns(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Sales and profit carried by returned order lines, per order region."""
    lines = _returned_lines(store, period)
    g = lines.groupby("region", as_index=False).agg(
        returned_sales=("sales", "sum"),
        lost_profit=("profit", "sum"),
    )
    return g.sort_values(["lost_profit", "region"], ascending=[False, True]).reset_index(drop=True)


def most_returned_products(
    store: DataStore,
    period: PeriodFilter | None = None,
    top: int = TOP_N,
) -> pd.DataFrame:
    """Products appearing in the most returned orders."""
    lines = _returned_lines(store, period)[["order_id", "product_name"]].drop_duplicates()
    g = lines.groupby("product_name", as_index=False).agg(return_count=("order_id", "size"))
    g = g.sort_values(["return_count", "product_name"], ascending=[False, True])
    return g.head(top).reset_index(drop=True)


def ship_mode_return_rate(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Return rate per ship mode, ranked highest first."""
    orders = store.get_orders(period)[["ship_mode", "order_id"]].drop_duplicates()
    orders = orders.assign(is_returned=orders["order_id"].isin(_returned_ids(store)))
    g = orders.groupby("ship_mode", as_index=False).agg(
        total_orders=("order_id", "nunique"),
        returned_orders=("is_returned", "sum"),
    )
    g["returned_orders"] = g["returned_orders"].astype(int)
    g["return_rate_pct"] = [pct_of_total(r, t) for r, t in zip(g["returned_orders"], g["total_orders"])]
    g["rate_rank"] = g["return_rate_pct"].rank(ascending=False, method="min").astype(int)
    return g.sort_values(["rate_rank", "ship_mode"]).reset_index(drop=True)


def orphaned_returns(store: DataStore) -> pd.DataFrame:
    """Return rows whose order id does not exist in the order lines."""
    returns = store.get_returns()
    orphans = returns[~returns["order_id"].isin(store.get_orders()["order_id"])]
    return orphans[["order_id", "region", "returned"]].sort_values("order_id").reset_index(drop=True)

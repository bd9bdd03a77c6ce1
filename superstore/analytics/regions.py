"""
Regional manager analytics — people joined to order lines by region.

A person is credited with every order line in their region. When a region
has several managers (or a manager appears twice), each of them receives the
full set of lines; that fan-out is intentional and must not be de-duplicated.
"""
from __future__ import annotations

import pandas as pd

from superstore.data.schemas import PeriodFilter
from superstore.data.store import DataStore


def people_per_region(store: DataStore) -> pd.DataFrame:
    people = store.get_people()
    g = people.groupby("region", as_index=False).agg(people_count=("person", "size"))
    return g.sort_values("region").reset_index(drop=True)


def person_performance(store: DataStore, period: PeriodFilter | None = None) -> pd.DataFrame:
    """Orders managed, sales, profit and average discount per regional manager."""
    orders = store.get_orders(period)
    joined = store.get_people().merge(
        orders[["region", "order_id", "sales", "profit", "discount"]],
        on="region",
        how="inner",
    )
    g = joined.groupby(["person", "region"], as_index=False).agg(
        orders_managed=("order_id", "count"),
        total_sales=("sales", "sum"),
        total_profit=("profit", "sum"),
        avg_discount=("discount", "mean"),
    )
    g["avg_discount"] = g["avg_discount"].round(4)
    return g.sort_values(["total_sales", "person"], ascending=[False, True]).reset_index(drop=True)

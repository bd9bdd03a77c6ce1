"""
Market-basket analytics — products bought together in the same order.
"""
from __future__ import annotations

from collections import Counter
from itertools import combinations

import pandas as pd

from superstore.config import TOP_N
from superstore.data.schemas import PeriodFilter
from superstore.data.store import DataStore


def count_product_pairs(orders: pd.DataFrame) -> Counter:
    """Count unordered product-name pairs co-occurring within an order.

    Each pair is stored in lexicographic order, so (A, B) and (B, A) are one
    key, and each order contributes a pair at most once.
    """
    pairs: Counter = Counter()
    distinct = orders[["order_id", "product_name"]].drop_duplicates()
    for _, names in distinct.groupby("order_id")["product_name"]:
        if len(names) < 2:
            continue
        pairs.update(combinations(sorted(names), 2))
    return pairs


def product_pairs(
    store: DataStore,
    period: PeriodFilter | None = None,
    top: int = TOP_N,
) -> pd.DataFrame:
    """Most frequent product pairs across all orders."""
    pairs = count_product_pairs(store.get_orders(period))
    df = pd.DataFrame(
        [(a, b, n) for (a, b), n in pairs.items()],
        columns=["product_a", "product_b", "pair_count"],
    )
    df = df.sort_values(
        ["pair_count", "product_a", "product_b"], ascending=[False, True, True]
    )
    return df.head(top).reset_index(drop=True)

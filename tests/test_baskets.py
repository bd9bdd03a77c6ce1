import pandas as pd

from superstore.analytics.baskets import count_product_pairs, product_pairs

from conftest import order_line


def test_three_products_make_three_pairs():
    orders = pd.DataFrame({"order_id": ["CA-1"] * 3, "product_name": ["C", "A", "B"]})
    pairs = count_product_pairs(orders)
    assert sorted(pairs) == [("A", "B"), ("A", "C"), ("B", "C")]
    assert sum(pairs.values()) == 3


def test_repeated_product_counts_once_per_order():
    orders = pd.DataFrame({"order_id": ["CA-1", "CA-1", "CA-1"], "product_name": ["A", "A", "B"]})
    assert dict(count_product_pairs(orders)) == {("A", "B"): 1}


def test_single_product_orders_make_no_pairs():
    orders = pd.DataFrame({"order_id": ["CA-1", "CA-2"], "product_name": ["A", "B"]})
    assert not count_product_pairs(orders)


def test_product_pairs_ordering(store):
    df = product_pairs(store)
    assert df.values.tolist() == [
        ["Alpha Chair", "Beta Pen", 2],
        ["Alpha Chair", "Gamma Phone", 1],
        ["Beta Pen", "Gamma Phone", 1],
    ]


def test_product_pairs_top(store):
    assert len(product_pairs(store, top=1)) == 1


def test_product_pairs_empty(make_store):
    df = product_pairs(make_store([order_line("CA-1", "P-1")]))
    assert df.empty
    assert list(df.columns) == ["product_a", "product_b", "pair_count"]

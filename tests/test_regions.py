import pytest

from superstore.analytics import regions


def test_people_per_region(make_store, sample_lines):
    store = make_store(sample_lines, people=[("Anna", "West"), ("Kelly", "West"), ("Chuck", "East")])
    df = regions.people_per_region(store)
    assert df.values.tolist() == [["East", 1], ["West", 2]]


def test_person_performance(store):
    df = regions.person_performance(store)
    assert df["person"].tolist() == ["Anna Andreadi", "Chuck Magee"]
    anna = df.iloc[0]
    assert anna["orders_managed"] == 3
    assert anna["total_sales"] == pytest.approx(6410.0)
    assert anna["total_profit"] == pytest.approx(175.0)


def test_shared_region_fans_out(make_store, sample_lines):
    store = make_store(sample_lines, people=[("Anna", "West"), ("Kelly", "West")])
    df = regions.person_performance(store).set_index("person")
    # each West manager is credited with every West line
    assert df.loc["Anna", "orders_managed"] == 3
    assert df.loc["Kelly", "orders_managed"] == 3
    assert df.loc["Anna", "total_sales"] == df.loc["Kelly", "total_sales"]


def test_person_without_orders_is_dropped(make_store, sample_lines):
    store = make_store(sample_lines, people=[("Anna", "West"), ("Sam", "Central")])
    assert regions.person_performance(store)["person"].tolist() == ["Anna"]

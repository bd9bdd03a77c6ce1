"""
DataStore — In-memory query engine backed by pandas.

Loaded and cleaned once, then only read. Every analytics query takes a
DataStore and never mutates it.
"""
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from superstore.config import INBOX_FOLDER, STRICT_REFERENCES
from superstore.data.loader import discover_inputs, load_orders, load_people, load_returns
from superstore.data.normalize import clean_orders
from superstore.data.schemas import PeriodFilter, PeriodType
from superstore.errors import ReferentialError

logger = logging.getLogger(__name__)


class DataStore:
    """Cleaned order lines, people and returns with period-filtered accessors."""

    def __init__(self, strict_references: bool = STRICT_REFERENCES) -> None:
        self.orders: pd.DataFrame = pd.DataFrame()
        self.people: pd.DataFrame = pd.DataFrame()
        self.returns: pd.DataFrame = pd.DataFrame()
        self.strict_references = strict_references
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, inbox: Path = INBOX_FOLDER) -> "DataStore":
        """Discover the three CSVs in inbox, load and clean them."""
        paths = discover_inputs(inbox)
        return self.load_files(paths["orders"], paths["people"], paths["returns"])

    def load_files(self, orders_csv: Path, people_csv: Path, returns_csv: Path) -> "DataStore":
        """Load and clean explicit input files. Any failure aborts the whole load."""
        orders = load_orders(orders_csv)
        people = load_people(people_csv)
        returns = load_returns(returns_csv)
        return self.load_frames(orders, people, returns)

    def load_frames(self, orders: pd.DataFrame, people: pd.DataFrame, returns: pd.DataFrame) -> "DataStore":
        """Install already-loaded tables, cleaning the order lines first."""
        self._loaded = False
        orders = clean_orders(orders.reset_index(drop=True))

        orphans = self._find_orphans(orders, returns)
        if len(orphans):
            ids = sorted(orphans["order_id"].unique().tolist())
            if self.strict_references:
                raise ReferentialError("Returns reference unknown orders", ids)
            logger.warning("%d return(s) reference unknown orders", len(orphans))

        early = (orders["ship_date"] < orders["order_date"]).sum()
        if early:
            logger.warning("%d order line(s) ship before their order date", early)

        self.orders = orders
        self.people = people.reset_index(drop=True)
        self.returns = returns.reset_index(drop=True)
        self._loaded = True
        logger.info(
            "Store ready: %s order lines, %s people, %s returns",
            f"{len(self.orders):,}", f"{len(self.people):,}", f"{len(self.returns):,}",
        )
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def _apply_period(self, df: pd.DataFrame, period: PeriodFilter) -> pd.DataFrame:
        """Filter order lines by order-date range + optional region."""
        if period.period_type != PeriodType.ALL:
            start, end = period.resolve()
            if start is not None:
                df = df[df["order_date"] >= pd.Timestamp(start)]
            if end is not None:
                df = df[df["order_date"] <= pd.Timestamp(end)]

        if period.region:
            df = df[df["region"] == period.region]
        return df

    def get_orders(self, period: PeriodFilter | None = None) -> pd.DataFrame:
        """Order lines for a period.

        Returns a filtered view (not a copy). Callers that need to mutate
        should call .copy() themselves.
        """
        df = self.orders
        if period:
            df = self._apply_period(df, period)
        return df

    def get_people(self) -> pd.DataFrame:
        return self.people

    def get_returns(self) -> pd.DataFrame:
        return self.returns

    # ------------------------------------------------------------------
    # Referential integrity
    # ------------------------------------------------------------------

    @staticmethod
    def _find_orphans(orders: pd.DataFrame, returns: pd.DataFrame) -> pd.DataFrame:
        if returns.empty:
            return returns
        return returns[~returns["order_id"].isin(orders["order_id"])]

    def referential_report(self) -> dict:
        """Summary of returns that point at order ids missing from the order lines."""
        orphans = self._find_orphans(self.orders, self.returns)
        return {
            "returns": len(self.returns),
            "orphaned_returns": len(orphans),
            "orphaned_order_ids": sorted(orphans["order_id"].unique().tolist()) if len(orphans) else [],
        }

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def regions(self) -> list[str]:
        """Unique order-line regions sorted alphabetically."""
        if self.orders.empty:
            return []
        return sorted(self.orders["region"].dropna().unique().tolist())

    def categories(self) -> list[str]:
        if self.orders.empty:
            return []
        return sorted(self.orders["category"].dropna().unique().tolist())

    def date_range(self, period: PeriodFilter | None = None) -> str:
        """Human-readable order-date range string."""
        df = self.get_orders(period)
        if df.empty:
            return "N/A"
        dates = df["order_date"].dropna()
        if dates.empty:
            return "N/A"
        return f"{dates.min():%Y-%m-%d} to {dates.max():%Y-%m-%d}"

    def row_count(self) -> int:
        return len(self.orders)

    def order_count(self) -> int:
        if self.orders.empty:
            return 0
        return int(self.orders["order_id"].nunique())

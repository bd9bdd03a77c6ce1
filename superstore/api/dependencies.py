"""
FastAPI dependencies: the process-wide DataStore and period query params.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import HTTPException, Query

from superstore.data.store import DataStore
from superstore.data.schemas import PeriodFilter, PeriodType

# Set once by the app lifespan; a failed load keeps the store unloaded and
# remembers why.
_store: DataStore | None = None
_load_error: str | None = None


def set_store(store: DataStore, load_error: str | None = None) -> None:
    global _store, _load_error
    _store, _load_error = store, load_error


def get_load_error() -> str | None:
    return _load_error


def get_store_or_empty() -> DataStore:
    """The store in whatever state startup left it (health checks only)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def get_store() -> DataStore:
    store = get_store_or_empty()
    if not store.is_loaded:
        reason = f": {_load_error}" if _load_error else " yet"
        raise HTTPException(503, f"Data not loaded{reason}")
    return store


def parse_period(
    period_type: Optional[str] = Query(None, description="month|quarter|year|custom|all"),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    quarter: Optional[int] = Query(None),
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    region: Optional[str] = Query(None, description="Order-line region"),
) -> PeriodFilter | None:
    """Build a PeriodFilter from query params; None when no filter was asked for."""
    if period_type is None and not region:
        return None
    try:
        return PeriodFilter(
            period_type=PeriodType(period_type or PeriodType.ALL),
            year=year,
            month=month,
            quarter=quarter,
            start_date=dt.date.fromisoformat(start_date) if start_date else None,
            end_date=dt.date.fromisoformat(end_date) if end_date else None,
            region=region,
        )
    except ValueError as exc:
        raise HTTPException(400, f"Invalid period: {exc}")

"""
Meta endpoints: health, regions, categories.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from superstore.data.store import DataStore
from superstore.api.dependencies import get_store, get_store_or_empty, get_load_error
from superstore.api.response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store_or_empty)):
    error = get_load_error()
    if not store.is_loaded:
        return HealthResponse(
            status="error" if error else "loading",
            rows=0, orders=0, people=0, returns=0, orphaned_returns=0,
            date_range="N/A", error=error,
        )
    ref = store.referential_report()
    return HealthResponse(
        status="ok",
        rows=store.row_count(),
        orders=store.order_count(),
        people=len(store.get_people()),
        returns=ref["returns"],
        orphaned_returns=ref["orphaned_returns"],
        date_range=store.date_range(),
    )


@router.get("/regions")
def list_regions(store: DataStore = Depends(get_store)):
    return {"regions": store.regions()}


@router.get("/categories")
def list_categories(store: DataStore = Depends(get_store)):
    return {"categories": store.categories()}

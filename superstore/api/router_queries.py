"""
Query endpoints — catalog listing, single query results, full report JSON/Excel.
"""
from __future__ import annotations

import inspect
import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse

from superstore.config import REPORTS_FOLDER
from superstore.data.store import DataStore
from superstore.data.schemas import PeriodFilter
from superstore.api.dependencies import get_store, parse_period
from superstore.api.response_models import QueryInfo, QueryListResponse, QueryResultResponse
from superstore.analytics.catalog import CATALOG, get_query
from superstore.errors import UnknownQueryError
from superstore.reports import analysis_report

router = APIRouter(prefix="/api", tags=["queries"])


@router.get("/queries", response_model=QueryListResponse)
def list_queries():
    queries = [
        QueryInfo(name=q.name, group=q.group, description=q.description, takes_period=q.takes_period)
        for q in CATALOG.values()
    ]
    return QueryListResponse(queries=queries, count=len(queries))


@router.get("/queries/{name}", response_model=QueryResultResponse)
def run_named_query(
    name: str,
    threshold: Optional[float] = Query(None, description="Outlier threshold"),
    top: Optional[int] = Query(None, ge=1, description="Row limit for top-N queries"),
    store: DataStore = Depends(get_store),
    period: PeriodFilter | None = Depends(parse_period),
):
    try:
        spec = get_query(name)
    except UnknownQueryError as exc:
        raise HTTPException(404, str(exc))

    accepted = inspect.signature(spec.func).parameters
    params = {}
    for key, value in (("threshold", threshold), ("top", top)):
        if value is None:
            continue
        if key not in accepted:
            raise HTTPException(400, f"Query {name} does not take '{key}'")
        params[key] = value

    return analysis_report.generate_query_json(store, name, period, **params)


@router.get("/report")
def full_report(
    store: DataStore = Depends(get_store),
    period: PeriodFilter | None = Depends(parse_period),
):
    return analysis_report.generate_json(store, period)


@router.get("/report/excel")
def full_report_excel(
    store: DataStore = Depends(get_store),
    period: PeriodFilter | None = Depends(parse_period),
):
    # unique file per request
    stamp = f"{datetime.now():%Y%m%d_%H%M%S}_{uuid.uuid4().hex[:8]}"
    path = analysis_report.generate_excel(store, REPORTS_FOLDER / f"Superstore_Analysis_{stamp}.xlsx", period)
    return FileResponse(path=str(path), filename="Superstore_Analysis.xlsx",
                        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")

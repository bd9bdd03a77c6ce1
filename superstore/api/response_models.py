"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    rows: int
    orders: int
    people: int
    returns: int
    orphaned_returns: int
    date_range: str
    error: Optional[str] = None


class QueryInfo(BaseModel):
    name: str
    group: str
    description: str
    takes_period: bool


class QueryListResponse(BaseModel):
    queries: list[QueryInfo]
    count: int


class QueryResultResponse(BaseModel):
    query: str
    description: str
    period_label: str
    row_count: int
    columns: list[str]
    rows: list[dict[str, Any]]

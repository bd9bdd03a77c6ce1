"""
Analysis Report — every catalog query as JSON or as a styled Excel workbook.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from superstore.data.store import DataStore
from superstore.data.schemas import PeriodFilter
from superstore.analytics.catalog import get_query, run_all, run_query
from superstore.analytics.common import sanitize_for_json
from superstore.excel.writer import ExcelWriter, ColSpec


_CURRENCY_HINTS = ("sales", "profit", "running_total")


def _col_type(name: str, dtype) -> str:
    """Pick an Excel column type from the column name and dtype."""
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return "date"
    if pd.api.types.is_bool_dtype(dtype):
        return "text"
    if pd.api.types.is_integer_dtype(dtype):
        return "number"
    if name.endswith("_pct"):
        return "percent"
    if "discount" in name:
        return "fraction"
    if any(h in name for h in _CURRENCY_HINTS):
        return "currency"
    if pd.api.types.is_float_dtype(dtype):
        return "decimal"
    return "text"


def column_specs(df: pd.DataFrame) -> list[ColSpec]:
    return [
        ColSpec(col, _col_type(col, df[col].dtype), col.replace("_", " ").title())
        for col in df.columns
    ]


def generate_query_json(store: DataStore, name: str, period: PeriodFilter | None = None, **params) -> dict:
    """One query result with its metadata."""
    spec = get_query(name)
    df = run_query(store, name, period, **params)
    return sanitize_for_json({
        "query": name,
        "description": spec.description,
        "period_label": period.label if period else "All Time",
        "row_count": len(df),
        "columns": list(df.columns),
        "rows": df,
    })


def generate_json(store: DataStore, period: PeriodFilter | None = None) -> dict:
    """All query results keyed by query name."""
    results = run_all(store, period)
    return sanitize_for_json({
        "period_label": period.label if period else "All Time",
        "date_range": store.date_range(period),
        "referential": store.referential_report(),
        "queries": {name: df for name, df in results.items()},
    })


def generate_excel(
    store: DataStore,
    output_path: str | Path,
    period: PeriodFilter | None = None,
) -> Path:
    """Summary sheet of headline KPIs followed by one sheet per query."""
    results = run_all(store, period)
    totals = results["summary_totals"].iloc[0]
    rate = results["return_rate"].iloc[0]
    ew = ExcelWriter()

    ws = ew.add_sheet("Summary")
    label = period.label if period else "All Time"
    ew.write_title(ws, "SUPERSTORE ANALYTICS",
                   f"Sales Analysis  |  {label}  |  {store.date_range(period)}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 5, "OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (float(totals["total_sales"]), "TOTAL SALES", "currency"),
        (float(totals["total_profit"]), "TOTAL PROFIT", "currency"),
        (int(totals["total_orders"]), "ORDERS", "number"),
        (int(totals["total_customers"]), "CUSTOMERS", "number"),
    ])

    row = ew.write_section(ws, row, "DISCOUNTS & RETURNS")
    ew.write_kpi_row(ws, row, [
        (float(totals["avg_discount"]), "AVG DISCOUNT", "fraction"),
        (float(rate["return_rate_pct"]), "RETURN RATE", "percent"),
        (int(rate["returned_orders"]), "RETURNED ORDERS", "number"),
    ])

    for name, df in results.items():
        ws_q = ew.add_sheet(name.replace("_", " ").title())
        flag = ~df["growth_defined"] if name == "month_over_month_growth" else None
        ew.write_table(ws_q, 1, column_specs(df), df, flag=flag)

    return ew.save(output_path)

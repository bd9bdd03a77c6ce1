"""
Date/currency normalisation, postal-code narrowing, value-tier classification.
"""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from superstore.config import (
    DATE_COLS, CURRENCY_COLS, DATE_FORMAT, CURRENCY_STRIP_PATTERN,
    VALUE_TIERS, DEFAULT_VALUE_TIER,
)
from superstore.errors import ParseError

logger = logging.getLogger(__name__)

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _raise_first(bad: pd.Series, col: str, raw: pd.Series, message: str) -> None:
    pos = int(np.argmax(bad.to_numpy()))
    raise ParseError(message, row=pos + 1, column=col, value=raw.iloc[pos])


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def parse_dates(df: pd.DataFrame, columns: list[str] = DATE_COLS) -> pd.DataFrame:
    """Convert YYYY-MM-DD text columns to datetime64.

    Columns that are already datetime are left as they are. No alternate
    formats are tried.
    """
    for col in columns:
        if col not in df.columns or pd.api.types.is_datetime64_any_dtype(df[col]):
            continue
        raw = df[col].astype(str).str.strip()
        shape_ok = raw.str.match(_DATE_PATTERN)
        parsed = pd.to_datetime(raw.where(shape_ok), format=DATE_FORMAT, errors="coerce")
        bad = parsed.isna()
        if bad.any():
            _raise_first(bad, col, df[col], "Invalid date")
        df[col] = parsed
        logger.debug("Parsed %d dates in %s", len(df), col)
    return df


# ---------------------------------------------------------------------------
# Currency
# ---------------------------------------------------------------------------

def parse_currency(df: pd.DataFrame, columns: list[str] = CURRENCY_COLS) -> pd.DataFrame:
    """Strip currency symbols and thousands separators, then parse as float."""
    for col in columns:
        if col not in df.columns or pd.api.types.is_numeric_dtype(df[col]):
            continue
        raw = df[col]
        stripped = raw.astype(str).str.replace(CURRENCY_STRIP_PATTERN, "", regex=True).str.strip()
        empty = stripped == ""
        if empty.any():
            _raise_first(empty, col, raw, "Empty currency value")
        parsed = pd.to_numeric(stripped, errors="coerce")
        bad = parsed.isna() | ~np.isfinite(parsed.fillna(0))
        if bad.any():
            _raise_first(bad, col, raw, "Invalid currency value")
        df[col] = parsed.astype("float64")
        logger.debug("Parsed %d currency values in %s", len(df), col)
    return df


# ---------------------------------------------------------------------------
# Postal code
# ---------------------------------------------------------------------------

def fix_postal_codes(df: pd.DataFrame) -> pd.DataFrame:
    """Narrow the wide nullable postal-code integer to nullable Int32."""
    if "postal_code" in df.columns and str(df["postal_code"].dtype) != "Int32":
        df["postal_code"] = df["postal_code"].astype("Int32")
    return df


def clean_orders(df: pd.DataFrame) -> pd.DataFrame:
    """Run every order-line normalisation. Safe to call more than once."""
    df = parse_dates(df)
    df = parse_currency(df)
    df = fix_postal_codes(df)
    return df


# ---------------------------------------------------------------------------
# Value tiers
# ---------------------------------------------------------------------------

def classify_value_tier(sales: pd.Series) -> pd.Series:
    """Map each sales amount to High / Medium / Low (thresholds inclusive)."""
    conditions = [sales >= threshold for threshold, _ in VALUE_TIERS]
    labels = [label for _, label in VALUE_TIERS]
    return pd.Series(np.select(conditions, labels, default=DEFAULT_VALUE_TIER), index=sales.index)

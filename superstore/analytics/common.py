"""
Ratio helpers and JSON sanitising shared by the analytics and report modules.
"""
from __future__ import annotations

import datetime as dt
import math

import numpy as np
import pandas as pd

from superstore.errors import DivisionUndefined


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """numerator / denominator, or default when the denominator is zero or missing."""
    if not denominator or pd.isna(denominator):
        return default
    return numerator / denominator


def pct_of_total(part: float, total: float) -> float:
    """part as a percentage of total, 2 decimals; 0.0 for an empty total."""
    return round(safe_divide(part, total) * 100, 2)


def growth_pct(current: float, previous: float) -> float:
    """Percent change from previous to current, rounded to 2 decimals.

    Raises DivisionUndefined when there is nothing to compare: the previous
    total is zero, or the current period recorded no sales.
    """
    if previous == 0 or pd.isna(previous) or current == 0 or pd.isna(current):
        raise DivisionUndefined(f"growth from {previous} to {current}")
    return round((current - previous) / abs(previous) * 100, 2)


def sanitize_for_json(obj):
    """Turn numpy/pandas values into plain JSON-safe Python, recursively.

    DataFrames become lists of records. NaN, NA, NaT and infinities become
    None so an undefined value is never reported as a number.
    """
    if isinstance(obj, pd.DataFrame):
        obj = obj.to_dict("records")
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, np.ndarray)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, (bool, np.bool_)):
        return bool(obj)
    if isinstance(obj, (int, np.integer)):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        return float(obj) if math.isfinite(obj) else None
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    if isinstance(obj, (pd.Timestamp, dt.datetime)):
        return obj.date().isoformat()
    if isinstance(obj, dt.date):
        return obj.isoformat()
    return obj

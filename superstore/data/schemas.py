"""
Period filter schemas for time-based queries.
"""
from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PeriodType(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"
    ALL = "all"


def _month_span(year: int, first_month: int, months: int) -> tuple[dt.date, dt.date]:
    last_month = first_month + months - 1
    return dt.date(year, first_month, 1), dt.date(year, last_month, calendar.monthrange(year, last_month)[1])


@dataclass
class PeriodFilter:
    """Order-date window (inclusive) plus an optional order-line region."""
    period_type: PeriodType = PeriodType.ALL
    year: Optional[int] = None
    month: Optional[int] = None          # 1-12
    quarter: Optional[int] = None        # 1-4
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    region: Optional[str] = None

    def __post_init__(self) -> None:
        pt = PeriodType(self.period_type)
        if pt in (PeriodType.MONTH, PeriodType.QUARTER, PeriodType.YEAR) and self.year is None:
            raise ValueError(f"period_type {pt.value} requires year")
        if pt == PeriodType.MONTH and self.month is None:
            raise ValueError("period_type month requires month")
        if pt == PeriodType.QUARTER and self.quarter is None:
            raise ValueError("period_type quarter requires quarter")
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"month must be 1-12, got {self.month}")
        if self.quarter is not None and not 1 <= self.quarter <= 4:
            raise ValueError(f"quarter must be 1-4, got {self.quarter}")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError(f"start_date {self.start_date} is after end_date {self.end_date}")

    def resolve(self) -> tuple[Optional[dt.date], Optional[dt.date]]:
        """(start, end) bounds; None on either side means unbounded."""
        pt = self.period_type
        if pt == PeriodType.CUSTOM:
            return self.start_date, self.end_date
        if pt == PeriodType.ALL or self.year is None:
            return None, None
        if pt == PeriodType.YEAR:
            return _month_span(self.year, 1, 12)
        if pt == PeriodType.QUARTER and self.quarter:
            return _month_span(self.year, (self.quarter - 1) * 3 + 1, 3)
        if pt == PeriodType.MONTH and self.month:
            return _month_span(self.year, self.month, 1)
        return None, None

    @property
    def label(self) -> str:
        pt = self.period_type
        if pt == PeriodType.ALL:
            base = "All Time"
        elif pt == PeriodType.CUSTOM:
            base = f"{self.start_date or '?'} to {self.end_date or '?'}"
        elif pt == PeriodType.YEAR and self.year:
            base = str(self.year)
        elif pt == PeriodType.QUARTER and self.year and self.quarter:
            base = f"Q{self.quarter} {self.year}"
        elif pt == PeriodType.MONTH and self.year and self.month:
            base = f"{calendar.month_name[self.month]} {self.year}"
        else:
            base = "Unknown"
        return f"{base} ({self.region})" if self.region else base

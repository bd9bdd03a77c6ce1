"""
ExcelWriter — builds a styled workbook from DataFrames, one sheet at a time.
"""
from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from superstore.excel.styles import TITLE_FONT, SUBTITLE_FONT, SECTION_FONT
from superstore.excel.formatters import style_header, write_cell, kpi_card, fit_columns


class ColSpec(NamedTuple):
    key: str
    kind: str
    label: str


class ExcelWriter:
    """Workbook builder. The default sheet is reused for the first add_sheet call."""

    MAX_TITLE = 31  # Excel sheet-name limit

    def __init__(self, missing: str = "n/a") -> None:
        self.wb = Workbook()
        self.missing = missing
        self._fresh = True

    def add_sheet(self, title: str) -> Worksheet:
        title = title[: self.MAX_TITLE]
        if self._fresh:
            self._fresh = False
            ws = self.wb.active
            ws.title = title
            return ws
        return self.wb.create_sheet(title=title)

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str, span: int = 8) -> int:
        """Title and subtitle merged across span columns. Returns the next free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    def write_kpi_row(self, ws: Worksheet, row: int, kpis: list[tuple], spacing: int = 2) -> int:
        """kpis: (value, label, kind) triples laid out left to right."""
        for i, (value, label, kind) in enumerate(kpis):
            kpi_card(ws, row, 1 + i * spacing, value, label, kind)
        return row + 3

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _cell_value(self, value):
        if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
            return self.missing
        if isinstance(value, pd.Timestamp):
            return value.to_pydatetime()
        return value

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        df: pd.DataFrame,
        flag: pd.Series | None = None,
    ) -> int:
        """Header plus one row per DataFrame row. Returns the row after the table.

        flag is an optional boolean Series aligned with df; flagged rows are
        filled in the warning colour. Nulls are written as the missing marker.
        """
        style_header(ws, start_row, [c.label for c in columns])
        flags = flag.tolist() if flag is not None else [False] * len(df)

        row = start_row
        for row, (record, flagged) in enumerate(zip(df[[c.key for c in columns]].itertuples(index=False), flags),
                                                start_row + 1):
            for col, (spec, value) in enumerate(zip(columns, record), 1):
                write_cell(ws, row, col, self._cell_value(value), spec.kind, flagged=bool(flagged))

        fit_columns(ws, first_row=start_row)
        ws.freeze_panes = ws.cell(row=start_row + 1, column=1)
        return row + 1

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path

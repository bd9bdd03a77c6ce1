"""
Cell-level helpers: header styling, typed data cells, KPI cards, column fitting.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from superstore.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    CELL_FONT, CELL_BORDER, STRIPE_FILL, FLAG_FILL,
    KPI_VALUE_FONT, KPI_LABEL_FONT,
    CENTER, LEFT, RIGHT, NUMBER_FORMATS,
)


def style_header(ws: Worksheet, row: int, labels: list[str]) -> None:
    """Write header labels across row, starting at column A."""
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = HEADER_BORDER
        cell.alignment = CENTER


def write_cell(ws: Worksheet, row: int, col: int, value, kind: str, flagged: bool = False) -> None:
    """Write one table cell; kind selects number format and alignment."""
    cell = ws.cell(row=row, column=col, value=value)
    cell.font = CELL_FONT
    cell.border = CELL_BORDER

    fmt = NUMBER_FORMATS.get(kind)
    if fmt and not isinstance(value, str):
        cell.number_format = fmt
        cell.alignment = RIGHT
    else:
        cell.alignment = LEFT

    if flagged:
        cell.fill = FLAG_FILL
    elif row % 2 == 0:
        cell.fill = STRIPE_FILL


def kpi_card(ws: Worksheet, row: int, col: int, value, label: str, kind: str) -> None:
    """Large value with a small caption underneath."""
    top = ws.cell(row=row, column=col, value=value)
    top.font = KPI_VALUE_FONT
    top.alignment = CENTER
    if kind in NUMBER_FORMATS:
        top.number_format = NUMBER_FORMATS[kind]

    caption = ws.cell(row=row + 1, column=col, value=label)
    caption.font = KPI_LABEL_FONT
    caption.alignment = CENTER


def fit_columns(ws: Worksheet, first_row: int = 1, floor: int = 10, ceiling: int = 50) -> None:
    """Size each column to its longest value at or below first_row."""
    widths: dict[int, int] = {}
    for row in ws.iter_rows(min_row=first_row):
        for cell in row:
            if cell.value is not None:
                widths[cell.column] = max(widths.get(cell.column, 0), len(str(cell.value)))
    for col, width in widths.items():
        ws.column_dimensions[get_column_letter(col)].width = min(max(width + 2, floor), ceiling)

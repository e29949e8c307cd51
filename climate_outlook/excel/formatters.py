"""
Reusable cell/row formatting helpers for outlook workbooks.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from climate_outlook.excel.styles import (
    CENTER, LEFT, RIGHT,
    DATA_FONT, HEADER_BORDER, HEADER_FILL, HEADER_FONT,
    HIGHLIGHT_FILLS, KPI_LABEL_FONT, KPI_VALUE_FONT,
    STRIPE_FILL, THIN_BORDER,
)

NUMBER_FORMATS = {
    "number": "#,##0",
    "decimal": "0.00",
    "percent": '0.0"%"',
    "trend": '+0.00"%";-0.00"%";0.00"%"',
    "date": "yyyy-mm-dd",
}


def format_header_row(ws: Worksheet, row_num: int, num_cols: int) -> None:
    """Apply header styling to an entire row."""
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
    highlight: str | None = None,
) -> None:
    """Write and format a single data cell."""
    cell = ws.cell(row=row_num, column=col_num)
    cell.value = value
    cell.font = DATA_FONT
    cell.border = THIN_BORDER
    cell.alignment = LEFT if col_type == "text" else RIGHT
    if col_type in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[col_type]

    if highlight in HIGHLIGHT_FILLS:
        cell.fill = HIGHLIGHT_FILLS[highlight]
    elif row_num % 2 == 0:
        cell.fill = STRIPE_FILL


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 45) -> None:
    """Fit column widths to the longest rendered value."""
    for column in ws.columns:
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(column[0].column)].width = min(
            max(longest + 2, min_width), max_width
        )


def add_kpi_card(ws: Worksheet, row: int, col: int, value, label: str, format_type: str = "decimal") -> None:
    """Large value with a small caption underneath."""
    value_cell = ws.cell(row=row, column=col)
    value_cell.value = value
    value_cell.font = KPI_VALUE_FONT
    value_cell.alignment = CENTER
    if format_type in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[format_type]

    label_cell = ws.cell(row=row + 1, column=col)
    label_cell.value = label
    label_cell.font = KPI_LABEL_FONT
    label_cell.alignment = CENTER

"""
ExcelWriter — assembles outlook workbooks: a title block, KPI cards, and
column-spec driven tables.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from climate_outlook.excel.formatters import (
    add_kpi_card,
    auto_column_width,
    format_data_cell,
    format_header_row,
)
from climate_outlook.excel.styles import SECTION_FONT, SUBTITLE_FONT, TITLE_FONT

ColSpec = tuple[str, str, str]  # (row key, column type, header label)

# Excel rejects longer sheet names
MAX_SHEET_TITLE = 31


class ExcelWriter:
    """Builds one workbook sheet by sheet; rows advance top to bottom."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self.wb.remove(self.wb.active)

    def add_sheet(self, title: str) -> Worksheet:
        return self.wb.create_sheet(title=title[:MAX_SHEET_TITLE])

    def write_title(self, ws: Worksheet, title: str, subtitle: str, merge_cols: int = 8) -> int:
        """Title and subtitle across ``merge_cols`` columns. Returns the first free row."""
        for row, (text, font) in enumerate([(title, TITLE_FONT), (subtitle, SUBTITLE_FONT)], 1):
            cell = ws.cell(row=row, column=1, value=text)
            cell.font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=max(merge_cols, 1))
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    def write_kpi_row(self, ws: Worksheet, row: int, kpis: list[tuple], col_spacing: int = 2) -> int:
        """(value, label, format_type) cards side by side; each card spans two rows."""
        for i, (value, label, fmt) in enumerate(kpis):
            add_kpi_card(ws, row, 1 + i * col_spacing, value, label, fmt)
        return row + 3

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        rows: list[dict],
        highlight_fn: Optional[Callable[[dict], Optional[str]]] = None,
        freeze: bool = True,
    ) -> int:
        """Header row plus one row per dict; returns the row after the table.

        ``highlight_fn(row)`` may name a fill from ``HIGHLIGHT_FILLS``.
        """
        for col, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col, value=label)
        format_header_row(ws, start_row, len(columns))

        for offset, record in enumerate(rows, 1):
            highlight = highlight_fn(record) if highlight_fn else None
            for col, (key, col_type, _) in enumerate(columns, 1):
                format_data_cell(ws, start_row + offset, col, record.get(key), col_type, highlight=highlight)

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = ws.cell(row=start_row + 1, column=1)
        return start_row + len(rows) + 1

    def save(self, path: str | Path) -> Path:
        """Write the workbook, creating parent folders as needed."""
        if not self.wb.worksheets:
            self.add_sheet("Outlook")
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path

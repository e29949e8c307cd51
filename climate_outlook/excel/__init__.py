"""Workbook styles, cell formatters, and the ExcelWriter used by outlook exports."""
from .styles import *
from .formatters import NUMBER_FORMATS, add_kpi_card, auto_column_width, format_data_cell, format_header_row
from .writer import ExcelWriter, ColSpec

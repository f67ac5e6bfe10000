"""Spreadsheet access exports.

Backends live in their own modules: ``sheet_access.openpyxl_sheets`` for
workbook files and ``sheet_access.row_sheets`` for in-memory rows.
"""

from .cell_values import cell_text, is_blank, truncate_number
from .sheet_protocols import CellKind, ReadableSheet, SheetCell, SheetRow, WritableSheet

__all__ = [
    "CellKind",
    "ReadableSheet",
    "SheetCell",
    "SheetRow",
    "WritableSheet",
    "cell_text",
    "is_blank",
    "truncate_number",
]

"""Sheet writing exports.

The openpyxl named styles live in ``sheet_writing.cell_styles`` so the
layout code can be imported without openpyxl.
"""

from .sheet_writer import write_test_sheet

__all__ = ["write_test_sheet"]

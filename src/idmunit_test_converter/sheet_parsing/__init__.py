"""Sheet parsing exports."""

from .sheet_parser import SheetParseResult, parse_sheet

__all__ = ["SheetParseResult", "parse_sheet"]

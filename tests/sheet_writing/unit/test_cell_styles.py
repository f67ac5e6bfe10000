"""Named cell style tests."""

from __future__ import annotations

from idmunit_test_converter.sheet_writing.cell_styles import (
    COMMENT_STYLE,
    CONFIG_HEADER_STYLE,
    DELIMITER_STYLE,
    TITLE_STYLE,
    build_cell_styles,
    register_cell_styles,
)
from openpyxl import Workbook


def test_build_cell_styles_returns_seven_distinct_styles() -> None:
    styles = {style.name: style for style in build_cell_styles()}

    assert len(styles) == 7
    assert styles[TITLE_STYLE].font.b is True
    assert styles[TITLE_STYLE].font.sz == 14
    assert styles[DELIMITER_STYLE].fill.fgColor.rgb.endswith("C0C0C0")
    assert styles[CONFIG_HEADER_STYLE].fill.fgColor.rgb.endswith("CCFFCC")
    assert styles[COMMENT_STYLE].border.left.style == "thin"


def test_register_cell_styles_is_repeatable() -> None:
    workbook = Workbook()

    register_cell_styles(workbook)
    register_cell_styles(workbook)

    names = list(workbook.named_styles)
    assert names.count(TITLE_STYLE) == 1
    assert all(style.name in names for style in build_cell_styles())

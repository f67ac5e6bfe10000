"""Named cell styles of the legacy test sheet layout."""

from __future__ import annotations

from openpyxl import Workbook
from openpyxl.styles import Border, Font, NamedStyle, PatternFill, Side

from .style_names import (
    ATTRIBUTE_HEADER_STYLE,
    BORDERED_STYLE,
    COMMENT_STYLE,
    CONFIG_HEADER_STYLE,
    DELIMITER_STYLE,
    DESCRIPTION_STYLE,
    TITLE_STYLE,
)

_GREY_25_PERCENT = "C0C0C0"
_LIGHT_GREEN = "CCFFCC"
_LIGHT_YELLOW = "FFFF99"
_CORNFLOWER_BLUE = "9999FF"


def build_cell_styles() -> tuple[NamedStyle, ...]:
    """Return fresh named styles; a style object can only join one workbook."""
    return (
        NamedStyle(name=TITLE_STYLE, font=Font(bold=True, size=14)),
        NamedStyle(name=DESCRIPTION_STYLE, font=Font(bold=True)),
        NamedStyle(name=DELIMITER_STYLE, font=Font(bold=True), fill=_solid(_GREY_25_PERCENT)),
        NamedStyle(
            name=CONFIG_HEADER_STYLE,
            font=Font(bold=True),
            fill=_solid(_LIGHT_GREEN),
            border=_thin_border(),
        ),
        NamedStyle(
            name=ATTRIBUTE_HEADER_STYLE,
            font=Font(bold=True),
            fill=_solid(_LIGHT_YELLOW),
            border=_thin_border(),
        ),
        NamedStyle(
            name=COMMENT_STYLE,
            font=Font(bold=True),
            fill=_solid(_CORNFLOWER_BLUE),
            border=_thin_border(),
        ),
        NamedStyle(name=BORDERED_STYLE, border=_thin_border()),
    )


def register_cell_styles(workbook: Workbook) -> None:
    """Add the layout styles to ``workbook`` unless already present."""
    existing = set(workbook.named_styles)
    for style in build_cell_styles():
        if style.name not in existing:
            workbook.add_named_style(style)


def _solid(color: str) -> PatternFill:
    return PatternFill(fill_type="solid", start_color=color, end_color=color)


def _thin_border() -> Border:
    side = Side(style="thin")
    return Border(left=side, right=side, top=side, bottom=side)

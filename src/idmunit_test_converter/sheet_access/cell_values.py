"""Canonical string rendering of cell values."""

from __future__ import annotations

import math

from idmunit_test_converter.errors import UnsupportedCellError

from .sheet_protocols import CellKind, SheetCell

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def cell_text(cell: SheetCell) -> str:
    """Return the text a test sees for ``cell``.

    Numbers are rendered as the integer text of the truncated value, so ``3.0``
    and ``3.7`` both become ``"3"``. Formulas render as their source without
    the leading ``=``.
    """
    kind = cell.kind
    value = cell.value
    if kind is CellKind.BLANK or value is None:
        return ""
    if kind is CellKind.STRING:
        return str(value)
    if kind is CellKind.NUMERIC:
        return str(truncate_number(value))
    if kind is CellKind.BOOLEAN:
        return "true" if value else "false"
    if kind is CellKind.FORMULA:
        return str(value)
    raise UnsupportedCellError(
        f"Cannot parse cell {cell.coordinate} as string.", row_number=cell.row_index + 1
    )


def is_blank(cell: SheetCell) -> bool:
    return cell_text(cell).strip() == ""


def truncate_number(value: object) -> int:
    """Truncate toward zero and clamp to a 32-bit signed integer."""
    if isinstance(value, int):
        number = value
    else:
        as_float = float(value)  # type: ignore[arg-type]
        if math.isnan(as_float):
            return 0
        if math.isinf(as_float):
            return _INT_MAX if as_float > 0 else _INT_MIN
        number = int(as_float)
    return max(_INT_MIN, min(_INT_MAX, number))

"""Sheet capabilities backed by openpyxl worksheets."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from openpyxl.cell.cell import Cell
from openpyxl.utils import get_column_letter
from openpyxl.utils.datetime import WINDOWS_EPOCH, to_excel
from openpyxl.worksheet.formula import ArrayFormula
from openpyxl.worksheet.worksheet import Worksheet

from .sheet_protocols import CellKind

_KIND_BY_DATA_TYPE = {
    "s": CellKind.STRING,
    "inlineStr": CellKind.STRING,
    "str": CellKind.STRING,
    "n": CellKind.NUMERIC,
    "b": CellKind.BOOLEAN,
    "f": CellKind.FORMULA,
    "d": CellKind.NUMERIC,
    "e": CellKind.ERROR,
}


@dataclass(frozen=True)
class OpenpyxlCell:
    """Snapshot of one worksheet cell."""

    row_index: int
    column_index: int
    kind: CellKind
    value: object

    @property
    def coordinate(self) -> str:
        return f"{get_column_letter(self.column_index + 1)}{self.row_index + 1}"


class OpenpyxlRow:
    """One worksheet row."""

    def __init__(
        self, index: int, cells: Sequence[Cell], epoch: datetime = WINDOWS_EPOCH
    ) -> None:
        self._index = index
        self._cells = cells
        self._epoch = epoch

    @property
    def index(self) -> int:
        return self._index

    def cells(self) -> Iterator[OpenpyxlCell]:
        for column_index, cell in enumerate(self._cells):
            if cell.value is not None:
                yield _snapshot(self._index, column_index, cell, self._epoch)

    def cell(self, column_index: int) -> OpenpyxlCell:
        if column_index < len(self._cells):
            return _snapshot(
                self._index, column_index, self._cells[column_index], self._epoch
            )
        return OpenpyxlCell(self._index, column_index, CellKind.BLANK, None)


class OpenpyxlSheet:
    """Read and write access to an openpyxl worksheet.

    Workbooks must be loaded with ``data_only=False`` so formula cells keep
    their source text. Named styles used with ``write_cell`` must already be
    registered on the workbook.
    """

    def __init__(self, worksheet: Worksheet) -> None:
        self._worksheet = worksheet

    @property
    def name(self) -> str:
        return self._worksheet.title

    @property
    def worksheet(self) -> Worksheet:
        return self._worksheet

    def rows(self) -> Iterator[OpenpyxlRow]:
        worksheet = self._worksheet
        rows = worksheet.iter_rows(
            min_row=1,
            min_col=1,
            max_row=worksheet.max_row,
            max_col=worksheet.max_column,
        )
        epoch = worksheet.parent.epoch
        for row_index, cells in enumerate(rows):
            yield OpenpyxlRow(row_index, cells, epoch)

    def write_cell(
        self,
        row_index: int,
        column_index: int,
        value: str | None,
        *,
        kind: CellKind = CellKind.STRING,
        style: str | None = None,
    ) -> None:
        cell = self._worksheet.cell(row=row_index + 1, column=column_index + 1)
        if kind is CellKind.FORMULA and value:
            cell.value = value if value.startswith("=") else f"={value}"
        elif kind is CellKind.BLANK or value is None:
            cell.value = None
        else:
            cell.value = value
            # A literal starting with "=" must stay text.
            cell.data_type = "s"
        if style is not None:
            cell.style = style

    def set_row_height(self, row_index: int, points: float) -> None:
        self._worksheet.row_dimensions[row_index + 1].height = points

    def set_column_width(self, column_index: int, width: float) -> None:
        self._worksheet.column_dimensions[get_column_letter(column_index + 1)].width = width


def _snapshot(
    row_index: int, column_index: int, cell: Cell, epoch: datetime
) -> OpenpyxlCell:
    value = cell.value
    if value is None:
        return OpenpyxlCell(row_index, column_index, CellKind.BLANK, None)
    kind = _KIND_BY_DATA_TYPE.get(cell.data_type, CellKind.ERROR)
    if kind is CellKind.FORMULA:
        value = _formula_source(value)
    elif isinstance(value, datetime | date | time | timedelta):
        # Date-formatted cells read as their serial number.
        value = to_excel(value, epoch)
    return OpenpyxlCell(row_index, column_index, kind, value)


def _formula_source(value: object) -> str:
    text = value.text if isinstance(value, ArrayFormula) else value
    text = str(text or "")
    return text[1:] if text.startswith("=") else text

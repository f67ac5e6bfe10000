"""In-memory sheet built from plain Python rows."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from openpyxl.utils import get_column_letter
from openpyxl.utils.datetime import to_excel

from .sheet_protocols import CellKind


@dataclass(frozen=True)
class RowSheetCell:
    """One in-memory cell."""

    row_index: int
    column_index: int
    kind: CellKind
    value: object
    style: str | None = None

    @property
    def coordinate(self) -> str:
        return f"{get_column_letter(self.column_index + 1)}{self.row_index + 1}"


class RowSheetRow:
    """One in-memory row."""

    def __init__(self, index: int, cells: dict[int, RowSheetCell]) -> None:
        self._index = index
        self._cells = cells

    @property
    def index(self) -> int:
        return self._index

    def cells(self) -> Iterator[RowSheetCell]:
        for column_index in sorted(self._cells):
            yield self._cells[column_index]

    def cell(self, column_index: int) -> RowSheetCell:
        existing = self._cells.get(column_index)
        if existing is not None:
            return existing
        return RowSheetCell(self._index, column_index, CellKind.BLANK, None)


class RowSheet:
    """Sheet stored as a dictionary of cells.

    Built from rows of Python values: ``None`` leaves a cell empty, ``bool``,
    ``int`` and ``float`` become boolean and numeric cells, dates become
    numeric cells holding their 1900-epoch serial number, and strings
    starting with ``=`` become formulas.
    """

    def __init__(self, name: str, rows: Sequence[Sequence[object]] = ()) -> None:
        self._name = name
        self._rows: dict[int, dict[int, RowSheetCell]] = {}
        self.row_heights: dict[int, float] = {}
        self.column_widths: dict[int, float] = {}
        for row_index, values in enumerate(rows):
            self._rows.setdefault(row_index, {})
            for column_index, value in enumerate(values):
                if value is None:
                    continue
                kind, stored = _infer(value)
                self._rows[row_index][column_index] = RowSheetCell(
                    row_index, column_index, kind, stored
                )

    @property
    def name(self) -> str:
        return self._name

    def rows(self) -> Iterator[RowSheetRow]:
        last_row = max(self._rows, default=-1)
        for row_index in range(last_row + 1):
            yield RowSheetRow(row_index, self._rows.get(row_index, {}))

    def row(self, row_index: int) -> RowSheetRow:
        return RowSheetRow(row_index, self._rows.get(row_index, {}))

    def write_cell(
        self,
        row_index: int,
        column_index: int,
        value: str | None,
        *,
        kind: CellKind = CellKind.STRING,
        style: str | None = None,
    ) -> None:
        if kind is not CellKind.BLANK and value is None:
            kind = CellKind.BLANK
        if kind is CellKind.FORMULA and value is not None and value.startswith("="):
            value = value[1:]
        self._rows.setdefault(row_index, {})[column_index] = RowSheetCell(
            row_index, column_index, kind, value, style
        )

    def set_row_height(self, row_index: int, points: float) -> None:
        self.row_heights[row_index] = points

    def set_column_width(self, column_index: int, width: float) -> None:
        self.column_widths[column_index] = width


def _infer(value: object) -> tuple[CellKind, object]:
    if isinstance(value, bool):
        return CellKind.BOOLEAN, value
    if isinstance(value, int | float):
        return CellKind.NUMERIC, value
    if isinstance(value, datetime | date | time | timedelta):
        return CellKind.NUMERIC, to_excel(value)
    if isinstance(value, str):
        if value.startswith("=") and len(value) > 1:
            return CellKind.FORMULA, value[1:]
        return CellKind.STRING, value
    raise TypeError(f"Unsupported cell value: {value!r}")

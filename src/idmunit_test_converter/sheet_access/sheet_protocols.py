"""Capabilities the converter needs from a spreadsheet backend."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Protocol


class CellKind(Enum):
    """Kind of value stored in a cell."""

    STRING = "string"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    FORMULA = "formula"
    BLANK = "blank"
    ERROR = "error"


class SheetCell(Protocol):
    """Read access to one cell. Indices are zero-based."""

    @property
    def row_index(self) -> int: ...

    @property
    def column_index(self) -> int: ...

    @property
    def kind(self) -> CellKind: ...

    @property
    def value(self) -> object: ...

    @property
    def coordinate(self) -> str: ...


class SheetRow(Protocol):
    """Read access to one row."""

    @property
    def index(self) -> int: ...

    def cells(self) -> Iterator[SheetCell]:
        """Yield populated cells in column order."""
        ...

    def cell(self, column_index: int) -> SheetCell:
        """Return the cell at ``column_index``, or a blank cell."""
        ...


class ReadableSheet(Protocol):
    """Read access to a sheet."""

    @property
    def name(self) -> str: ...

    def rows(self) -> Iterator[SheetRow]:
        """Yield every row from the first to the last used row."""
        ...


class WritableSheet(Protocol):
    """Write access to a sheet. Styles are referenced by name."""

    def write_cell(
        self,
        row_index: int,
        column_index: int,
        value: str | None,
        *,
        kind: CellKind = CellKind.STRING,
        style: str | None = None,
    ) -> None: ...

    def set_row_height(self, row_index: int, points: float) -> None: ...

    def set_column_width(self, column_index: int, width: float) -> None: ...

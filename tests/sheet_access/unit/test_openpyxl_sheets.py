"""openpyxl sheet adapter tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from idmunit_test_converter.sheet_access import CellKind, cell_text
from idmunit_test_converter.sheet_access.openpyxl_sheets import OpenpyxlSheet
from openpyxl import Workbook, load_workbook


def test_reads_cell_kinds_from_saved_workbook(tmp_path: Path) -> None:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Users"
    worksheet["A1"] = "title"
    worksheet["B1"] = 3.0
    worksheet["C1"] = True
    worksheet["D1"] = "=CONCATENATE(A1,B1)"
    worksheet["A3"] = "after gap"
    path = tmp_path / "cells.xlsx"
    workbook.save(path)

    sheet = OpenpyxlSheet(load_workbook(path, data_only=False)["Users"])
    rows = list(sheet.rows())

    assert sheet.name == "Users"
    assert [row.index for row in rows] == [0, 1, 2]
    first = rows[0]
    assert [cell.kind for cell in first.cells()] == [
        CellKind.STRING,
        CellKind.NUMERIC,
        CellKind.BOOLEAN,
        CellKind.FORMULA,
    ]
    assert [cell_text(cell) for cell in first.cells()] == [
        "title",
        "3",
        "true",
        "CONCATENATE(A1,B1)",
    ]
    assert list(rows[1].cells()) == []
    assert first.cell(20).kind is CellKind.BLANK
    assert rows[2].cell(0).coordinate == "A3"


def test_write_cell_keeps_literal_text_and_writes_formulas(tmp_path: Path) -> None:
    workbook = Workbook()
    sheet = OpenpyxlSheet(workbook.active)

    sheet.write_cell(0, 0, "=not a formula")
    sheet.write_cell(0, 1, "A1&\"x\"", kind=CellKind.FORMULA)
    sheet.write_cell(0, 2, None)
    sheet.set_row_height(0, 30)
    sheet.set_column_width(1, 15)
    path = tmp_path / "written.xlsx"
    workbook.save(path)

    reloaded = load_workbook(path, data_only=False).active
    assert reloaded["A1"].value == "=not a formula"
    assert reloaded["A1"].data_type == "s"
    assert reloaded["B1"].value == '=A1&"x"'
    assert reloaded["C1"].value is None
    assert reloaded.row_dimensions[1].height == 30
    assert reloaded.column_dimensions["B"].width == 15


def test_date_cells_read_as_numeric_serial_number(tmp_path: Path) -> None:
    workbook = Workbook()
    workbook.active["A1"] = datetime(2023, 1, 2)
    path = tmp_path / "dates.xlsx"
    workbook.save(path)

    for worksheet in (workbook.active, load_workbook(path, data_only=False).active):
        cell = next(OpenpyxlSheet(worksheet).rows()).cell(0)

        assert cell.kind is CellKind.NUMERIC
        assert cell_text(cell) == "44928"

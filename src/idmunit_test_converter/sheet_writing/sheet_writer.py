"""Lay out a normalized test as a styled test sheet."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from idmunit_test_converter.errors import SheetWriteError
from idmunit_test_converter.model import (
    REQUIRED_CONFIG_HEADERS,
    SECTION_DELIMITER,
    Connector,
    IdmUnitTest,
    Operation,
    OperationConfigHeader,
)
from idmunit_test_converter.sheet_access import CellKind, WritableSheet

from .style_names import (
    ATTRIBUTE_HEADER_STYLE,
    BORDERED_STYLE,
    COMMENT_STYLE,
    CONFIG_HEADER_STYLE,
    DELIMITER_STYLE,
    DESCRIPTION_STYLE,
    TITLE_STYLE,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_ROW_HEIGHT = 15
TITLE_ROW_HEIGHT = 2 * DEFAULT_ROW_HEIGHT
WIDE_COLUMN_WIDTH = 35
CONFIG_COLUMN_WIDTH = 15


@dataclass(frozen=True)
class _SheetLayout:
    """Column positions derived from a test."""

    config_headers: tuple[OperationConfigHeader, ...]
    attribute_column_count: int
    connector_columns: Mapping[str, Mapping[str, int]]
    header_attribute_names: Mapping[int, str]

    @property
    def column_count(self) -> int:
        return len(self.config_headers) + self.attribute_column_count


def write_test_sheet(sheet: WritableSheet, test: IdmUnitTest) -> None:
    """Write ``test`` into an empty sheet.

    A test without a description gets no description row, so it reads back
    without one. Attribute columns are placed at ``group_num`` offsets after the
    operation-config columns, so connectors sharing an attribute name share
    its column.

    Raises:
      SheetWriteError: If an operation targets a connector the test does not
        define, or sets an attribute its connector does not have.
    """
    layout = _build_layout(test)
    writer = _SheetRowWriter(sheet, layout)
    writer.write_title(test.title)
    if test.desc is not None:
        writer.write_description(test.desc)
    writer.write_delimiter()
    writer.write_header_row()
    for connector in test.connectors:
        writer.write_connector_row(connector)
    writer.write_delimiter()
    for operation in test.operations:
        if operation.is_comment:
            writer.write_comment_row(operation)
        else:
            writer.write_operation_row(operation)
    writer.write_delimiter()
    _set_column_widths(sheet, layout)
    _LOGGER.debug("Wrote sheet %s with %d columns", test.name, layout.column_count)


def _build_layout(test: IdmUnitTest) -> _SheetLayout:
    config_headers = list(REQUIRED_CONFIG_HEADERS)
    if test.has_is_critical_header:
        config_headers.append(OperationConfigHeader.IS_CRITICAL)
    if test.has_repeat_op_range_header:
        config_headers.append(OperationConfigHeader.REPEAT_OP_RANGE)
    offset = len(config_headers)

    group_nums = [
        attribute.group_num for connector in test.connectors for attribute in connector.attributes
    ]
    connector_columns: dict[str, dict[str, int]] = {}
    header_attribute_names: dict[int, str] = {}
    for connector in test.connectors:
        columns = connector_columns.setdefault(connector.name, {})
        for attribute in connector.attributes:
            column = offset + attribute.group_num
            columns[attribute.name] = column
            header_attribute_names.setdefault(column, attribute.name)
    return _SheetLayout(
        config_headers=tuple(config_headers),
        attribute_column_count=max(group_nums) + 1 if group_nums else 0,
        connector_columns=connector_columns,
        header_attribute_names=header_attribute_names,
    )


class _SheetRowWriter:
    """Appends rows to a sheet, one section at a time."""

    def __init__(self, sheet: WritableSheet, layout: _SheetLayout) -> None:
        self._sheet = sheet
        self._layout = layout
        self._next_row = 0

    def write_title(self, title: str | None) -> None:
        row = self._start_row(TITLE_ROW_HEIGHT)
        self._sheet.write_cell(row, 0, title, style=TITLE_STYLE)

    def write_description(self, desc: str) -> None:
        row = self._start_row()
        self._sheet.write_cell(row, 0, desc, style=DESCRIPTION_STYLE)

    def write_delimiter(self) -> None:
        row = self._start_row()
        self._pad(row, 0, DELIMITER_STYLE)
        self._sheet.write_cell(row, 0, SECTION_DELIMITER, style=DELIMITER_STYLE)

    def write_header_row(self) -> None:
        row = self._start_row()
        self._pad(row, 0, ATTRIBUTE_HEADER_STYLE)
        for column, header in enumerate(self._layout.config_headers):
            self._sheet.write_cell(row, column, header.header, style=CONFIG_HEADER_STYLE)
        for column, name in self._layout.header_attribute_names.items():
            self._sheet.write_cell(row, column, name, style=ATTRIBUTE_HEADER_STYLE)

    def write_connector_row(self, connector: Connector) -> None:
        row = self._start_row()
        self._pad(row, 0, ATTRIBUTE_HEADER_STYLE)
        for column, header in enumerate(self._layout.config_headers):
            value = connector.name if header is OperationConfigHeader.TARGET else None
            self._sheet.write_cell(row, column, value, style=CONFIG_HEADER_STYLE)
        for name, column in self._layout.connector_columns[connector.name].items():
            self._sheet.write_cell(row, column, name, style=ATTRIBUTE_HEADER_STYLE)

    def write_comment_row(self, operation: Operation) -> None:
        row = self._start_row()
        self._sheet.write_cell(row, 0, operation.comment, style=COMMENT_STYLE)
        self._sheet.write_cell(row, 1, operation.operation, style=COMMENT_STYLE)
        self._pad(row, 2, COMMENT_STYLE)

    def write_operation_row(self, operation: Operation) -> None:
        row = self._start_row()
        self._pad(row, 0, BORDERED_STYLE)
        for column, header in enumerate(self._layout.config_headers):
            self._sheet.write_cell(
                row, column, _config_value(operation, header), style=BORDERED_STYLE
            )

        target = operation.target
        columns = self._layout.connector_columns.get(target or "")
        if columns is None:
            if target or operation.data:
                raise SheetWriteError(
                    f"Operation on row {row + 1} targets connector '{target}', "
                    "which the test does not define.",
                    row_number=row + 1,
                )
            return

        for entry in operation.data or ():
            column = columns.get(entry.attribute)
            if column is None:
                raise SheetWriteError(
                    f"Operation on row {row + 1} sets attribute '{entry.attribute}', "
                    f"which connector '{target}' does not define.",
                    row_number=row + 1,
                )
            if entry.is_formula:
                self._sheet.write_cell(
                    row, column, entry.value[0], kind=CellKind.FORMULA, style=BORDERED_STYLE
                )
            else:
                self._sheet.write_cell(row, column, "|".join(entry.value), style=BORDERED_STYLE)

    def _start_row(self, height: float = DEFAULT_ROW_HEIGHT) -> int:
        row = self._next_row
        self._next_row += 1
        self._sheet.set_row_height(row, height)
        return row

    def _pad(self, row: int, start_column: int, style: str) -> None:
        for column in range(start_column, self._layout.column_count):
            self._sheet.write_cell(row, column, None, kind=CellKind.BLANK, style=style)


def _config_value(operation: Operation, header: OperationConfigHeader) -> str | None:
    values = {
        OperationConfigHeader.COMMENT: operation.comment,
        OperationConfigHeader.OPERATION: operation.operation,
        OperationConfigHeader.TARGET: operation.target,
        OperationConfigHeader.WAIT_INTERVAL: operation.wait_interval,
        OperationConfigHeader.RETRY_COUNT: operation.retry_count,
        OperationConfigHeader.DISABLE_STEP: operation.disabled,
        OperationConfigHeader.EXPECT_FAILURE: operation.failure_expected,
        OperationConfigHeader.IS_CRITICAL: operation.critical,
        OperationConfigHeader.REPEAT_OP_RANGE: operation.repeat_range,
    }
    return values[header]


def _set_column_widths(sheet: WritableSheet, layout: _SheetLayout) -> None:
    config_count = len(layout.config_headers)
    for column in range(layout.column_count):
        if column == 0 or column >= config_count:
            sheet.set_column_width(column, WIDE_COLUMN_WIDTH)
        else:
            sheet.set_column_width(column, CONFIG_COLUMN_WIDTH)

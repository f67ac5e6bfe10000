"""Sheet parser producing normalized IdMUnit tests.

A test sheet is split into four row groups by ``---`` delimiter rows:

1. Test Details: the title (A1) and the description (A2).
2. Connectors: a header row mixing ``//`` operation-config headers with
   default connector attribute headers, then one row per connector naming it
   under ``//Target`` and listing its attributes in the shared attribute
   columns (the "attribute stacker").
3. Operations: one row per test step.
4. Trailing rows, which should be empty.

Structural problems that make the sheet unusable raise
``SheetConversionError``; everything else is reported as a lint warning and
parsing carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from idmunit_test_converter.lint_reporting import LintReporter
from idmunit_test_converter.model import (
    COMMENT_OPERATION,
    FORMULA_META_TAG,
    OPERATION_CONFIG_PREFIX,
    SECTION_DELIMITER,
    Connector,
    ConnectorAttribute,
    IdmUnitTest,
    Operation,
    OperationConfigHeader,
    OperationData,
    normalize_group_numbers,
)
from idmunit_test_converter.sheet_access import (
    CellKind,
    ReadableSheet,
    SheetCell,
    SheetRow,
    cell_text,
    is_blank,
)

_LOGGER = logging.getLogger(__name__)

_SECTION_COUNT = 3


@dataclass(frozen=True)
class SheetParseResult:
    """Parsed test plus the lint warnings collected along the way."""

    test: IdmUnitTest
    warnings: tuple[str, ...]


@dataclass(frozen=True)
class _HeaderCell:
    text: str
    column_index: int


@dataclass(frozen=True)
class _ConfigColumn:
    header: OperationConfigHeader
    column_index: int


@dataclass(frozen=True)
class _HeaderRow:
    config_columns: tuple[_ConfigColumn, ...]
    default_attributes: tuple[_HeaderCell, ...]

    def has_header(self, header: OperationConfigHeader) -> bool:
        return any(column.header is header for column in self.config_columns)

    def columns_for(self, header: OperationConfigHeader) -> list[int]:
        return [column.column_index for column in self.config_columns if column.header is header]


@dataclass(frozen=True)
class _DeclaredConnector:
    row_index: int
    attributes: tuple[_HeaderCell, ...]


@dataclass(frozen=True)
class _RowGroups:
    test_details: tuple[SheetRow, ...]
    connectors: tuple[SheetRow, ...]
    operations: tuple[SheetRow, ...]
    trailing: tuple[SheetRow, ...]


def parse_sheet(sheet: ReadableSheet, reporter: LintReporter | None = None) -> SheetParseResult:
    """Parse one test sheet.

    Args:
      sheet: Sheet to read.
      reporter: Warning collector for this call; it is cleared first. A new
        reporter is used when omitted.

    Returns:
      The normalized test and the warnings raised while reading it.

    Raises:
      SheetConversionError: If the sheet breaks a structural rule.
    """
    lint = reporter if reporter is not None else LintReporter()
    lint.clear()

    rows = list(sheet.rows())
    delimiter_rows = [row for row in rows if _is_delimiter_row(row)]
    if len(delimiter_rows) < _SECTION_COUNT:
        raise lint.error_too_few_section_delimiter_rows(len(delimiter_rows))
    if len(delimiter_rows) > _SECTION_COUNT:
        lint.warn_too_many_section_delimiter_rows(len(delimiter_rows))
    for row in delimiter_rows:
        _check_delimiter_row(row, lint)

    groups = _group_rows(rows, delimiter_rows)
    if not groups.connectors:
        raise lint.error_no_rows_in_connectors_section()

    title, desc = _parse_test_details(groups.test_details, lint)
    header_row = _parse_header_row(groups.connectors[0], lint)
    declared = _parse_connector_rows(groups.connectors[1:], header_row, lint)
    operations = _parse_operations(groups.operations, header_row, declared, lint)
    for row in groups.trailing:
        _check_trailing_row(row, lint)

    connectors = [_build_connector(name, entry.attributes) for name, entry in declared.items()]
    connectors.extend(_infer_connectors(operations, declared, header_row.default_attributes))

    test = IdmUnitTest(
        name=sheet.name,
        title=title,
        desc=desc,
        connectors=normalize_group_numbers(connectors),
        operations=tuple(operations),
        has_is_critical_header=_flag(header_row.has_header(OperationConfigHeader.IS_CRITICAL)),
        has_repeat_op_range_header=_flag(
            header_row.has_header(OperationConfigHeader.REPEAT_OP_RANGE)
        ),
    )
    _LOGGER.debug(
        "Parsed sheet %s: %d connectors, %d operations, %d warnings",
        sheet.name,
        len(test.connectors),
        len(test.operations),
        len(lint.warnings),
    )
    return SheetParseResult(test=test, warnings=lint.warnings)


def _is_delimiter_row(row: SheetRow) -> bool:
    return cell_text(row.cell(0)) == SECTION_DELIMITER


def _check_delimiter_row(row: SheetRow, lint: LintReporter) -> None:
    for cell in _populated(row):
        if cell.column_index > 0:
            lint.warn_cell_with_value_on_section_delimiter_row(cell)


def _group_rows(rows: Sequence[SheetRow], delimiter_rows: Sequence[SheetRow]) -> _RowGroups:
    delimiter_indices = {row.index for row in delimiter_rows}
    boundaries = [row.index for row in delimiter_rows[:_SECTION_COUNT]]
    groups: list[list[SheetRow]] = [[] for _ in range(_SECTION_COUNT + 1)]
    for row in rows:
        if row.index in delimiter_indices:
            continue
        position = next(
            (number for number, boundary in enumerate(boundaries) if row.index < boundary),
            _SECTION_COUNT,
        )
        groups[position].append(row)
    return _RowGroups(
        test_details=tuple(groups[0]),
        connectors=tuple(groups[1]),
        operations=tuple(groups[2]),
        trailing=tuple(groups[3]),
    )


def _parse_test_details(
    rows: Sequence[SheetRow], lint: LintReporter
) -> tuple[str, str | None]:
    if not rows:
        lint.warn_no_rows_in_test_details_section()
        return "", ""
    title = cell_text(rows[0].cell(0))
    if not title.strip():
        lint.warn_no_title()
    desc = cell_text(rows[1].cell(0)) if len(rows) > 1 else None
    for position, row in enumerate(rows):
        for cell in _populated(row):
            if position > 1 or cell.column_index > 0:
                lint.warn_extra_cell_in_test_details_section(cell)
    return title, desc


def _parse_header_row(row: SheetRow, lint: LintReporter) -> _HeaderRow:
    config_columns: list[_ConfigColumn] = []
    default_attributes: list[_HeaderCell] = []
    for cell in _populated(row):
        text = cell_text(cell)
        if not text.startswith(OPERATION_CONFIG_PREFIX):
            default_attributes.append(_HeaderCell(text, cell.column_index))
            continue
        header = OperationConfigHeader.from_header(text)
        if header is None:
            lint.warn_unknown_operation_config_header(cell, OPERATION_CONFIG_PREFIX)
            continue
        config_columns.append(_ConfigColumn(header, cell.column_index))
    header_row = _HeaderRow(tuple(config_columns), tuple(default_attributes))
    if not header_row.has_header(OperationConfigHeader.TARGET):
        raise lint.error_no_target_operation_config_header()
    return header_row


def _parse_connector_rows(
    rows: Sequence[SheetRow], header_row: _HeaderRow, lint: LintReporter
) -> dict[str, _DeclaredConnector]:
    target_columns = header_row.columns_for(OperationConfigHeader.TARGET)
    other_config_columns = {
        column.column_index
        for column in header_row.config_columns
        if column.header is not OperationConfigHeader.TARGET
    }
    declared: dict[str, _DeclaredConnector] = {}
    for row in rows:
        name = cell_text(row.cell(target_columns[0]))
        if not name.strip():
            lint.warn_connector_row_with_no_name(row)
            continue
        attributes: list[_HeaderCell] = []
        for cell in _populated(row):
            if cell.column_index in target_columns:
                continue
            if cell.column_index in other_config_columns:
                lint.warn_connector_attribute_under_operation_config_header(cell)
                continue
            attributes.append(_HeaderCell(cell_text(cell), cell.column_index))
        if name in declared:
            lint.warn_connector_row_with_same_name(row, name, declared[name].row_index)
            continue
        declared[name] = _DeclaredConnector(row.index, tuple(attributes))
    return declared


def _parse_operations(
    rows: Sequence[SheetRow],
    header_row: _HeaderRow,
    declared: Mapping[str, _DeclaredConnector],
    lint: LintReporter,
) -> list[Operation]:
    blank_row = next((row for row in rows if _is_blank_row(row)), None)
    if blank_row is not None:
        raise lint.error_blank_operation_row(blank_row)

    config_column_indices = {column.column_index for column in header_row.config_columns}
    operations: list[Operation] = []
    for row in rows:
        fields = {
            column.header: row.cell(column.column_index) for column in header_row.config_columns
        }
        operation_cell = fields.get(OperationConfigHeader.OPERATION)
        if operation_cell is not None and cell_text(operation_cell).strip() == COMMENT_OPERATION:
            operations.append(_parse_comment_operation(row, fields, operation_cell, lint))
            continue

        target = cell_text(fields[OperationConfigHeader.TARGET])
        if not target.strip():
            raise lint.error_operation_row_with_no_target(row)
        connector = declared.get(target)
        attributes = (
            connector.attributes if connector is not None else header_row.default_attributes
        )

        data: dict[str, SheetCell] = {}
        for attribute in attributes:
            cell = row.cell(attribute.column_index)
            if is_blank(cell):
                continue
            if attribute.text in data:
                lint.warn_operation_data_for_duplicate_attribute(
                    cell, data[attribute.text], attribute.text
                )
            data[attribute.text] = cell

        known_columns = config_column_indices | {attribute.column_index for attribute in attributes}
        for cell in _populated(row):
            if cell.column_index not in known_columns:
                lint.warn_non_blank_cell_in_column_with_no_header(cell)

        operations.append(_build_operation(fields, data))
    return operations


def _parse_comment_operation(
    row: SheetRow,
    fields: Mapping[OperationConfigHeader, SheetCell],
    operation_cell: SheetCell,
    lint: LintReporter,
) -> Operation:
    comment_cell = fields.get(OperationConfigHeader.COMMENT)
    if comment_cell is None or is_blank(comment_cell):
        lint.warn_comment_operation_with_no_comment(row)
    allowed_columns = {operation_cell.column_index}
    if comment_cell is not None:
        allowed_columns.add(comment_cell.column_index)
    for cell in _populated(row):
        if cell.column_index not in allowed_columns:
            lint.warn_non_blank_cell_on_comment_operation_row(cell)
    return Operation(
        comment=cell_text(comment_cell) if comment_cell is not None else None,
        operation=cell_text(operation_cell),
    )


def _check_trailing_row(row: SheetRow, lint: LintReporter) -> None:
    for cell in _populated(row):
        lint.warn_non_blank_cell_after_operations_section(cell)


def _build_operation(
    fields: Mapping[OperationConfigHeader, SheetCell], data: Mapping[str, SheetCell]
) -> Operation:
    def field_text(header: OperationConfigHeader) -> str | None:
        cell = fields.get(header)
        return cell_text(cell) if cell is not None else None

    entries = tuple(
        OperationData(
            attribute=attribute,
            value=(cell_text(cell),),
            meta=(FORMULA_META_TAG,) if cell.kind is CellKind.FORMULA else None,
        )
        for attribute, cell in data.items()
    )
    return Operation(
        comment=field_text(OperationConfigHeader.COMMENT),
        operation=field_text(OperationConfigHeader.OPERATION),
        target=field_text(OperationConfigHeader.TARGET),
        wait_interval=field_text(OperationConfigHeader.WAIT_INTERVAL),
        retry_count=field_text(OperationConfigHeader.RETRY_COUNT),
        disabled=field_text(OperationConfigHeader.DISABLE_STEP),
        failure_expected=field_text(OperationConfigHeader.EXPECT_FAILURE),
        critical=field_text(OperationConfigHeader.IS_CRITICAL),
        repeat_range=field_text(OperationConfigHeader.REPEAT_OP_RANGE),
        data=entries or None,
    )


def _infer_connectors(
    operations: Sequence[Operation],
    declared: Mapping[str, _DeclaredConnector],
    default_attributes: Sequence[_HeaderCell],
) -> Iterator[Connector]:
    """Yield a connector for each target used by operations but never declared."""
    seen = set(declared)
    for operation in operations:
        target = operation.target
        if target is None or not target.strip() or target in seen:
            continue
        seen.add(target)
        yield _build_connector(target, default_attributes)


def _build_connector(name: str, attributes: Sequence[_HeaderCell]) -> Connector:
    return Connector(
        name=name,
        attributes=tuple(
            ConnectorAttribute(name=attribute.text, group_num=attribute.column_index)
            for attribute in attributes
        ),
    )


def _populated(row: SheetRow) -> Iterator[SheetCell]:
    return (cell for cell in row.cells() if not is_blank(cell))


def _is_blank_row(row: SheetRow) -> bool:
    return all(is_blank(cell) for cell in row.cells())


def _flag(present: bool) -> bool | None:
    return True if present else None

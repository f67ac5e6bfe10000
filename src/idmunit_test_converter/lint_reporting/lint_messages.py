"""Lint warnings and fatal errors raised while parsing test sheets."""

from __future__ import annotations

from idmunit_test_converter.errors import SheetConversionError
from idmunit_test_converter.model.constants import OperationConfigHeader
from idmunit_test_converter.sheet_access.cell_values import cell_text
from idmunit_test_converter.sheet_access.sheet_protocols import SheetCell, SheetRow

_TARGET_HEADER = OperationConfigHeader.TARGET.header


class LintReporter:
    """Collects warnings for one sheet and builds fatal errors.

    Create one reporter per parse call; ``clear`` resets it between sheets.
    With ``include_cell_values`` every cell reference also shows the cell text.
    """

    def __init__(self, include_cell_values: bool = False) -> None:
        self.include_cell_values = include_cell_values
        self._warnings: list[str] = []

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(self._warnings)

    def clear(self) -> None:
        self._warnings.clear()

    def error_too_few_section_delimiter_rows(self, count: int) -> SheetConversionError:
        return SheetConversionError(
            "IdmUnit Test sheets must contain at least 3 section delimiter rows, "
            f"this sheet contains {count}."
        )

    def warn_too_many_section_delimiter_rows(self, count: int) -> None:
        self._warnings.append(
            "IdmUnit Test sheets should contain only 3 section delimiter rows, "
            f"this sheet contains {count}."
        )

    def warn_cell_with_value_on_section_delimiter_row(self, cell: SheetCell) -> None:
        self._warnings.append(
            f"Cell {self._cell_ref(cell)} contains a value but is on a section delimiter row, "
            "it will not be included."
        )

    def error_no_rows_in_connectors_section(self) -> SheetConversionError:
        return SheetConversionError(
            "No rows found in the Connectors Section (a.k.a. Attribute Stacker)."
        )

    def warn_no_rows_in_test_details_section(self) -> None:
        self._warnings.append("No rows found in the Test Details Section.")

    def warn_no_title(self) -> None:
        self._warnings.append("No title for this test specified in cell A1.")

    def warn_extra_cell_in_test_details_section(self, cell: SheetCell) -> None:
        self._warnings.append(
            "Only cells A1 and A2 should contain a value in the Test Details Section, "
            f"but cell {self._cell_ref(cell)} contains a value; it will not be included."
        )

    def warn_unknown_operation_config_header(self, cell: SheetCell, prefix: str) -> None:
        self._warnings.append(
            f"Cell {self._cell_ref(cell)} starts with the Operation Config prefix '{prefix}' "
            "but is not a known Operation Config option; it will not be included."
        )

    def error_no_target_operation_config_header(self) -> SheetConversionError:
        return SheetConversionError(
            f"No Operation Config Header for '{_TARGET_HEADER}' is defined."
        )

    def warn_connector_row_with_no_name(self, row: SheetRow) -> None:
        self._warnings.append(
            f"Row {row.index + 1} does not define a name for the connector under the "
            f"'{_TARGET_HEADER}' header; it will not be included."
        )

    def warn_connector_attribute_under_operation_config_header(self, cell: SheetCell) -> None:
        self._warnings.append(
            f"Cell {self._cell_ref(cell)} defines a connector attribute but is under a "
            "Operation Config header; it will not be included."
        )

    def warn_connector_row_with_same_name(
        self, row: SheetRow, connector_name: str, original_row_index: int
    ) -> None:
        self._warnings.append(
            f"Row {row.index + 1} defines a connector with the name '{connector_name}' but row "
            f"{original_row_index + 1} already defined a connector with the same name; "
            f"only row {original_row_index + 1} will be included."
        )

    def error_blank_operation_row(self, row: SheetRow) -> SheetConversionError:
        return SheetConversionError(
            "No blank rows are allowed in the Operations Section, "
            f"but row {row.index + 1} is blank.",
            row_number=row.index + 1,
        )

    def warn_comment_operation_with_no_comment(self, row: SheetRow) -> None:
        self._warnings.append(
            f"Row {row.index + 1} is marked as a comment operation, but its comment cell is blank."
        )

    def warn_non_blank_cell_on_comment_operation_row(self, cell: SheetCell) -> None:
        self._warnings.append(
            f"Cell {self._cell_ref(cell)} contains a value but it is on a comment operation row; "
            "it will not be included."
        )

    def error_operation_row_with_no_target(self, row: SheetRow) -> SheetConversionError:
        return SheetConversionError(
            f"Row {row.index + 1} has no connector specified under the '{_TARGET_HEADER}' "
            "Operation Config header.",
            row_number=row.index + 1,
        )

    def warn_operation_data_for_duplicate_attribute(
        self, cell: SheetCell, original_cell: SheetCell, attribute_name: str
    ) -> None:
        self._warnings.append(
            f"Row {cell.row_index + 1} contains operation data in two cells under the same "
            f"connector attr '{attribute_name}' (cells {self._cell_ref(original_cell)} and "
            f"{self._cell_ref(cell)}); only cell {self._cell_ref(cell)} will be included."
        )

    def warn_non_blank_cell_in_column_with_no_header(self, cell: SheetCell) -> None:
        self._warnings.append(
            f"Row {cell.row_index + 1} defines a value at cell {self._cell_ref(cell)} but there "
            "is no header in that column for its target."
        )

    def warn_non_blank_cell_after_operations_section(self, cell: SheetCell) -> None:
        self._warnings.append(
            f"Row {cell.row_index + 1} should be blank as it is after the final section "
            f"delimiter, but cell {self._cell_ref(cell)} is not blank; it will not be included."
        )

    def _cell_ref(self, cell: SheetCell) -> str:
        if not self.include_cell_values:
            return cell.coordinate
        return f"{cell.coordinate}['{cell_text(cell)}']"

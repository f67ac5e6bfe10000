"""Workbook and ``.idmunit`` directory conversion."""

from .conversion_contracts import (
    MANIFEST_FILE_NAME,
    SCHEMA_VERSION,
    SUPPORTED_WORKBOOK_TYPES,
    TEST_FOLDER_EXTENSION,
    IdmUnitDirectoryContents,
    SheetOutcome,
    WorkbookParseOutcome,
)
from .conversion_log import NO_PROBLEMS_MESSAGE, render_conversion_log, write_conversion_log
from .excel_to_json import (
    WorkbookConversionError,
    convert_workbook_to_tests,
    discover_workbooks,
    idmunit_directory_for,
    iter_sheet_outcomes,
    load_test_workbook,
    write_test_directory,
)
from .json_to_excel import (
    WorkbookWriteError,
    discover_test_directories,
    read_test_directory,
    workbook_path_for,
    write_tests_workbook,
)

__all__ = [
    "MANIFEST_FILE_NAME",
    "NO_PROBLEMS_MESSAGE",
    "SCHEMA_VERSION",
    "SUPPORTED_WORKBOOK_TYPES",
    "TEST_FOLDER_EXTENSION",
    "IdmUnitDirectoryContents",
    "SheetOutcome",
    "WorkbookConversionError",
    "WorkbookParseOutcome",
    "WorkbookWriteError",
    "convert_workbook_to_tests",
    "discover_test_directories",
    "discover_workbooks",
    "idmunit_directory_for",
    "iter_sheet_outcomes",
    "load_test_workbook",
    "read_test_directory",
    "render_conversion_log",
    "workbook_path_for",
    "write_conversion_log",
    "write_test_directory",
    "write_tests_workbook",
]

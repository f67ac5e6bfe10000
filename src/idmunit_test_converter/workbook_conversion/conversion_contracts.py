"""Workbook conversion entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from idmunit_test_converter.model import IdmUnitTest

TEST_FOLDER_EXTENSION = ".idmunit"
MANIFEST_FILE_NAME = "manifest.idmunit.json"
SCHEMA_VERSION = "1.0"
SCHEMA_VERSION_KEY = "schemaVersion"
WORKBOOK_TYPE_KEY = "workbookType"
SHEET_ORDER_KEY = "sheets"
SUPPORTED_WORKBOOK_TYPES: tuple[str, ...] = ("xlsx",)


@dataclass(frozen=True)
class SheetOutcome:
    """Result of converting one sheet: a test, or the fatal error message."""

    sheet_name: str
    test: IdmUnitTest | None
    warnings: tuple[str, ...] = ()
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class WorkbookParseOutcome:
    """Per-sheet results for one workbook, in sheet order.

    ``error`` is set when the workbook itself could not be read or its test
    directory could not be written.
    """

    workbook_path: Path
    sheets: tuple[SheetOutcome, ...]
    error: str | None = None

    @property
    def tests(self) -> tuple[IdmUnitTest, ...]:
        return tuple(sheet.test for sheet in self.sheets if sheet.test is not None)

    @property
    def has_errors(self) -> bool:
        return self.error is not None or any(sheet.failed for sheet in self.sheets)

    @property
    def has_problems(self) -> bool:
        return self.has_errors or any(sheet.warnings for sheet in self.sheets)

    @property
    def warning_count(self) -> int:
        return sum(len(sheet.warnings) for sheet in self.sheets)


@dataclass(frozen=True)
class IdmUnitDirectoryContents:
    """Tests read back from a ``.idmunit`` directory, in manifest order."""

    directory: Path
    workbook_type: str
    tests: tuple[IdmUnitTest, ...]

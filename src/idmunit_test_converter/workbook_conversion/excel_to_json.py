"""Workbook to ``.idmunit`` JSON directory conversion."""

from __future__ import annotations

import json
import logging
import shutil
import zipfile
from collections.abc import Iterator
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from idmunit_test_converter.errors import ConversionError, SheetConversionError
from idmunit_test_converter.lint_reporting import LintReporter
from idmunit_test_converter.model import dumps_test
from idmunit_test_converter.sheet_access.openpyxl_sheets import OpenpyxlSheet
from idmunit_test_converter.sheet_parsing import parse_sheet

from .conversion_contracts import (
    MANIFEST_FILE_NAME,
    SCHEMA_VERSION,
    SCHEMA_VERSION_KEY,
    SHEET_ORDER_KEY,
    SUPPORTED_WORKBOOK_TYPES,
    TEST_FOLDER_EXTENSION,
    WORKBOOK_TYPE_KEY,
    SheetOutcome,
    WorkbookParseOutcome,
)

_LOGGER = logging.getLogger(__name__)


class WorkbookConversionError(ConversionError):
    """Raised when a workbook or test directory cannot be read or written."""


def discover_workbooks(test_dir: Path | str) -> list[Path]:
    """Return convertible workbooks directly inside ``test_dir``, reverse name order."""
    directory = Path(test_dir)
    return sorted(
        (
            path
            for path in directory.iterdir()
            if path.is_file()
            and path.suffix.lower().lstrip(".") in SUPPORTED_WORKBOOK_TYPES
            and not path.name.startswith("~$")
        ),
        reverse=True,
    )


def idmunit_directory_for(workbook_path: Path | str, suffix: str = "") -> Path:
    """Return the ``.idmunit`` directory path a workbook converts into."""
    path = Path(workbook_path)
    return path.with_name(f"{path.stem}{suffix}{TEST_FOLDER_EXTENSION}")


def load_test_workbook(workbook_path: Path | str) -> Workbook:
    """Open a workbook keeping formula source text.

    Raises:
      WorkbookConversionError: If the file is missing or is not a workbook.
    """
    path = Path(workbook_path)
    if not path.exists():
        raise WorkbookConversionError(f"Workbook not found: {path}")
    try:
        return load_workbook(path, data_only=False)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise WorkbookConversionError(f"Failed to open workbook '{path}': {exc}") from exc


def iter_sheet_outcomes(
    workbook: Workbook, *, include_cell_values: bool = False
) -> Iterator[SheetOutcome]:
    """Parse each worksheet in order.

    A fatal error in one sheet is recorded in that sheet's outcome and the
    remaining sheets are still parsed.
    """
    reporter = LintReporter(include_cell_values=include_cell_values)
    for worksheet in workbook.worksheets:
        yield _convert_sheet(OpenpyxlSheet(worksheet), reporter)


def convert_workbook_to_tests(
    workbook_path: Path | str, *, include_cell_values: bool = False
) -> WorkbookParseOutcome:
    """Parse every sheet of a workbook file."""
    path = Path(workbook_path)
    workbook = load_test_workbook(path)
    sheets = tuple(iter_sheet_outcomes(workbook, include_cell_values=include_cell_values))
    return WorkbookParseOutcome(workbook_path=path, sheets=sheets)


def write_test_directory(outcome: WorkbookParseOutcome, directory: Path | str) -> Path:
    """Write the manifest and one JSON file per test, replacing ``directory``.

    Raises:
      WorkbookConversionError: If any sheet of the workbook failed to parse.
    """
    if outcome.has_errors:
        raise WorkbookConversionError(
            f"Workbook '{outcome.workbook_path.name}' has sheets with errors; "
            "no test directory written."
        )
    destination = Path(directory)
    if destination.exists():
        shutil.rmtree(destination)
    destination.mkdir(parents=True)
    tests = outcome.tests
    manifest = {
        SCHEMA_VERSION_KEY: SCHEMA_VERSION,
        WORKBOOK_TYPE_KEY: outcome.workbook_path.suffix.lower().lstrip("."),
        SHEET_ORDER_KEY: [test.name for test in tests],
    }
    (destination / MANIFEST_FILE_NAME).write_text(
        json.dumps(manifest, indent=2) + "\n", encoding="utf-8"
    )
    for test in tests:
        (destination / f"{test.name}.json").write_text(dumps_test(test), encoding="utf-8")
    _LOGGER.info("Wrote %d tests to %s", len(tests), destination)
    return destination


def _convert_sheet(sheet: OpenpyxlSheet, reporter: LintReporter) -> SheetOutcome:
    try:
        result = parse_sheet(sheet, reporter)
    except SheetConversionError as exc:
        _LOGGER.info("Sheet %s failed to convert: %s", sheet.name, exc)
        return SheetOutcome(sheet_name=sheet.name, test=None, error=str(exc))
    return SheetOutcome(sheet_name=sheet.name, test=result.test, warnings=result.warnings)

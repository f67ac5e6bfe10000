"""``.idmunit`` JSON directory to workbook conversion."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook

from idmunit_test_converter.errors import SheetWriteError
from idmunit_test_converter.model import IdmUnitTest, ModelFormatError, loads_test
from idmunit_test_converter.sheet_access.openpyxl_sheets import OpenpyxlSheet
from idmunit_test_converter.sheet_writing import write_test_sheet
from idmunit_test_converter.sheet_writing.cell_styles import register_cell_styles

from .conversion_contracts import (
    MANIFEST_FILE_NAME,
    SHEET_ORDER_KEY,
    SUPPORTED_WORKBOOK_TYPES,
    TEST_FOLDER_EXTENSION,
    WORKBOOK_TYPE_KEY,
    IdmUnitDirectoryContents,
)
from .excel_to_json import WorkbookConversionError

_LOGGER = logging.getLogger(__name__)


def discover_test_directories(test_dir: Path | str) -> list[Path]:
    """Return ``.idmunit`` directories directly inside ``test_dir``, reverse name order."""
    directory = Path(test_dir)
    return sorted(
        (
            path
            for path in directory.iterdir()
            if path.is_dir() and path.name.endswith(TEST_FOLDER_EXTENSION)
        ),
        reverse=True,
    )


def read_test_directory(directory: Path | str) -> IdmUnitDirectoryContents:
    """Read the manifest and every test it lists, in manifest order."""
    source = Path(directory)
    manifest = _read_manifest(source)
    workbook_type = manifest.get(WORKBOOK_TYPE_KEY)
    if not isinstance(workbook_type, str) or not workbook_type:
        raise WorkbookConversionError(
            f"Failed to read original workbook type from '{MANIFEST_FILE_NAME}' "
            f"for test '{source}'."
        )
    sheet_names = manifest.get(SHEET_ORDER_KEY)
    if not isinstance(sheet_names, list) or not all(isinstance(n, str) for n in sheet_names):
        raise WorkbookConversionError(
            f"Failed to read sheet order from '{MANIFEST_FILE_NAME}', for test '{source}'."
        )
    tests = tuple(_read_test(source / f"{name}.json") for name in sheet_names)
    return IdmUnitDirectoryContents(directory=source, workbook_type=workbook_type, tests=tests)


def workbook_path_for(directory: Path | str, workbook_type: str, suffix: str = "") -> Path:
    """Return the workbook path a ``.idmunit`` directory converts back into."""
    source = Path(directory)
    base_name = source.name.removesuffix(TEST_FOLDER_EXTENSION)
    return source.with_name(f"{base_name}{suffix}.{workbook_type}")


class WorkbookWriteError(WorkbookConversionError):
    """Raised when one or more tests could not be laid out as sheets.

    ``failures`` pairs each failed test name with its error message, in
    workbook order.
    """

    def __init__(self, output_path: Path, failures: Sequence[tuple[str, str]]) -> None:
        self.output_path = output_path
        self.failures = tuple(failures)
        details = "\n".join(f"  sheet '{name}': {message}" for name, message in self.failures)
        super().__init__(f"Workbook '{output_path.name}' was not written:\n{details}")


def write_tests_workbook(tests: Sequence[IdmUnitTest], output_path: Path | str) -> Path:
    """Write one styled sheet per test into a new workbook.

    Every test is laid out even when an earlier one fails, so all failing
    sheets are reported together. The workbook is only saved when every
    sheet was written.

    Raises:
      WorkbookConversionError: If the workbook type cannot be written.
      WorkbookWriteError: If a test references undefined connectors or attributes.
    """
    output = Path(output_path)
    workbook_type = output.suffix.lower().lstrip(".")
    if workbook_type not in SUPPORTED_WORKBOOK_TYPES:
        raise WorkbookConversionError(
            f"Cannot write '{output.name}': workbook type '{workbook_type}' is not supported."
        )
    workbook = Workbook()
    workbook.remove(workbook.active)
    register_cell_styles(workbook)
    failures: list[tuple[str, str]] = []
    for test in tests:
        worksheet = workbook.create_sheet(title=test.name)
        try:
            write_test_sheet(OpenpyxlSheet(worksheet), test)
        except SheetWriteError as exc:
            _LOGGER.debug("Sheet %s of %s failed: %s", test.name, output.name, exc)
            failures.append((test.name, str(exc)))
    if failures:
        raise WorkbookWriteError(output, failures)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    _LOGGER.info("Wrote %d sheets to %s", len(tests), output)
    return output


def _read_manifest(directory: Path) -> dict[str, Any]:
    manifest_path = directory / MANIFEST_FILE_NAME
    if not manifest_path.exists():
        raise WorkbookConversionError(f"Manifest file not found: {manifest_path}")
    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise WorkbookConversionError(f"Invalid manifest '{manifest_path}': {exc}") from exc
    if not isinstance(manifest, dict):
        raise WorkbookConversionError(f"Manifest '{manifest_path}' must be a JSON object.")
    return manifest


def _read_test(path: Path) -> IdmUnitTest:
    if not path.exists():
        raise WorkbookConversionError(f"Test file not found: {path}")
    try:
        return loads_test(path.read_text(encoding="utf-8"))
    except ModelFormatError as exc:
        raise WorkbookConversionError(f"Invalid test file '{path}': {exc}") from exc

"""JSON directory to workbook conversion tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from idmunit_test_converter.model import (
    Connector,
    ConnectorAttribute,
    IdmUnitTest,
    Operation,
    OperationData,
    dumps_test,
)
from idmunit_test_converter.workbook_conversion import (
    MANIFEST_FILE_NAME,
    WorkbookConversionError,
    WorkbookWriteError,
    discover_test_directories,
    read_test_directory,
    workbook_path_for,
    write_tests_workbook,
)
from openpyxl import load_workbook


def _test(name: str) -> IdmUnitTest:
    return IdmUnitTest(
        name=name,
        title=f"{name} title",
        desc="description",
        connectors=(Connector("AD", (ConnectorAttribute("cn", 0),)),),
        operations=(
            Operation(
                comment="",
                operation="addObject",
                target="AD",
                wait_interval="0",
                retry_count="0",
                disabled="false",
                failure_expected="false",
                data=(OperationData("cn", ("jdoe",)),),
            ),
        ),
    )


def _write_directory(path: Path, manifest: object, tests: list[IdmUnitTest]) -> Path:
    path.mkdir()
    (path / MANIFEST_FILE_NAME).write_text(json.dumps(manifest), encoding="utf-8")
    for test in tests:
        (path / f"{test.name}.json").write_text(dumps_test(test), encoding="utf-8")
    return path


def test_discover_test_directories_lists_idmunit_folders_in_reverse_order(tmp_path: Path) -> None:
    for name in ("A.idmunit", "B.idmunit", "other"):
        (tmp_path / name).mkdir()
    (tmp_path / "C.idmunit").write_text("not a directory", encoding="utf-8")

    assert [path.name for path in discover_test_directories(tmp_path)] == [
        "B.idmunit",
        "A.idmunit",
    ]


def test_read_test_directory_follows_manifest_sheet_order(tmp_path: Path) -> None:
    directory = _write_directory(
        tmp_path / "Users.idmunit",
        {"schemaVersion": "1.0", "workbookType": "xlsx", "sheets": ["Second", "First"]},
        [_test("First"), _test("Second")],
    )

    contents = read_test_directory(directory)

    assert contents.directory == directory
    assert contents.workbook_type == "xlsx"
    assert [test.name for test in contents.tests] == ["Second", "First"]
    assert contents.tests[1] == _test("First")


@pytest.mark.parametrize(
    ("manifest", "message"),
    [
        ({"schemaVersion": "1.0", "sheets": []}, "original workbook type"),
        ({"workbookType": "xlsx"}, "sheet order"),
        ({"workbookType": "xlsx", "sheets": "First"}, "sheet order"),
        ([], "must be a JSON object"),
        ({"workbookType": "xlsx", "sheets": ["Missing"]}, "Test file not found"),
    ],
)
def test_read_test_directory_rejects_bad_manifests(
    tmp_path: Path, manifest: object, message: str
) -> None:
    directory = _write_directory(tmp_path / "Users.idmunit", manifest, [])

    with pytest.raises(WorkbookConversionError, match=message):
        read_test_directory(directory)


def test_read_test_directory_reports_missing_manifest_and_bad_tests(tmp_path: Path) -> None:
    empty = tmp_path / "Empty.idmunit"
    empty.mkdir()
    with pytest.raises(WorkbookConversionError, match="Manifest file not found"):
        read_test_directory(empty)

    directory = _write_directory(
        tmp_path / "Users.idmunit", {"workbookType": "xlsx", "sheets": ["Bad"]}, []
    )
    (directory / "Bad.json").write_text('{"title": "no name"}', encoding="utf-8")
    with pytest.raises(WorkbookConversionError, match="Invalid test file"):
        read_test_directory(directory)


def test_workbook_path_for_uses_workbook_type_and_suffix() -> None:
    directory = Path("tests") / "Users.idmunit"

    assert workbook_path_for(directory, "xlsx") == Path("tests") / "Users.xlsx"
    assert workbook_path_for(directory, "xlsx", "-new") == Path("tests") / "Users-new.xlsx"


def test_write_tests_workbook_creates_one_sheet_per_test(tmp_path: Path) -> None:
    output = tmp_path / "out" / "Users.xlsx"

    write_tests_workbook([_test("First"), _test("Second")], output)

    workbook = load_workbook(output)
    assert workbook.sheetnames == ["First", "Second"]
    sheet = workbook["First"]
    assert sheet["A1"].value == "First title"
    assert sheet["A1"].style == "idmunit-title"
    assert sheet["C4"].value == "//Target"
    assert sheet["H7"].value == "jdoe"


def test_write_tests_workbook_rejects_unsupported_types(tmp_path: Path) -> None:
    with pytest.raises(WorkbookConversionError, match="workbook type 'xls' is not supported"):
        write_tests_workbook([_test("First")], tmp_path / "Users.xls")


def test_write_tests_workbook_reports_every_failing_sheet(tmp_path: Path) -> None:
    broken = IdmUnitTest(
        name="Broken", operations=(Operation(operation="addObject", target="Nowhere"),)
    )
    unknown_attribute = IdmUnitTest(
        name="UnknownAttribute",
        connectors=(Connector("AD", (ConnectorAttribute("cn", 0),)),),
        operations=(
            Operation(operation="addObject", target="AD", data=(OperationData("uid", ("x",)),)),
        ),
    )
    output = tmp_path / "Broken.xlsx"

    with pytest.raises(WorkbookWriteError) as excinfo:
        write_tests_workbook([broken, _test("Fine"), unknown_attribute], output)

    assert [name for name, _ in excinfo.value.failures] == ["Broken", "UnknownAttribute"]
    message = str(excinfo.value)
    assert message.startswith("Workbook 'Broken.xlsx' was not written:")
    assert (
        "sheet 'Broken': Operation on row 5 targets connector 'Nowhere', "
        "which the test does not define." in message
    )
    assert "sheet 'UnknownAttribute': " in message
    assert not output.exists()

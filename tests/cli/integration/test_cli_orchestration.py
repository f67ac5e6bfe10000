"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from idmunit_test_converter.cli import cli
from idmunit_test_converter.workbook_conversion import MANIFEST_FILE_NAME
from openpyxl import Workbook, load_workbook

CONFIG_HEADERS = [
    "//Comment",
    "//Operation",
    "//Target",
    "//WaitInterval",
    "//RetryCount",
    "//DisableStep",
    "//ExpectFailure",
]
VALID_ROWS = [
    ["Add user"],
    ["Adds a user"],
    ["---"],
    [*CONFIG_HEADERS, "cn"],
    [None, None, "AD", None, None, None, None, "cn"],
    ["---"],
    ["Create", "addObject", "AD", 0, 0, "false", "false", "jdoe"],
    ["---"],
]


def _write_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        worksheet = workbook.create_sheet(name)
        for row in rows:
            worksheet.append(row)
    workbook.save(path)
    return path


@pytest.fixture(autouse=True)
def _isolated_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def _test_dir(tmp_path: Path) -> Path:
    test_dir = tmp_path / "tests"
    test_dir.mkdir()
    _write_workbook(
        test_dir / "Users.xlsx",
        {"AddUser": VALID_ROWS, "Trailing": [*VALID_ROWS, ["leftover"]]},
    )
    _write_workbook(
        test_dir / "Broken.xlsx",
        {"Fine": VALID_ROWS, "Broken": [["Broken"], ["---"], ["//Target"], ["---"]]},
    )
    return test_dir


def test_excel2json_writes_directories_and_log(tmp_path: Path) -> None:
    test_dir = _test_dir(tmp_path)
    log_file = tmp_path / "logs" / "converter.log"
    runner = CliRunner()

    result = runner.invoke(
        cli, ["excel2json", "--test-dir", str(test_dir), "--log-file", str(log_file)]
    )

    assert result.exit_code == 0, result.output
    assert "At least one of the workbooks contained problems" in result.output
    manifest = json.loads((test_dir / "Users.idmunit" / MANIFEST_FILE_NAME).read_text("utf-8"))
    assert manifest["sheets"] == ["AddUser", "Trailing"]
    assert (test_dir / "Users.idmunit" / "AddUser.json").exists()
    assert not (test_dir / "Broken.idmunit").exists()
    log_text = log_file.read_text(encoding="utf-8")
    assert log_text.index("Users.xlsx") < log_text.index("Broken.xlsx")
    assert "|-- Trailing\n    |-- [WARN] Row 9 should be blank" in log_text
    assert "|-- Broken\n    |-- [ERROR] IdmUnit Test sheets must contain" in log_text


def test_excel2json_lint_only_writes_log_but_no_tests(tmp_path: Path) -> None:
    test_dir = _test_dir(tmp_path)
    log_file = tmp_path / "converter.log"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["excel2json", "--test-dir", str(test_dir), "--log-file", str(log_file), "--lint", "-v"],
    )

    assert result.exit_code == 0, result.output
    assert not list(test_dir.glob("*.idmunit"))
    assert "A9['leftover']" in log_file.read_text(encoding="utf-8")


def test_excel2json_asks_before_overwriting(tmp_path: Path) -> None:
    test_dir = tmp_path / "tests"
    test_dir.mkdir()
    _write_workbook(test_dir / "Users.xlsx", {"AddUser": VALID_ROWS})
    existing = test_dir / "Users.idmunit"
    existing.mkdir()
    (existing / "keep.txt").write_text("keep", encoding="utf-8")
    log_file = tmp_path / "converter.log"
    runner = CliRunner()

    declined = runner.invoke(
        cli,
        ["excel2json", "--test-dir", str(test_dir), "--log-file", str(log_file)],
        input="n\n",
    )

    assert declined.exit_code == 1
    assert "Overwrite them?" in declined.output
    assert (existing / "keep.txt").exists()

    forced = runner.invoke(
        cli, ["excel2json", "--test-dir", str(test_dir), "--log-file", str(log_file), "--ow"]
    )

    assert forced.exit_code == 0, forced.output
    assert not (existing / "keep.txt").exists()
    assert (existing / "AddUser.json").exists()
    assert log_file.read_text(encoding="utf-8") == (
        "All tests converted with no warnings or errors.\n"
    )


@pytest.mark.filterwarnings("error:.*Click 9.0:DeprecationWarning")
def test_json2excel_rebuilds_workbooks_with_suffix(tmp_path: Path) -> None:
    test_dir = tmp_path / "tests"
    test_dir.mkdir()
    _write_workbook(test_dir / "Users.xlsx", {"AddUser": VALID_ROWS})
    runner = CliRunner()
    converted = runner.invoke(
        cli,
        ["excel2json", "--test-dir", str(test_dir), "--log-file", str(tmp_path / "c.log")],
    )
    assert converted.exit_code == 0, converted.output

    result = runner.invoke(cli, ["json2excel", "--test-dir", str(test_dir), "--suffix", "-copy"])

    assert result.exit_code == 0, result.output
    rebuilt = test_dir / "Users-copy.xlsx"
    assert str(rebuilt) in result.output
    sheet = load_workbook(rebuilt)["AddUser"]
    assert sheet["A1"].value == "Add user"
    assert sheet["H7"].value == "jdoe"


def test_settings_come_from_configuration_file(tmp_path: Path) -> None:
    test_dir = tmp_path / "suite"
    test_dir.mkdir()
    _write_workbook(test_dir / "Users.xlsx", {"AddUser": VALID_ROWS})
    config_path = tmp_path / "idmunit-converter.yaml"
    config_path.write_text(
        "test_dir: suite\nlog_file: out/converter.log\nsuffix: -json\n", encoding="utf-8"
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["excel2json"])

    assert result.exit_code == 0, result.output
    assert (test_dir / "Users-json.idmunit" / MANIFEST_FILE_NAME).exists()
    assert (tmp_path / "out" / "converter.log").exists()


def test_generate_config_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["generate-config"])

    assert result.exit_code == 0, result.output
    written = tmp_path / "idmunit-converter.yaml"
    assert written.exists()
    assert str(written.resolve()) in result.output


def test_excel2json_continues_past_unreadable_workbook(tmp_path: Path) -> None:
    test_dir = tmp_path / "tests"
    test_dir.mkdir()
    _write_workbook(test_dir / "Users.xlsx", {"AddUser": VALID_ROWS})
    (test_dir / "Corrupt.xlsx").write_text("not a workbook", encoding="utf-8")
    log_file = tmp_path / "converter.log"
    runner = CliRunner()

    result = runner.invoke(
        cli, ["excel2json", "--test-dir", str(test_dir), "--log-file", str(log_file)]
    )

    assert result.exit_code == 1
    assert "Failed to convert workbooks: Corrupt.xlsx" in str(result.exception)
    assert (test_dir / "Users.idmunit" / "AddUser.json").exists()
    assert not (test_dir / "Corrupt.idmunit").exists()
    log_text = log_file.read_text(encoding="utf-8")
    assert "Corrupt.xlsx\n|-- [ERROR] Failed to open workbook" in log_text


def test_json2excel_converts_remaining_directories_when_one_fails(tmp_path: Path) -> None:
    test_dir = tmp_path / "tests"
    test_dir.mkdir()
    _write_workbook(test_dir / "A.xlsx", {"AddUser": VALID_ROWS})
    runner = CliRunner()
    converted = runner.invoke(
        cli,
        ["excel2json", "--test-dir", str(test_dir), "--log-file", str(tmp_path / "c.log")],
    )
    assert converted.exit_code == 0, converted.output
    (test_dir / "A.xlsx").unlink()
    broken_dir = test_dir / "Z.idmunit"
    broken_dir.mkdir()
    (broken_dir / MANIFEST_FILE_NAME).write_text(
        json.dumps({"schemaVersion": "1.0", "workbookType": "xlsx", "sheets": ["Orphan"]}),
        encoding="utf-8",
    )
    (broken_dir / "Orphan.json").write_text(
        json.dumps(
            {"name": "Orphan", "operations": [{"operation": "addObject", "target": "Missing"}]}
        ),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["json2excel", "--test-dir", str(test_dir), "--ow"])

    assert result.exit_code == 1
    assert (test_dir / "A.xlsx").exists()
    assert not (test_dir / "Z.xlsx").exists()
    assert f"Failed to convert '{broken_dir}'" in result.output
    assert "sheet 'Orphan': Operation on row 5 targets connector 'Missing'" in result.output
    assert "Failed to convert test directories: Z.idmunit" in str(result.exception)

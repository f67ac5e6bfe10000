"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any

import click

from idmunit_test_converter.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    ConverterSettings,
    resolve_settings,
    write_placeholder_configuration,
)
from idmunit_test_converter.errors import ConversionError
from idmunit_test_converter.workbook_conversion import (
    IdmUnitDirectoryContents,
    SheetOutcome,
    WorkbookParseOutcome,
    discover_test_directories,
    discover_workbooks,
    idmunit_directory_for,
    iter_sheet_outcomes,
    load_test_workbook,
    read_test_directory,
    workbook_path_for,
    write_conversion_log,
    write_test_directory,
    write_tests_workbook,
)


class CliError(Exception):
    """Custom CLI error."""


_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=f"Path to the YAML converter configuration. [default: ./{DEFAULT_CONFIG_FILENAME}]",
)
_TEST_DIR_OPTION = click.option(
    "--test-dir",
    "test_dir",
    required=False,
    type=click.Path(path_type=str),
    help="The path to the directory containing the test workbooks. [default: test/org/idmunit]",
)
_SUFFIX_OPTION = click.option(
    "--suffix",
    "suffix",
    required=False,
    help="Set a suffix that will be appended to the filename of all converted tests.",
)
_OVERWRITE_OPTION = click.option(
    "--ow",
    "--overwrite",
    "overwrite",
    is_flag=True,
    default=False,
    help="Overwrite output files even if they already exist.",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="idmunit-test-converter")
def cli() -> None:
    """Convert IdMUnit test workbooks to JSON and back."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML converter configuration to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML converter configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="excel2json")
@_CONFIG_OPTION
@_TEST_DIR_OPTION
@click.option(
    "--log-file",
    "log_file",
    required=False,
    type=click.Path(path_type=str),
    help="The path to write the output errors and warnings to.",
)
@click.option(
    "-v",
    "--verbose",
    "verbose",
    is_flag=True,
    default=False,
    help="Include the cell's contents in log messages that reference a cell.",
)
@_SUFFIX_OPTION
@_OVERWRITE_OPTION
@click.option(
    "-l",
    "--lint",
    "--lint-only",
    "lint_only",
    is_flag=True,
    default=False,
    help="Only check the workbooks for warnings and errors; write no converted files.",
)
def excel2json(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    config_path: str | None,
    test_dir: str | None,
    log_file: str | None,
    verbose: bool,
    suffix: str | None,
    overwrite: bool,
    lint_only: bool,
) -> None:
    """Convert IdMUnit Excel workbooks into JSON test directories."""
    settings = _resolve_settings(
        config_path,
        test_dir=test_dir,
        log_file=log_file,
        suffix=suffix,
        verbose=verbose,
        overwrite=overwrite,
    )
    _configure_logging(settings.verbose)
    _require_directory(settings.test_dir)
    try:
        workbooks = discover_workbooks(settings.test_dir)
    except OSError as exc:
        raise CliError(str(exc)) from exc
    if not lint_only and not settings.overwrite:
        _confirm_overwrite(idmunit_directory_for(path, settings.suffix) for path in workbooks)

    outcomes: list[WorkbookParseOutcome] = []
    for workbook_path in workbooks:
        outcome = _parse_workbook(workbook_path, settings)
        if not lint_only and not outcome.has_errors:
            outcome = _write_directory(outcome, settings)
        outcomes.append(outcome)
    try:
        write_conversion_log(settings.log_file, outcomes)
    except OSError as exc:
        raise CliError(f"Failed to write log file '{settings.log_file}': {exc}") from exc

    if any(outcome.has_problems for outcome in outcomes):
        click.secho(
            "\nAt least one of the workbooks contained problems. "
            f"See the log file '{settings.log_file}' for more details.",
            fg="yellow",
            err=True,
        )
    unconverted = [outcome.workbook_path.name for outcome in outcomes if outcome.error]
    if unconverted:
        raise CliError(f"Failed to convert workbooks: {', '.join(unconverted)}")


@cli.command(name="json2excel")
@_CONFIG_OPTION
@_TEST_DIR_OPTION
@_SUFFIX_OPTION
@_OVERWRITE_OPTION
def json2excel(
    config_path: str | None, test_dir: str | None, suffix: str | None, overwrite: bool
) -> None:
    """Convert IdMUnit JSON test directories into Excel workbooks."""
    settings = _resolve_settings(
        config_path, test_dir=test_dir, suffix=suffix, overwrite=overwrite
    )
    _configure_logging(settings.verbose)
    _require_directory(settings.test_dir)
    try:
        directories = discover_test_directories(settings.test_dir)
    except OSError as exc:
        raise CliError(str(exc)) from exc

    failures: list[tuple[Path, str]] = []
    targets: list[tuple[IdmUnitDirectoryContents, Path]] = []
    for directory in directories:
        try:
            contents = read_test_directory(directory)
        except ConversionError as exc:
            failures.append((directory, str(exc)))
            continue
        output_path = workbook_path_for(directory, contents.workbook_type, settings.suffix)
        targets.append((contents, output_path))
    if not settings.overwrite:
        _confirm_overwrite(output_path for _, output_path in targets)

    written: list[Path] = []
    with click.progressbar(
        targets,
        label="Writing workbooks",
        item_show_func=lambda item: item[1].name if item else None,
        file=sys.stderr,
    ) as progress:
        for contents, output_path in progress:
            try:
                written.append(write_tests_workbook(contents.tests, output_path))
            except (ConversionError, OSError) as exc:
                failures.append((contents.directory, str(exc)))
    for output_path in written:
        click.echo(str(output_path))
    if failures:
        for directory, message in failures:
            click.secho(f"Failed to convert '{directory}': {message}", fg="red", err=True)
        names = ", ".join(directory.name for directory, _ in failures)
        raise CliError(f"Failed to convert test directories: {names}")


def _resolve_settings(config_path: str | None, **overrides: Any) -> ConverterSettings:
    try:
        return resolve_settings(config_path, **overrides)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _require_directory(path: Path) -> None:
    if not path.is_dir():
        raise CliError(f"Test directory does not exist or is not a directory: {path}")


def _confirm_overwrite(paths: Iterable[Path]) -> None:
    existing = [path for path in paths if path.exists()]
    if not existing:
        return
    listing = "\n".join(f"  {path}" for path in existing)
    click.confirm(
        f"The following files already exist:\n{listing}\nOverwrite them?",
        abort=True,
        err=True,
    )


def _parse_workbook(workbook_path: Path, settings: ConverterSettings) -> WorkbookParseOutcome:
    click.echo(workbook_path.name, err=True)
    try:
        workbook = load_test_workbook(workbook_path)
    except ConversionError as exc:
        click.secho("Failed. Could not open workbook.", fg="red", err=True)
        return WorkbookParseOutcome(workbook_path=workbook_path, sheets=(), error=str(exc))
    sheets: list[SheetOutcome] = []
    with click.progressbar(
        length=len(workbook.worksheets),
        label="Converting sheets",
        file=sys.stderr,
    ) as progress:
        for sheet in iter_sheet_outcomes(workbook, include_cell_values=settings.verbose):
            sheets.append(sheet)
            progress.update(1)
    outcome = WorkbookParseOutcome(workbook_path=workbook_path, sheets=tuple(sheets))
    if outcome.has_errors:
        click.secho("Failed. Error in workbook.", fg="red", err=True)
    elif outcome.warning_count:
        noun = "warning" if outcome.warning_count == 1 else "warnings"
        click.secho(f"{outcome.warning_count} {noun}.", fg="yellow", err=True)
    return outcome


def _write_directory(
    outcome: WorkbookParseOutcome, settings: ConverterSettings
) -> WorkbookParseOutcome:
    directory = idmunit_directory_for(outcome.workbook_path, settings.suffix)
    try:
        write_test_directory(outcome, directory)
    except (ConversionError, OSError) as exc:
        click.secho(f"Failed to write '{directory}'.", fg="red", err=True)
        return replace(outcome, error=f"Failed to write test directory '{directory}': {exc}")
    return outcome


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

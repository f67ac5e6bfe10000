"""Plain-text conversion log."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .conversion_contracts import WorkbookParseOutcome

NO_PROBLEMS_MESSAGE = "All tests converted with no warnings or errors."


def render_conversion_log(outcomes: Sequence[WorkbookParseOutcome]) -> str:
    """Render warnings and errors grouped by workbook and sheet.

    Example::

        Users.xlsx
        |-- AddUser
            |-- [WARN] No title for this test specified in cell A1.
    """
    blocks: list[str] = []
    for outcome in outcomes:
        if not outcome.has_problems:
            continue
        lines = [outcome.workbook_path.name]
        if outcome.error is not None:
            lines.append(f"|-- [ERROR] {outcome.error}")
        for sheet in outcome.sheets:
            if not sheet.failed and not sheet.warnings:
                continue
            lines.append(f"|-- {sheet.sheet_name}")
            lines.extend(f"    |-- [WARN] {warning}" for warning in sheet.warnings)
            if sheet.error is not None:
                lines.append(f"    |-- [ERROR] {sheet.error}")
        blocks.append("\n".join(lines))
    if not blocks:
        return NO_PROBLEMS_MESSAGE + "\n"
    return "\n\n".join(blocks) + "\n"


def write_conversion_log(log_path: Path | str, outcomes: Sequence[WorkbookParseOutcome]) -> Path:
    """Write the rendered log, creating parent directories."""
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_conversion_log(outcomes), encoding="utf-8")
    return path

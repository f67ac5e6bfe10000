"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_TEST_DIR = Path("test/org/idmunit")
DEFAULT_LOG_FILE = Path("test/test-converter.log")


@dataclass(frozen=True)
class ConverterSettings:
    """Effective converter settings after file values and overrides are merged."""

    test_dir: Path = DEFAULT_TEST_DIR
    log_file: Path = DEFAULT_LOG_FILE
    suffix: str = ""
    verbose: bool = False
    overwrite: bool = False
    source_path: Path | None = None

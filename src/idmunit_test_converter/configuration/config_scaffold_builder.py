"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "idmunit-converter.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Converter configuration for idmunit-test-converter.
# Every key is optional. Command line options override the values below.
# Relative paths are resolved against the directory of this file.

# Directory holding the test workbooks and their .idmunit directories.
test_dir: "test/org/idmunit"

# Where excel2json writes its warnings and errors.
log_file: "test/test-converter.log"

# Appended to the name of every converted workbook or .idmunit directory.
suffix: ""

# Include cell contents in log messages that reference a cell.
verbose: false

# Replace existing output without asking.
overwrite: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML converter configuration with the built-in defaults and guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the converter configuration scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(
            f"Converter configuration file already exists: {destination.resolve()}"
        )
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()

"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from .config_scaffold_builder import DEFAULT_CONFIG_FILENAME
from .runtime_settings import DEFAULT_LOG_FILE, DEFAULT_TEST_DIR, ConverterSettings

_KNOWN_KEYS = frozenset({"test_dir", "log_file", "suffix", "verbose", "overwrite"})


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> ConverterSettings:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown = sorted(str(key) for key in parsed if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    base_path = path.parent
    return ConverterSettings(
        test_dir=_parse_path(parsed.get("test_dir"), "test_dir", base_path, DEFAULT_TEST_DIR),
        log_file=_parse_path(parsed.get("log_file"), "log_file", base_path, DEFAULT_LOG_FILE),
        suffix=_optional_string(parsed.get("suffix"), "suffix"),
        verbose=_optional_bool(parsed.get("verbose"), "verbose"),
        overwrite=_optional_bool(parsed.get("overwrite"), "overwrite"),
        source_path=path,
    )


def resolve_settings(
    config_path: Path | str | None = None,
    *,
    test_dir: Path | str | None = None,
    log_file: Path | str | None = None,
    suffix: str | None = None,
    verbose: bool = False,
    overwrite: bool = False,
) -> ConverterSettings:
    """Merge the configuration file, if any, with command line overrides.

    Without an explicit ``config_path`` the default configuration file in the
    working directory is used when it exists. Boolean overrides can only turn
    a setting on.
    """
    if config_path is not None:
        settings = load_configuration(config_path)
    elif Path(DEFAULT_CONFIG_FILENAME).exists():
        settings = load_configuration(DEFAULT_CONFIG_FILENAME)
    else:
        settings = ConverterSettings()

    overrides: dict[str, Any] = {}
    if test_dir is not None:
        overrides["test_dir"] = Path(test_dir)
    if log_file is not None:
        overrides["log_file"] = Path(log_file)
    if suffix is not None:
        overrides["suffix"] = suffix
    if verbose:
        overrides["verbose"] = True
    if overwrite:
        overrides["overwrite"] = True
    return replace(settings, **overrides)


def _parse_path(value: Any, field_name: str, base_path: Path, default: Path) -> Path:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{field_name} must be a non-empty string.")
    candidate = Path(value.strip())
    if not candidate.is_absolute():
        return base_path / candidate
    return candidate


def _optional_string(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    return value.strip()


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value

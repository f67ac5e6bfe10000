"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, resolve_settings
from .runtime_settings import DEFAULT_LOG_FILE, DEFAULT_TEST_DIR, ConverterSettings

__all__ = [
    "ConverterSettings",
    "DEFAULT_LOG_FILE",
    "DEFAULT_TEST_DIR",
    "ConfigurationError",
    "load_configuration",
    "resolve_settings",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]

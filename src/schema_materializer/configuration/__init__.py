"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, resolve_log_level
from .runtime_settings import (
    Configuration,
    ConversionSettings,
    LoggingSettings,
    OutputSettings,
    default_configuration,
)

__all__ = [
    "Configuration",
    "ConversionSettings",
    "LoggingSettings",
    "OutputSettings",
    "ConfigurationError",
    "default_configuration",
    "load_configuration",
    "resolve_log_level",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]

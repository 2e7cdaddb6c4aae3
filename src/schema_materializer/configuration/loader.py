"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from schema_materializer.recursive_conversion import MAX_DEPTH_LIMIT

from .runtime_settings import (
    Configuration,
    ConversionSettings,
    LoggingSettings,
    OutputSettings,
)

_VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file; absent sections take defaults."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        conversion=_parse_conversion_section(parsed.get("conversion")),
        output=_parse_output_section(parsed.get("output")),
        logging=_parse_logging_section(parsed.get("logging")),
    )


def _parse_conversion_section(value: Any) -> ConversionSettings:
    section = _optional_mapping(value, "conversion")
    defaults = ConversionSettings()
    max_depth = _require_positive_int(
        section.get("max_depth", defaults.max_depth), "conversion.max_depth"
    )
    if max_depth > MAX_DEPTH_LIMIT:
        raise ConfigurationError(f"conversion.max_depth must not exceed {MAX_DEPTH_LIMIT}.")
    return ConversionSettings(max_depth=max_depth)


def _parse_output_section(value: Any) -> OutputSettings:
    section = _optional_mapping(value, "output")
    defaults = OutputSettings()
    indent = _require_non_negative_int(section.get("indent", defaults.indent), "output.indent")
    return OutputSettings(indent=indent)


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    defaults = LoggingSettings()
    raw_level = _require_non_empty_string(section.get("level", defaults.level), "logging.level")
    level = raw_level.upper()
    level = _LOG_LEVEL_ALIASES.get(level, level)
    if level not in _VALID_LOG_LEVELS:
        raise ConfigurationError(
            f"logging.level must be one of {', '.join(_VALID_LOG_LEVELS)}, got '{raw_level}'."
        )
    return LoggingSettings(level=level)


def resolve_log_level(settings: LoggingSettings) -> int:
    """Map the configured level name onto the `logging` module constant."""
    return logging.getLevelName(settings.level)


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value

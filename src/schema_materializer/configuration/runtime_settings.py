"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from schema_materializer.recursive_conversion import DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class ConversionSettings:
    """Recursive conversion limits."""

    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class OutputSettings:
    """Rendering of converted payloads."""

    indent: int = 2


@dataclass(frozen=True)
class LoggingSettings:
    """Standard-library logging setup for the command line."""

    level: str = "WARNING"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    conversion: ConversionSettings = field(default_factory=ConversionSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def default_configuration() -> Configuration:
    """Return the configuration used when no file is given."""
    return Configuration()

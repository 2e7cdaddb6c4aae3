"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ConversionRequest:
    """Input contract for converting one payload file."""

    input_path: str
    config_path: str | None = None
    output_path: str | None = None


@dataclass(frozen=True)
class MaterializedLocation:
    """One validator found in a converted payload."""

    path: str
    label: str


@dataclass(frozen=True)
class ConversionOutcome:
    """Output contract for one completed conversion."""

    locations: tuple[MaterializedLocation, ...]
    output_path: Path | None


@dataclass(frozen=True)
class ValidationRequest:
    """Input contract for validating one data file against one schema file."""

    schema_path: str
    data_path: str
    config_path: str | None = None


@dataclass(frozen=True)
class ValidationOutcome:
    """Output contract for one validation; `errors` is empty on success."""

    success: bool
    data: Any
    errors: tuple[str, ...]
    indent: int = 2

"""Payload file loading and rendering."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from schema_materializer.recursive_conversion import (
    DEFAULT_MAX_DEPTH,
    recursive_validator_to_json_schema,
)

_YAML_SUFFIXES = (".yaml", ".yml")


class PayloadError(Exception):
    """Raised when a payload file cannot be read or rendered."""


def load_payload(payload_path: Path | str) -> Any:
    """Load a JSON or YAML payload file."""
    path = Path(payload_path)
    if not path.exists():
        raise PayloadError(f"Payload file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PayloadError(f"Cannot read payload file {path}: {exc}") from exc
    if path.suffix.lower() in _YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise PayloadError(f"Invalid YAML payload {path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"Invalid JSON payload {path}: {exc}") from exc


def render_payload(value: Any, *, indent: int = 2, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Serialize a payload to JSON text, rendering validators as tagged schemas."""
    transit = recursive_validator_to_json_schema(value, max_depth=max_depth)
    try:
        return json.dumps(transit, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise PayloadError(f"Payload is not JSON serializable: {exc}") from exc


def write_payload(
    value: Any,
    output_path: Path | str,
    *,
    indent: int = 2,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Path:
    """Write the rendered payload and return the resolved destination."""
    destination = Path(output_path)
    rendered = render_payload(value, indent=indent, max_depth=max_depth)
    destination.write_text(rendered + "\n", encoding="utf-8")
    return destination.resolve()

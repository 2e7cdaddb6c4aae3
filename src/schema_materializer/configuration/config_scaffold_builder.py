"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-materializer.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for schema-materializer.
# Every section is optional; the values below are the defaults.

conversion:
  # Maximum number of nested list/mapping levels walked in one payload.
  # Deeper payloads are rejected instead of exhausting the interpreter stack.
  # At most 500.
  max_depth: 256

output:
  # Indentation of JSON written by `convert --output` and `validate`.
  indent: 2

logging:
  # One of CRITICAL, ERROR, WARNING, INFO, DEBUG.
  level: WARNING
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

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
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()

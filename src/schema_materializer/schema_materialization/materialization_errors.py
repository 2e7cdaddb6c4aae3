"""Schema materialization errors."""

from __future__ import annotations


class MaterializationError(Exception):
    """Raised when a schema document cannot be turned into a usable validator."""


class SchemaCompilationError(MaterializationError):
    """Raised for malformed or unsupported constructs inside a schema document."""

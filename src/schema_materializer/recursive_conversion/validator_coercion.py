"""Coercion of loosely typed schema arguments into validators."""

from __future__ import annotations

from typing import Any

from schema_materializer.schema_classification import is_json_schema_like, is_validator_like
from schema_materializer.schema_materialization import (
    SchemaValidator,
    unsafe_json_schema_to_validator,
)


class SchemaShapeError(ValueError):
    """Raised when a value is neither a validator nor a schema document."""


def coerce_validator(value: Any) -> SchemaValidator:
    """Return a validator for `value`, materializing schema documents on the way."""
    if is_validator_like(value):
        return SchemaValidator.wrap(value)
    if is_json_schema_like(value):
        return unsafe_json_schema_to_validator(value)
    raise SchemaShapeError("Schema must be a validator or a JSON schema object.")

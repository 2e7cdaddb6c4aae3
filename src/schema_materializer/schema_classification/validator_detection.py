"""Detection of values that are already runtime validators."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, TypeAdapter

from schema_materializer.schema_materialization.schema_validator import SchemaValidator


def is_validator_like(value: Any) -> bool:
    """Return whether `value` is an already-built validator.

    Validators are leaves: they are never reinterpreted as schema documents and
    never materialized a second time.
    """
    if isinstance(value, (SchemaValidator, TypeAdapter)):
        return True
    return isinstance(value, type) and issubclass(value, BaseModel)

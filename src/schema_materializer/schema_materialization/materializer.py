"""Turn schema documents into runtime validators."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from .annotation_builder import build_annotation
from .materialization_errors import MaterializationError
from .schema_parser import parse_schema_document
from .schema_validator import SchemaValidator


def unsafe_json_schema_to_validator(schema_document: Any) -> SchemaValidator:
    """Materialize a validator from a schema document.

    The document is trusted: callers are expected to have classified it as
    schema-like already, and nothing here re-checks that. Errors raised while
    parsing the document or building the validator propagate unchanged.

    Raises:
      SchemaCompilationError: If the document uses a malformed or unsupported construct.
      MaterializationError: If the built object is not a usable validator.
    """
    annotation = build_annotation(parse_schema_document(schema_document))
    candidate = SchemaValidator(TypeAdapter(annotation), source=schema_document)
    return _ensure_validator(candidate)


def _ensure_validator(candidate: Any) -> SchemaValidator:
    parse = getattr(candidate, "parse", None)
    if not isinstance(candidate, SchemaValidator) or not callable(parse):
        raise MaterializationError(
            f"Schema compilation produced an unusable validator: {type(candidate).__name__}."
        )
    return candidate

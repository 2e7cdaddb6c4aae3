"""Schema materialization exports."""

from .annotation_builder import build_annotation, json_equal
from .materialization_errors import MaterializationError, SchemaCompilationError
from .materializer import unsafe_json_schema_to_validator
from .schema_parser import parse_schema_document
from .schema_validator import ParseResult, SchemaValidator

__all__ = [
    "MaterializationError",
    "ParseResult",
    "SchemaCompilationError",
    "SchemaValidator",
    "build_annotation",
    "json_equal",
    "parse_schema_document",
    "unsafe_json_schema_to_validator",
]

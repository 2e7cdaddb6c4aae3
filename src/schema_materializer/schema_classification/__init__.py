"""Schema classification exports."""

from .likeness_scoring import (
    JSON_SCHEMA_MARKER_KEY,
    SCHEMA_LIKENESS_THRESHOLD,
    SchemaLikenessReport,
    explain_json_schema_likeness,
    is_json_schema_like,
    score_json_schema_likeness,
)
from .validator_detection import is_validator_like

__all__ = [
    "JSON_SCHEMA_MARKER_KEY",
    "SCHEMA_LIKENESS_THRESHOLD",
    "SchemaLikenessReport",
    "explain_json_schema_likeness",
    "is_json_schema_like",
    "is_validator_like",
    "score_json_schema_likeness",
]

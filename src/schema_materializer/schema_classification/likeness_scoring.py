"""Structural scoring that decides whether a value looks like a JSON schema."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

JSON_SCHEMA_MARKER_KEY = "isJsonSchema"
SCHEMA_LIKENESS_THRESHOLD = 3

KNOWN_SCHEMA_URI_FRAGMENTS = ("json-schema.org",)
RECOGNIZED_TYPES = frozenset(
    ("object", "array", "string", "number", "integer", "boolean", "null")
)
COMPOSITION_KEYWORDS = ("allOf", "anyOf", "oneOf", "not", "$ref", "definitions")

SCHEMA_URI_WEIGHT = 2
RECOGNIZED_TYPE_WEIGHT = 1
OBJECT_COHERENCE_WEIGHT = 1
ARRAY_COHERENCE_WEIGHT = 1
PROPERTIES_WEIGHT = 1
REQUIRED_WEIGHT = 1
COMPOSITION_KEYWORD_WEIGHT = 1
CONFLICTING_SHAPE_PENALTY = -1
CONFLICTING_COMPOSITION_PENALTY = -1


@dataclass(frozen=True)
class SchemaLikenessReport:
    """Outcome of scoring one candidate value."""

    score: int
    signals: tuple[str, ...]
    marker: bool

    @property
    def is_schema_like(self) -> bool:
        return self.marker or self.score >= SCHEMA_LIKENESS_THRESHOLD


def is_json_schema_like(value: Any) -> bool:
    """Return whether `value` structurally resembles a JSON schema document."""
    return explain_json_schema_likeness(value).is_schema_like


def score_json_schema_likeness(value: Any) -> int:
    """Return the additive likeness score; 0 for anything that is not a mapping."""
    return explain_json_schema_likeness(value).score


def explain_json_schema_likeness(value: Any) -> SchemaLikenessReport:
    """Score a candidate and name every signal that contributed."""
    if not isinstance(value, Mapping):
        return SchemaLikenessReport(score=0, signals=(), marker=False)

    if value.get(JSON_SCHEMA_MARKER_KEY) is True:
        return SchemaLikenessReport(score=0, signals=("marker",), marker=True)

    contributions: list[tuple[str, int]] = []

    schema_uri = value.get("$schema")
    if isinstance(schema_uri, str) and any(
        fragment in schema_uri for fragment in KNOWN_SCHEMA_URI_FRAGMENTS
    ):
        contributions.append(("schema_uri", SCHEMA_URI_WEIGHT))

    node_type = value.get("type")
    properties = value.get("properties")
    items = value.get("items")
    if isinstance(node_type, str) and node_type in RECOGNIZED_TYPES:
        contributions.append(("recognized_type", RECOGNIZED_TYPE_WEIGHT))
        if node_type == "object" and isinstance(properties, Mapping):
            contributions.append(("object_coherence", OBJECT_COHERENCE_WEIGHT))
        elif node_type == "array" and isinstance(items, Mapping):
            contributions.append(("array_coherence", ARRAY_COHERENCE_WEIGHT))

    if isinstance(properties, Mapping):
        contributions.append(("properties", PROPERTIES_WEIGHT))
    if _is_ordered_sequence(value.get("required")):
        contributions.append(("required", REQUIRED_WEIGHT))

    for keyword in COMPOSITION_KEYWORDS:
        if keyword in value:
            contributions.append((keyword, COMPOSITION_KEYWORD_WEIGHT))

    if "properties" in value and "items" in value:
        contributions.append(("conflicting_shape", CONFLICTING_SHAPE_PENALTY))
    if "allOf" in value and "anyOf" in value:
        contributions.append(("conflicting_composition", CONFLICTING_COMPOSITION_PENALTY))

    return SchemaLikenessReport(
        score=sum(delta for _, delta in contributions),
        signals=tuple(name for name, _ in contributions),
        marker=False,
    )


def _is_ordered_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))

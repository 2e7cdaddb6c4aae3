"""Schema-likeness scoring tests."""

from __future__ import annotations

import pytest
from schema_materializer.schema_classification import (
    SCHEMA_LIKENESS_THRESHOLD,
    explain_json_schema_likeness,
    is_json_schema_like,
    score_json_schema_likeness,
)


@pytest.mark.parametrize(
    "value",
    [None, "object", 3, 2.5, True, [], [{"type": "object", "properties": {}}], ("type",)],
)
def test_non_mapping_values_are_never_schema_like(value: object) -> None:
    assert is_json_schema_like(value) is False
    assert score_json_schema_likeness(value) == 0


def test_marker_short_circuits_scoring() -> None:
    report = explain_json_schema_likeness({"type": "string", "isJsonSchema": True})

    assert report.marker is True
    assert report.is_schema_like is True
    assert is_json_schema_like({"isJsonSchema": True}) is True


def test_marker_must_be_boolean_true() -> None:
    assert is_json_schema_like({"type": "string", "isJsonSchema": "true"}) is False
    assert is_json_schema_like({"type": "string", "isJsonSchema": 1}) is False


def test_object_schema_with_properties_reaches_threshold() -> None:
    schema = {"type": "object", "properties": {"name": {"type": "string"}}}

    report = explain_json_schema_likeness(schema)

    assert report.signals == ("recognized_type", "object_coherence", "properties")
    assert report.score == SCHEMA_LIKENESS_THRESHOLD
    assert report.is_schema_like is True


def test_schema_uri_adds_two_points() -> None:
    schema = {"$schema": "http://json-schema.org/draft-07/schema#", "type": "string"}

    assert score_json_schema_likeness(schema) == 3
    assert is_json_schema_like(schema) is True


def test_unknown_schema_uri_scores_nothing() -> None:
    assert score_json_schema_likeness({"$schema": "https://example.com/schema"}) == 0


def test_array_coherence_bonus() -> None:
    schema = {"type": "array", "items": {"type": "string"}}

    report = explain_json_schema_likeness(schema)

    assert report.signals == ("recognized_type", "array_coherence")
    assert report.score == 2


def test_minimal_schemas_are_known_false_negatives() -> None:
    # Valid schemas that stay below the threshold without the marker.
    assert is_json_schema_like({"type": "string"}) is False
    assert is_json_schema_like({"type": "array", "items": {"type": "string"}}) is False
    assert is_json_schema_like({"type": "object"}) is False


def test_ordinary_data_shaped_like_a_schema_is_a_known_false_positive() -> None:
    record = {"type": "object", "properties": {"color": "red"}, "required": ["color"]}

    assert score_json_schema_likeness(record) == 4
    assert is_json_schema_like(record) is True


def test_required_must_be_an_ordered_sequence() -> None:
    assert score_json_schema_likeness({"required": ["a"]}) == 1
    assert score_json_schema_likeness({"required": ("a",)}) == 1
    assert score_json_schema_likeness({"required": "a"}) == 0
    assert score_json_schema_likeness({"required": True}) == 0


def test_each_composition_keyword_counts_once() -> None:
    schema = {"anyOf": [], "oneOf": [], "not": {}, "$ref": "#/a", "definitions": {}}

    assert score_json_schema_likeness(schema) == 5


def test_conflicting_shape_penalty() -> None:
    assert score_json_schema_likeness({"properties": {}, "items": {}}) == 0


def test_conflicting_composition_penalty() -> None:
    assert score_json_schema_likeness({"allOf": [], "anyOf": []}) == 1


def test_both_penalties_stack() -> None:
    value = {"properties": {}, "items": {}, "allOf": [], "anyOf": []}

    report = explain_json_schema_likeness(value)

    assert report.score == 1
    assert "conflicting_shape" in report.signals
    assert "conflicting_composition" in report.signals


def test_unrecognized_or_unhashable_type_values_do_not_score() -> None:
    assert score_json_schema_likeness({"type": "tool-call"}) == 0
    assert score_json_schema_likeness({"type": ["object", "null"], "properties": {}}) == 1
    assert score_json_schema_likeness({"type": {"nested": True}}) == 0


def test_chat_messages_are_not_schema_like() -> None:
    assert is_json_schema_like({"role": "user", "content": "hi"}) is False
    assert is_json_schema_like({"type": "text", "text": "hello"}) is False

"""Materialize a large real-world tool schema and validate turns against it."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from schema_materializer.schema_classification import is_json_schema_like
from schema_materializer.schema_materialization import unsafe_json_schema_to_validator

_SAMPLE_PATH = Path(__file__).resolve().parents[3] / "samples" / "tutor-turn-schema.json"


@pytest.fixture(name="tutor_schema")
def fixture_tutor_schema() -> dict:
    return json.loads(_SAMPLE_PATH.read_text(encoding="utf-8"))


def test_sample_is_classified_as_schema_like(tutor_schema: dict) -> None:
    assert is_json_schema_like(tutor_schema) is True


def test_minimal_turn_round_trips(tutor_schema: dict) -> None:
    validator = unsafe_json_schema_to_validator(tutor_schema)
    turn = {"message": "Hello, world!", "outputs": {}}

    assert validator.parse(turn) == turn


def test_invalid_turn_is_rejected(tutor_schema: dict) -> None:
    validator = unsafe_json_schema_to_validator(tutor_schema)

    with pytest.raises(ValidationError):
        validator.parse({"message": 1, "outputs": {"alterStatus": "invalid"}})


def test_status_enum_is_enforced(tutor_schema: dict) -> None:
    validator = unsafe_json_schema_to_validator(tutor_schema)

    accepted = validator.parse({"message": "ok", "outputs": {"alterStatus": "teaching"}})

    assert accepted == {"message": "ok", "outputs": {"alterStatus": "teaching"}}
    with pytest.raises(ValidationError):
        validator.parse({"message": "ok", "outputs": {"alterStatus": "invalid"}})


def test_unknown_output_keys_are_rejected(tutor_schema: dict) -> None:
    validator = unsafe_json_schema_to_validator(tutor_schema)

    with pytest.raises(ValidationError):
        validator.parse({"message": "ok", "outputs": {"launchRocket": True}})


def test_activity_discriminant_default_is_filled_in(tutor_schema: dict) -> None:
    validator = unsafe_json_schema_to_validator(tutor_schema)
    turn = {
        "message": "Let's begin.",
        "outputs": {
            "updateLesson": {
                "lessonName": "Photosynthesis",
                "updates": {"addActivities": [{"markdownContent": "# Light reactions"}]},
            }
        },
    }

    parsed = validator.parse(turn)

    activity = parsed["outputs"]["updateLesson"]["updates"]["addActivities"][0]
    assert activity == {"type": "slide", "markdownContent": "# Light reactions"}


def test_term_matching_activity_requires_two_pairs(tutor_schema: dict) -> None:
    validator = unsafe_json_schema_to_validator(tutor_schema)

    def turn_with(pairs: list[dict]) -> dict:
        activity = {"type": "term-matching", "termPairs": pairs}
        return {
            "message": "Match these.",
            "outputs": {
                "updateLesson": {
                    "lessonName": "Photosynthesis",
                    "updates": {"addActivities": [activity]},
                }
            },
        }

    pair = {"term": "Chlorophyll", "definition": "Green pigment"}

    assert validator.safe_parse(turn_with([pair, pair])).success is True
    assert validator.safe_parse(turn_with([pair])).success is False

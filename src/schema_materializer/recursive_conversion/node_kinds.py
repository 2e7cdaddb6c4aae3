"""Per-node classification used by the recursive walk."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from schema_materializer.schema_classification import is_json_schema_like, is_validator_like


class NodeKind(str, Enum):
    """Role of one value inside a payload tree."""

    VALIDATOR = "validator"
    SCHEMA = "schema"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"


def classify_node(value: Any) -> NodeKind:
    """Classify `value` once; validators win over schema-likeness."""
    if is_validator_like(value):
        return NodeKind.VALIDATOR
    if is_json_schema_like(value):
        return NodeKind.SCHEMA
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    return NodeKind.SCALAR

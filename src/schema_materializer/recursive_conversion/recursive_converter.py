"""Recursive conversion between schema documents and validators inside payloads."""

from __future__ import annotations

from typing import Any

from schema_materializer.schema_classification import JSON_SCHEMA_MARKER_KEY
from schema_materializer.schema_materialization import (
    SchemaValidator,
    unsafe_json_schema_to_validator,
)

from .node_kinds import NodeKind
from .tree_walk import DEFAULT_MAX_DEPTH, transform_tree


def unsafe_recursive_json_schema_to_validator(
    value: Any, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> Any:
    """Replace every schema-like node inside `value` with a materialized validator.

    Everything else keeps its shape: scalars and validators come back by
    identity, containers are rebuilt around converted children. Running the
    conversion on its own output changes nothing.

    Raises:
      MaterializationError: If any schema node fails to materialize; the walk stops there.
      ConversionError: If the payload is cyclic or nests deeper than `max_depth`.
    """

    def materialize(kind: NodeKind, node: Any, path: str) -> Any:
        if kind is NodeKind.SCHEMA:
            return unsafe_json_schema_to_validator(node)
        return node

    return transform_tree(value, leaf=materialize, max_depth=max_depth)


def validator_to_json_schema(validator: Any) -> dict[str, Any]:
    """Return the schema of one validator, tagged so receivers rebuild it."""
    schema = SchemaValidator.wrap(validator).json_schema()
    schema[JSON_SCHEMA_MARKER_KEY] = True
    return schema


def recursive_validator_to_json_schema(value: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Replace every validator inside `value` with its tagged JSON schema.

    This is the transit form of a payload: it serializes to plain JSON, and
    `unsafe_recursive_json_schema_to_validator` turns it back into validators.
    """

    def dematerialize(kind: NodeKind, node: Any, path: str) -> Any:
        if kind is NodeKind.VALIDATOR:
            return validator_to_json_schema(node)
        return node

    return transform_tree(value, leaf=dematerialize, max_depth=max_depth)


def find_validators(value: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> list[tuple[str, Any]]:
    """List `(path, validator)` pairs in walk order, e.g. `$.messages[0].schema`."""
    found: list[tuple[str, Any]] = []

    def collect(kind: NodeKind, node: Any, path: str) -> Any:
        if kind is NodeKind.VALIDATOR:
            found.append((path, node))
        return node

    transform_tree(value, leaf=collect, max_depth=max_depth)
    return found
